"""
Resend Invitation Use Case

Issues a fresh token and expiry for an unredeemed invitation.
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from config import ApplicationConfig
from src.app.services.notifier import Notification, Notifier, notify_safely
from src.app.services.security import generate_invitation_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, InvitationStatus, UserRole

from .create_invitation_use_case import invitation_url
from .dtos import ResendInvitationResponse


class ResendInvitationUseCase:
    """
    Use case for resending an invitation.

    Business Rules:
    - Only admin/hr
    - Accepted or cancelled invitations cannot be resent
    - Expired invitations are reopened unless another pending one exists
    - The previous token stops working
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[Notifier] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self, user_id: UUID, role: str, invitation_id: UUID
    ) -> Result[ResendInvitationResponse]:
        if role not in (UserRole.admin.value, UserRole.hr.value):
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only admin and HR users can resend invitations")
            )

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status == InvitationStatus.accepted:
                return Return.err(
                    Error("INVITATION_ALREADY_USED", "This invitation has already been used")
                )
            if invitation.status == InvitationStatus.cancelled:
                return Return.err(
                    Error("INVITATION_CANCELLED", "This invitation has been cancelled")
                )

            if invitation.status == InvitationStatus.expired:
                other = await self.uow.invitations.get_pending_by_email(invitation.email)
                if other is not None and other.id != invitation.id:
                    return Return.err(
                        Error(
                            "INVITE_ALREADY_EXISTS",
                            "A pending invitation already exists for this email",
                        )
                    )

            token = generate_invitation_token()
            invitation.token_hash = hash_token(token)
            invitation.status = InvitationStatus.pending
            invitation.expires_at = utcnow() + timedelta(
                days=ApplicationConfig.INVITATION_EXPIRY_DAYS
            )
            await self.uow.invitations.update(invitation)

            audit = AuditEvent(
                entity_type="invitation",
                entity_id=invitation.id,
                performed_by=user_id,
                action="invite_resent",
                event_metadata={"invited_email": invitation.email},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            url = invitation_url(token)
            await notify_safely(
                self.notifier,
                Notification(
                    kind="invitation",
                    recipient=invitation.email,
                    subject="Reminder: complete your onboarding",
                    body=f"Hello {invitation.first_name}, start your onboarding at {url}",
                    context={"invitation_id": str(invitation.id)},
                ),
            )

            return Return.ok(
                ResendInvitationResponse(
                    invite_id=str(invitation.id),
                    token=token,
                    invitation_url=url,
                    status=invitation.status.value,
                    expires_at=invitation.expires_at.isoformat(),
                )
            )
