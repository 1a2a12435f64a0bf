"""
Create Invitation Use Case

Invites a prospective employee to start onboarding.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from config import ApplicationConfig
from src.app.services.notifier import Notification, Notifier, notify_safely
from src.app.services.security import generate_invitation_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, Invitation, InvitationStatus, UserRole

from .dtos import CreateInvitationResponse

logger = logging.getLogger(__name__)

# Roles each inviter role may grant
GRANTABLE_ROLES = {
    UserRole.admin: {UserRole.admin, UserRole.hr, UserRole.viewer},
    UserRole.hr: {UserRole.viewer},
}


def invitation_url(token: str) -> str:
    return f"{ApplicationConfig.INVITATION_BASE_URL.rstrip('/')}/{token}"


class CreateInvitationUseCase:
    """
    Use case for inviting a prospective employee.

    Business Rules:
    - Only admin/hr can invite; hr may only grant the viewer role
    - At most one pending, unexpired invitation per email
    - A stale pending invitation for the same email is marked expired first
    - Cannot invite an email that already belongs to an employee or account
    - Only the SHA-256 hash of the token is stored
    - Creates audit event, then sends the invitation (best-effort)
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[Notifier] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        inviter_user_id: UUID,
        inviter_role: str,
        email: str,
        first_name: str,
        last_name: str,
        role: str = UserRole.viewer.value,
    ) -> Result[CreateInvitationResponse]:
        """
        Execute create invitation use case.

        Args:
            inviter_user_id: User ID of the person sending the invite
            inviter_role: Role claim of the inviter
            email: Email address to invite
            first_name: Invitee first name
            last_name: Invitee last name
            role: Role the account receives once onboarding is approved

        Returns:
            Result with CreateInvitationResponse DTO, or Error
        """
        email = email.strip().lower()
        first_name = first_name.strip()
        last_name = last_name.strip()
        if not first_name or not last_name:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    "First name and last name are required",
                    details=[
                        {"field": name, "message": f"{label} is required"}
                        for name, label, value in (
                            ("first_name", "First name", first_name),
                            ("last_name", "Last name", last_name),
                        )
                        if not value
                    ],
                )
            )

        try:
            invited_role = UserRole(role)
        except ValueError:
            return Return.err(Error("INVALID_ROLE", f"Invalid role: {role}"))

        try:
            grantable = GRANTABLE_ROLES.get(UserRole(inviter_role), set())
        except ValueError:
            grantable = set()
        if not grantable:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only admin and HR users can send invitations")
            )
        if invited_role not in grantable:
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    f"You are not allowed to invite users with role {invited_role.value}",
                )
            )

        async with self.uow:
            existing_employee = await self.uow.employees.get_by_work_email(email)
            existing_user = await self.uow.users.get_by_email(email)
            if existing_employee or existing_user:
                return Return.err(
                    Error("EMPLOYEE_EXISTS", "An employee with this email already exists")
                )

            now = utcnow()
            pending = await self.uow.invitations.get_pending_by_email(email)
            if pending is not None:
                if not pending.is_expired(now):
                    return Return.err(
                        Error(
                            "INVITE_ALREADY_EXISTS",
                            "A pending invitation already exists for this email",
                        )
                    )
                pending.status = InvitationStatus.expired
                await self.uow.invitations.update(pending)

            token = generate_invitation_token()
            invitation = Invitation(
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=invited_role,
                token_hash=hash_token(token),
                invited_by=inviter_user_id,
                expires_at=now + timedelta(days=ApplicationConfig.INVITATION_EXPIRY_DAYS),
            )
            await self.uow.invitations.create(invitation)

            audit = AuditEvent(
                entity_type="invitation",
                entity_id=invitation.id,
                performed_by=inviter_user_id,
                action="invite_sent",
                event_metadata={"invited_email": email, "role": invited_role.value},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invitation {invitation.id} sent to {email}")
            url = invitation_url(token)
            await notify_safely(
                self.notifier,
                Notification(
                    kind="invitation",
                    recipient=email,
                    subject="You're invited to complete your onboarding",
                    body=f"Hello {first_name}, start your onboarding at {url}",
                    context={"invitation_id": str(invitation.id)},
                ),
            )

            return Return.ok(
                CreateInvitationResponse(
                    invite_id=str(invitation.id),
                    token=token,
                    invitation_url=url,
                    email=email,
                    first_name=first_name,
                    last_name=last_name,
                    role=invited_role.value,
                    status=invitation.status.value,
                    expires_at=invitation.expires_at.isoformat(),
                )
            )
