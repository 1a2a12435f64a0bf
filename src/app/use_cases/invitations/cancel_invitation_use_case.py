"""
Cancel Invitation Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, InvitationStatus, UserRole

from .dtos import CancelInvitationResponse


class CancelInvitationUseCase:
    """
    Use case for cancelling an invitation.

    Business Rules:
    - Only admin/hr
    - Accepted invitations cannot be cancelled
    - Cancelling is idempotent for already cancelled invitations
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, role: str, invitation_id: UUID
    ) -> Result[CancelInvitationResponse]:
        if role not in (UserRole.admin.value, UserRole.hr.value):
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only admin and HR users can cancel invitations")
            )

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status == InvitationStatus.accepted:
                return Return.err(
                    Error("INVITATION_ALREADY_USED", "This invitation has already been used")
                )

            if invitation.status != InvitationStatus.cancelled:
                invitation.status = InvitationStatus.cancelled
                await self.uow.invitations.update(invitation)

                audit = AuditEvent(
                    entity_type="invitation",
                    entity_id=invitation.id,
                    performed_by=user_id,
                    action="invite_cancelled",
                    event_metadata={"invited_email": invitation.email},
                )
                await self.uow.audit_events.create(audit)
                await self.uow.commit()

            return Return.ok(
                CancelInvitationResponse(
                    invite_id=str(invitation.id),
                    status=invitation.status.value,
                    cancelled_by=str(user_id),
                )
            )
