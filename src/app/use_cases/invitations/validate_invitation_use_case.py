"""
Validate Invitation Use Case

Looks up an invitation by its token for the registration page.
"""

from datetime import datetime
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.security import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Invitation, InvitationStatus

from .dtos import InvitationDetails


def redeemability_error(invitation: Invitation, now: datetime) -> Optional[Error]:
    """Why an invitation cannot be redeemed, or None if it can"""
    if invitation.status == InvitationStatus.accepted:
        return Error(
            "INVITATION_ALREADY_USED", "This invitation has already been used"
        )
    if invitation.status == InvitationStatus.cancelled:
        return Error("INVITATION_CANCELLED", "This invitation has been cancelled")
    if invitation.status == InvitationStatus.expired or invitation.is_expired(now):
        return Error("INVITATION_EXPIRED", "This invitation has expired")
    return None


class ValidateInvitationUseCase:
    """
    Use case for checking an invitation token.

    Business Rules:
    - Unknown token -> INVITATION_NOT_FOUND
    - Expired, used or cancelled invitations are rejected
    - A pending invitation past its expiry is marked expired
    - The token itself is never returned
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[InvitationDetails]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(hash_token(token))
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            error = redeemability_error(invitation, utcnow())
            if error is not None:
                if (
                    error.code == "INVITATION_EXPIRED"
                    and invitation.status == InvitationStatus.pending
                ):
                    invitation.status = InvitationStatus.expired
                    await self.uow.invitations.update(invitation)
                    await self.uow.commit()
                return Return.err(error)

            return Return.ok(
                InvitationDetails(
                    email=invitation.email,
                    first_name=invitation.first_name,
                    last_name=invitation.last_name,
                    status=invitation.status.value,
                    expires_at=invitation.expires_at.isoformat(),
                )
            )
