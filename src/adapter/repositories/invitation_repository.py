from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by SHA-256 token hash"""
        stmt = select(Invitation).where(Invitation.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Get the pending invitation for an email, if any"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.email == email,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_employee_id(self, employee_id: UUID) -> Optional[Invitation]:
        """Get the accepted invitation that created an employee"""
        stmt = select(Invitation).where(Invitation.employee_id == employee_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def mark_accepted(
        self, invitation_id: UUID, employee_id: UUID, accepted_at: datetime
    ) -> bool:
        """Conditional pending -> accepted update; only one redemption can win"""
        stmt = (
            update(Invitation)
            .where(
                Invitation.id == invitation_id,
                Invitation.status == InvitationStatus.pending,
            )
            .values(
                status=InvitationStatus.accepted,
                accepted_at=accepted_at,
                employee_id=employee_id,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:
            return False

        reload = (
            select(Invitation)
            .where(Invitation.id == invitation_id)
            .execution_options(populate_existing=True)
        )
        await self.session.exec(reload)
        return True
