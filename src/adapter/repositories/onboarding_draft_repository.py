from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.onboarding_draft_repository import IOnboardingDraftRepository
from src.domain.entities import OnboardingDraft


class OnboardingDraftRepository(IOnboardingDraftRepository):
    """OnboardingDraft repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_employee(self, employee_id: UUID) -> Optional[OnboardingDraft]:
        """Get the draft of an employee"""
        stmt = select(OnboardingDraft).where(OnboardingDraft.employee_id == employee_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save(self, draft: OnboardingDraft) -> OnboardingDraft:
        """Create or update a draft"""
        self.session.add(draft)
        await self.session.flush()
        await self.session.refresh(draft)
        return draft

    async def delete_by_employee(self, employee_id: UUID) -> None:
        """Remove the draft of an employee"""
        await self.session.execute(
            delete(OnboardingDraft).where(OnboardingDraft.employee_id == employee_id)
        )
        await self.session.flush()
