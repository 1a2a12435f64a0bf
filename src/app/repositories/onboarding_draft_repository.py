from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import OnboardingDraft


class IOnboardingDraftRepository(ABC):
    """OnboardingDraft repository interface - application layer"""

    @abstractmethod
    async def get_by_employee(self, employee_id: UUID) -> Optional[OnboardingDraft]:
        """Get the draft of an employee"""
        pass

    @abstractmethod
    async def save(self, draft: OnboardingDraft) -> OnboardingDraft:
        """Create or update a draft"""
        pass

    @abstractmethod
    async def delete_by_employee(self, employee_id: UUID) -> None:
        """Remove the draft of an employee"""
        pass
