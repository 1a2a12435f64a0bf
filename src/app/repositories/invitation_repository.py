from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by SHA-256 token hash"""
        pass

    @abstractmethod
    async def get_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Get the pending invitation for an email, if any"""
        pass

    @abstractmethod
    async def get_by_employee_id(self, employee_id: UUID) -> Optional[Invitation]:
        """Get the accepted invitation that created an employee"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: UUID, employee_id: UUID, accepted_at: datetime
    ) -> bool:
        """Move a pending invitation to accepted; False if it was no longer pending"""
        pass
