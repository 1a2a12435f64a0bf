from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import InformationRequest


class IInformationRequestRepository(ABC):
    """InformationRequest repository interface - application layer"""

    @abstractmethod
    async def create(self, request: InformationRequest) -> InformationRequest:
        """Create a new information request"""
        pass

    @abstractmethod
    async def get_pending_by_employee(self, employee_id: UUID) -> List[InformationRequest]:
        """Get open requests for an employee"""
        pass

    @abstractmethod
    async def mark_fulfilled(self, employee_id: UUID) -> int:
        """Close every open request of an employee"""
        pass
