from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import FormAssignment


class IFormAssignmentRepository(ABC):
    """FormAssignment repository interface - application layer"""

    @abstractmethod
    async def get_by_employee(self, employee_id: UUID) -> List[FormAssignment]:
        """Get forms assigned to an employee"""
        pass

    @abstractmethod
    async def create(self, assignment: FormAssignment) -> FormAssignment:
        """Assign a form"""
        pass
