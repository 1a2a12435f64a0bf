from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.form_assignment_repository import IFormAssignmentRepository
from src.domain.entities import FormAssignment


class FormAssignmentRepository(IFormAssignmentRepository):
    """FormAssignment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_employee(self, employee_id: UUID) -> List[FormAssignment]:
        """Get forms assigned to an employee"""
        stmt = select(FormAssignment).where(FormAssignment.employee_id == employee_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, assignment: FormAssignment) -> FormAssignment:
        """Assign a form"""
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment
