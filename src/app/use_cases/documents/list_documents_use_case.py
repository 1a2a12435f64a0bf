"""
List Documents Use Case
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access import can_access_employee, is_staff
from src.app.services.unit_of_work import UnitOfWork

from .dtos import DocumentListResponse
from .mappers import to_document_response


class ListDocumentsUseCase:
    """Documents of one employee, newest first; archived ones for staff only"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        role: str,
        actor_employee_id: Optional[UUID],
        employee_id: UUID,
        include_archived: bool = False,
    ) -> Result[DocumentListResponse]:
        if not can_access_employee(role, actor_employee_id, employee_id):
            return Return.err(
                Error("INSUFFICIENT_ROLE", "You can only view your own documents")
            )

        async with self.uow:
            documents = await self.uow.documents.get_by_employee(
                employee_id, include_archived=include_archived and is_staff(role)
            )
            return Return.ok(
                DocumentListResponse(
                    documents=[to_document_response(item) for item in documents],
                    total=len(documents),
                )
            )
