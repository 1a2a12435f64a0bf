"""
Delete Employee Use Case

Hard delete of an employee and everything it owns.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.blob_store import DocumentStorage, StorageError, StoredBlob
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, UserRole

from .dtos import DeleteEmployeeResponse

logger = logging.getLogger(__name__)


class DeleteEmployeeUseCase:
    """
    Use case for deleting an employee.

    Business Rules:
    - Admin only
    - Owned collections, documents, drafts and requests are deleted with it
    - The linked account is unlinked and disabled, not deleted
    - Document blobs are removed after commit; failures are logged
    """

    def __init__(self, uow: UnitOfWork, storage: Optional[DocumentStorage] = None):
        self.uow = uow
        self.storage = storage

    async def execute(
        self, user_id: UUID, role: str, employee_id: UUID
    ) -> Result[DeleteEmployeeResponse]:
        if role != UserRole.admin.value:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only admins can delete employees")
            )

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            blobs = [
                StoredBlob(document.storage_type, document.storage_key)
                for document in await self.uow.documents.get_by_employee(
                    employee_id, include_archived=True
                )
            ]

            user = await self.uow.users.get_by_employee_id(employee_id)
            if user is not None:
                user.employee_id = None
                user.is_active = False
                await self.uow.users.update(user)

            await self.uow.employees.delete(employee_id)

            audit = AuditEvent(
                entity_type="employee",
                entity_id=employee_id,
                performed_by=user_id,
                action="employee_deleted",
                event_metadata={
                    "name": employee.full_name,
                    "work_email": employee.work_email,
                    "documents": len(blobs),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Employee {employee_id} deleted by {user_id}")

        if self.storage is not None:
            for blob in blobs:
                try:
                    await self.storage.remove(blob)
                except StorageError as e:
                    logger.warning(f"Orphaned blob {blob.key} left in storage: {e}")

        return Return.ok(
            DeleteEmployeeResponse(
                id=str(employee_id), deleted=True, documents_removed=len(blobs)
            )
        )
