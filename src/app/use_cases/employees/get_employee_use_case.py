"""
Get Employee Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access import can_access_employee
from src.app.services.encryption import EncryptionError, FieldEncryptor, mask_ssn
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.documents.mappers import to_document_response

from .dtos import EmployeeDetailsResponse

logger = logging.getLogger(__name__)

# Columns never exposed through the profile
HIDDEN_FIELDS = {"ssn_encrypted"}


class GetEmployeeUseCase:
    """
    Use case for reading a full employee record.

    Staff may read any employee, a prospective employee only their own.
    The SSN is decrypted only to be masked (***-**-1234).
    """

    def __init__(self, uow: UnitOfWork, encryptor: Optional[FieldEncryptor] = None):
        self.uow = uow
        self.encryptor = encryptor or FieldEncryptor()

    async def execute(
        self, role: str, actor_employee_id: Optional[UUID], employee_id: UUID
    ) -> Result[EmployeeDetailsResponse]:
        if not can_access_employee(role, actor_employee_id, employee_id):
            return Return.err(
                Error("INSUFFICIENT_ROLE", "You can only view your own employee record")
            )

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            ssn_masked = None
            if employee.ssn_encrypted:
                try:
                    ssn_masked = mask_ssn(self.encryptor.decrypt(employee.ssn_encrypted))
                except EncryptionError:
                    logger.warning(f"SSN of employee {employee_id} could not be decrypted")

            collections = await self.uow.records.get_all(employee_id)
            documents = await self.uow.documents.get_by_employee(employee_id)

            return Return.ok(
                EmployeeDetailsResponse(
                    id=str(employee.id),
                    status=employee.status.value,
                    ssn_masked=ssn_masked,
                    profile=employee.model_dump(mode="json", exclude=HIDDEN_FIELDS),
                    collections={
                        name: [
                            record.model_dump(mode="json", exclude={"employee_id"})
                            for record in records
                        ]
                        for name, records in collections.items()
                    },
                    documents=[to_document_response(item) for item in documents],
                )
            )
