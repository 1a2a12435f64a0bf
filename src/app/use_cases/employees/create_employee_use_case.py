"""
Create Employee Use Case

Direct creation of an employee record by HR, without an invitation.
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, TypeAdapter, ValidationError

from libs.result import Error, Result, Return
from src.app.services.access import is_staff
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Employee, EmployeeStatus

from .dtos import EmployeeSummary

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


class CreateEmployeeUseCase:
    """
    Use case for creating an employee directly.

    Business Rules:
    - Only admin/hr
    - First and last name required
    - Work email, when given, must be valid and unused (CONFLICT otherwise)
    - New employees start as prospective
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        role: str,
        first_name: str,
        last_name: str,
        work_email: Optional[str] = None,
        personal_email: Optional[str] = None,
        job_title: Optional[str] = None,
        work_location: Optional[str] = None,
        cell_phone: Optional[str] = None,
    ) -> Result[EmployeeSummary]:
        if not is_staff(role):
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only admin and HR users can create employees")
            )

        details = []
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        if not first_name:
            details.append({"field": "first_name", "message": "First Name is required"})
        if not last_name:
            details.append({"field": "last_name", "message": "Last Name is required"})

        emails = {"work_email": work_email, "personal_email": personal_email}
        for field, value in emails.items():
            if value:
                try:
                    emails[field] = _email_adapter.validate_python(value.strip()).lower()
                except ValidationError:
                    details.append({"field": field, "message": f"{value} is not a valid email"})
            else:
                emails[field] = None

        if details:
            return Return.err(
                Error("VALIDATION_FAILED", "Employee data is invalid", details=details)
            )

        async with self.uow:
            if emails["work_email"]:
                existing = await self.uow.employees.get_by_work_email(emails["work_email"])
                if existing is not None:
                    message = f"Work email {emails['work_email']} is already in use"
                    return Return.err(
                        Error(
                            "CONFLICT",
                            message,
                            reason="work_email",
                            details=[{"field": "work_email", "message": message}],
                        )
                    )

            employee = Employee(
                first_name=first_name,
                last_name=last_name,
                work_email=emails["work_email"],
                personal_email=emails["personal_email"],
                job_title=job_title,
                work_location=work_location,
                cell_phone=cell_phone,
                status=EmployeeStatus.prospective,
            )
            employee = await self.uow.employees.create(employee)

            audit = AuditEvent(
                entity_type="employee",
                entity_id=employee.id,
                performed_by=user_id,
                action="employee_created",
                event_metadata={"work_email": employee.work_email},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Employee {employee.id} created by {user_id}")

            return Return.ok(
                EmployeeSummary(
                    id=str(employee.id),
                    first_name=employee.first_name,
                    last_name=employee.last_name,
                    work_email=employee.work_email,
                    job_title=employee.job_title,
                    work_location=employee.work_location,
                    status=employee.status.value,
                    created_at=employee.created_at.isoformat(),
                )
            )
