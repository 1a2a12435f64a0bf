"""
Get My Onboarding Use Case

Loads the signed-in employee's onboarding state so the form can resume.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.completeness import documents_status, forms_status
from src.app.services.encryption import FieldEncryptor, masked_draft
from src.app.services.onboarding_steps import STEP_ORDER
from src.app.services.unit_of_work import UnitOfWork

from .dtos import CompletionStatus, InformationRequestSummary, MyOnboardingResponse


class GetMyOnboardingUseCase:
    """
    Use case for resuming onboarding.

    Returns the saved draft, the step the employee stopped on, server-derived
    document/form completeness and any open HR information requests.
    A drafted SSN is only returned masked.
    """

    def __init__(self, uow: UnitOfWork, encryptor: Optional[FieldEncryptor] = None):
        self.uow = uow
        self.encryptor = encryptor or FieldEncryptor()

    async def execute(self, employee_id: UUID) -> Result[MyOnboardingResponse]:
        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            draft = await self.uow.drafts.get_by_employee(employee_id)
            documents = await documents_status(self.uow, employee_id)
            forms = await forms_status(self.uow, employee_id)
            requests = await self.uow.information_requests.get_pending_by_employee(
                employee_id
            )

            return Return.ok(
                MyOnboardingResponse(
                    employee_id=str(employee.id),
                    status=employee.status.value,
                    first_name=employee.first_name,
                    last_name=employee.last_name,
                    work_email=employee.work_email,
                    current_step=draft.current_step if draft else None,
                    steps=[step.value for step in STEP_ORDER],
                    draft=masked_draft(draft.data if draft else None, self.encryptor),
                    completion=CompletionStatus(
                        documents_complete=documents.complete,
                        documents_remaining=documents.remaining,
                        missing_documents=documents.missing,
                        forms_complete=forms.complete,
                        forms_remaining=forms.remaining,
                        missing_forms=forms.missing,
                    ),
                    information_requests=[
                        InformationRequestSummary(
                            id=str(request.id),
                            requested_items=request.requested_items or [],
                            message=request.message,
                            due_date=request.due_date.isoformat()
                            if request.due_date
                            else None,
                            created_at=request.created_at.isoformat(),
                        )
                        for request in requests
                    ],
                )
            )
