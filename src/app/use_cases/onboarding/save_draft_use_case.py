"""
Save Draft Use Case

Persists partial onboarding form state without schema validation.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.draft_reducer import merge_draft
from src.app.services.encryption import FieldEncryptor, masked_draft, seal_draft_patch
from src.app.services.onboarding_steps import OnboardingStep
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import OnboardingDraft
from src.domain.lifecycle import LifecycleAction, can_transition

from .dtos import SaveDraftResponse


class SaveDraftUseCase:
    """
    Use case for saving an onboarding draft.

    Business Rules:
    - No schema validation; any shape is accepted
    - Keys omitted from the patch keep their stored values
    - Only while the onboarding can still be submitted
      (prospective or information_needed)
    - The SSN is stored encrypted and echoed back masked
    """

    def __init__(self, uow: UnitOfWork, encryptor: Optional[FieldEncryptor] = None):
        self.uow = uow
        self.encryptor = encryptor or FieldEncryptor()

    async def execute(
        self,
        employee_id: UUID,
        data: Dict[str, Any],
        current_step: Optional[str] = None,
    ) -> Result[SaveDraftResponse]:
        if current_step is not None:
            try:
                current_step = OnboardingStep(current_step).value
            except ValueError:
                message = f"Unknown onboarding step: {current_step}"
                return Return.err(
                    Error(
                        "VALIDATION_FAILED",
                        message,
                        details=[{"field": "current_step", "message": message}],
                    )
                )

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            if not can_transition(LifecycleAction.submit, employee.status):
                return Return.err(
                    Error(
                        "ONBOARDING_LOCKED",
                        f"Onboarding can no longer be edited (status: {employee.status.value})",
                    )
                )

            draft = await self.uow.drafts.get_by_employee(employee_id)
            if draft is None:
                draft = OnboardingDraft(employee_id=employee_id, data={})

            draft.data = merge_draft(draft.data, seal_draft_patch(data or {}, self.encryptor))
            if current_step is not None:
                draft.current_step = current_step
            draft.updated_at = utcnow()
            draft = await self.uow.drafts.save(draft)

            await self.uow.commit()

            return Return.ok(
                SaveDraftResponse(
                    employee_id=str(employee_id),
                    current_step=draft.current_step,
                    updated_at=draft.updated_at.isoformat(),
                    data=masked_draft(draft.data, self.encryptor),
                )
            )
