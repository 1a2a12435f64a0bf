"""
Validate Step Use Case

Validates a single onboarding step before the client moves on.
"""

from typing import Any, Callable, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.completeness import gate_error, gate_status
from src.app.services.draft_reducer import merge_draft
from src.app.services.encryption import FieldEncryptor, reveal_draft
from src.app.services.onboarding_steps import (
    STEP_REGISTRY,
    CompletionGate,
    CompletionGateStep,
    OnboardingStep,
    ReviewStep,
    SchemaStep,
    next_step,
    validate_full_form,
    validate_schema_step,
)
from src.app.services.unit_of_work import UnitOfWork

from .dtos import StepValidationResponse


def validation_error(errors) -> Error:
    count = len(errors)
    return Error(
        "VALIDATION_FAILED",
        f"{count} field{'s' if count != 1 else ''} failed validation",
        details=[error.model_dump() for error in errors],
    )


async def _check_schema_step(
    uow: UnitOfWork, employee_id: UUID, definition: SchemaStep, state: Dict[str, Any]
) -> Optional[Error]:
    errors = validate_schema_step(definition, state)
    return validation_error(errors) if errors else None


async def _check_gate_step(
    uow: UnitOfWork, employee_id: UUID, definition: CompletionGateStep, state: Dict[str, Any]
) -> Optional[Error]:
    status = await gate_status(uow, employee_id, definition.gate)
    return None if status.complete else gate_error(definition.gate, status)


async def _check_review_step(
    uow: UnitOfWork, employee_id: UUID, definition: ReviewStep, state: Dict[str, Any]
) -> Optional[Error]:
    errors = validate_full_form(state)
    if errors:
        return validation_error(errors)
    for gate in CompletionGate:
        status = await gate_status(uow, employee_id, gate)
        if not status.complete:
            return gate_error(gate, status)
    return None


STEP_CHECKS: Dict[type, Callable] = {
    SchemaStep: _check_schema_step,
    CompletionGateStep: _check_gate_step,
    ReviewStep: _check_review_step,
}


class ValidateStepUseCase:
    """
    Use case for step navigation.

    Business Rules:
    - Only the requested step is validated
    - Form state = stored draft merged with the submitted state
    - Documents/forms steps are gated on persisted uploads and signed forms;
      client-supplied completion flags are ignored
    - Review validates the whole form and both gates
    """

    def __init__(self, uow: UnitOfWork, encryptor: Optional[FieldEncryptor] = None):
        self.uow = uow
        self.encryptor = encryptor or FieldEncryptor()

    async def execute(
        self,
        employee_id: UUID,
        step: str,
        form_state: Optional[Dict[str, Any]] = None,
    ) -> Result[StepValidationResponse]:
        try:
            step_id = OnboardingStep(step)
        except ValueError:
            return Return.err(Error("INVALID_STEP", f"Unknown onboarding step: {step}"))

        definition = STEP_REGISTRY[step_id]

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            draft = await self.uow.drafts.get_by_employee(employee_id)
            state = merge_draft(
                reveal_draft(draft.data if draft else None, self.encryptor), form_state
            )

            check = STEP_CHECKS[type(definition)]
            error = await check(self.uow, employee_id, definition, state)
            if error is not None:
                return Return.err(error)

            following = next_step(step_id)
            return Return.ok(
                StepValidationResponse(
                    valid=True,
                    step=step_id.value,
                    next_step=following.value if following else None,
                )
            )
