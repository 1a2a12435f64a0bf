"""
Onboarding API Routes

Self-service onboarding form for the signed-in prospective employee.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from libs.result import Error
from src.api.utils.errors import claim_uuid, raise_for_error
from src.app.services.notifier import Notifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.onboarding import (
    GetMyOnboardingUseCase,
    MyOnboardingResponse,
    SaveDraftResponse,
    SaveDraftUseCase,
    StepValidationResponse,
    SubmitOnboardingResponse,
    SubmitOnboardingUseCase,
    ValidateStepUseCase,
)
from src.depends import get_current_user, get_notifier, get_unit_of_work

router = APIRouter(prefix="/onboarding", tags=["Onboarding"])


class SaveDraftRequest(BaseModel):
    """Partial form state; omitted or null keys keep their saved value"""

    data: Dict[str, Any] = Field(default_factory=dict)
    current_step: Optional[str] = None


class ValidateStepRequest(BaseModel):
    step: str
    form_state: Dict[str, Any] = Field(default_factory=dict)


class SubmitOnboardingRequest(BaseModel):
    form_state: Dict[str, Any] = Field(default_factory=dict)


def _own_employee_id(current_user: dict) -> UUID:
    employee_id = claim_uuid(current_user, "employee_id")
    if employee_id is None:
        raise_for_error(
            Error("INSUFFICIENT_ROLE", "No onboarding is linked to this account")
        )
    return employee_id


@router.get(
    "/my-onboarding",
    status_code=status.HTTP_200_OK,
    response_model=MyOnboardingResponse,
)
async def get_my_onboarding(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Saved draft, current step, completion status and open HR requests"""
    result = await GetMyOnboardingUseCase(uow).execute(_own_employee_id(current_user))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/save-draft",
    status_code=status.HTTP_200_OK,
    response_model=SaveDraftResponse,
)
async def save_draft(
    request: SaveDraftRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Save partial form state without validation.

    Raises:
        - 400 Bad Request: ONBOARDING_LOCKED once the onboarding was submitted
        - 403 Forbidden: no onboarding linked to the account
    """
    result = await SaveDraftUseCase(uow).execute(
        _own_employee_id(current_user), request.data, request.current_step
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/validate-step",
    status_code=status.HTTP_200_OK,
    response_model=StepValidationResponse,
)
async def validate_step(
    request: ValidateStepRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate one step before moving on.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED (with field errors), INVALID_STEP,
                           DOCUMENTS_INCOMPLETE, FORMS_INCOMPLETE
    """
    result = await ValidateStepUseCase(uow).execute(
        _own_employee_id(current_user), request.step, request.form_state
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/submit",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmitOnboardingResponse,
)
async def submit_onboarding(
    request: SubmitOnboardingRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Submit the onboarding for HR approval.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED, DOCUMENTS_INCOMPLETE,
                           FORMS_INCOMPLETE, ONBOARDING_LOCKED
        - 409 Conflict: CONFLICT (work email, NPI or license already in use)
    """
    result = await SubmitOnboardingUseCase(uow, notifier).execute(
        UUID(current_user["user_id"]),
        _own_employee_id(current_user),
        request.form_state,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
