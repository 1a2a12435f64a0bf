"""
Onboarding Use Cases

Multi-step onboarding form: drafts, step navigation and submission.
"""

from .dtos import (
    CompletionStatus,
    MyOnboardingResponse,
    SaveDraftResponse,
    StepValidationResponse,
    SubmitOnboardingResponse,
)
from .get_my_onboarding_use_case import GetMyOnboardingUseCase
from .save_draft_use_case import SaveDraftUseCase
from .submit_onboarding_use_case import SubmitOnboardingUseCase
from .validate_step_use_case import ValidateStepUseCase

__all__ = [
    "GetMyOnboardingUseCase",
    "SaveDraftUseCase",
    "ValidateStepUseCase",
    "SubmitOnboardingUseCase",
    "CompletionStatus",
    "MyOnboardingResponse",
    "SaveDraftResponse",
    "StepValidationResponse",
    "SubmitOnboardingResponse",
]
