"""
Onboarding Use Case DTOs (Data Transfer Objects)

Responses for draft saving, step navigation and submission.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FieldErrorDTO(BaseModel):
    field: str
    message: str


class SaveDraftResponse(BaseModel):
    """Response for save draft use case"""

    employee_id: str
    current_step: Optional[str]
    updated_at: str
    data: Dict[str, Any]


class StepValidationResponse(BaseModel):
    """Response for step navigation"""

    valid: bool
    step: str
    next_step: Optional[str]
    errors: List[FieldErrorDTO] = Field(default_factory=list)


class CompletionStatus(BaseModel):
    """Server-derived completeness of the gated steps"""

    documents_complete: bool
    documents_remaining: int
    missing_documents: List[str]
    forms_complete: bool
    forms_remaining: int
    missing_forms: List[str]


class InformationRequestSummary(BaseModel):
    id: str
    requested_items: List[str]
    message: Optional[str]
    due_date: Optional[str]
    created_at: str


class MyOnboardingResponse(BaseModel):
    """Onboarding overview for the signed-in prospective employee"""

    employee_id: str
    status: str
    first_name: str
    last_name: str
    work_email: Optional[str]
    current_step: Optional[str]
    steps: List[str]
    draft: Dict[str, Any]
    completion: CompletionStatus
    information_requests: List[InformationRequestSummary]


class SubmitOnboardingResponse(BaseModel):
    """Response for submit onboarding use case"""

    employee_id: str
    status: str
    submitted_at: str
    message: str
