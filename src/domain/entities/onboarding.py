"""
Onboarding Workflow Entities

Drafts, e-signature form assignments and HR information requests.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel, Text

from src.domain.base import utcnow

from .enums import FormStatus, InformationRequestStatus


class OnboardingDraft(SQLModel, table=True):
    """
    Saved, unvalidated onboarding form state.

    Business Rules:
    - One draft per employee
    - data may have any shape; validation happens on navigation and submit
    - Removed once the onboarding is submitted
    """

    __tablename__ = "onboarding_drafts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(
        foreign_key="employees.id", ondelete="CASCADE", unique=True, index=True
    )

    data: dict = Field(default_factory=dict, sa_column=Column(JSON))
    current_step: Optional[str] = Field(default=None, max_length=50)

    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class FormAssignment(SQLModel, table=True):
    """E-signature form assigned to an employee"""

    __tablename__ = "form_assignments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    template_name: str = Field(max_length=100)
    is_required: bool = Field(default=True)
    status: FormStatus = Field(default=FormStatus.pending)

    completed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class InformationRequest(SQLModel, table=True):
    """
    HR request for additional information.

    Business Rules:
    - Created together with the pending_approval -> information_needed transition
    - Marked fulfilled when the employee resubmits
    """

    __tablename__ = "information_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    requested_items: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    message: Optional[str] = Field(default=None, sa_column=Column(Text))
    due_date: Optional[date] = Field(default=None)

    status: InformationRequestStatus = Field(default=InformationRequestStatus.pending)
    requested_by: Optional[UUID] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    fulfilled_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
