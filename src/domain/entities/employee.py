"""
Employee Entity

Root aggregate of the onboarding lifecycle.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utcnow

from .enums import BackgroundCheckStatus, EmployeeStatus


class Employee(SQLModel, table=True):
    """
    Employee entity - personal, professional and credential data.

    Business Rules:
    - work_email and npi_number are unique across employees
    - SSN is stored encrypted and only ever returned masked
    - status only changes through lifecycle transitions
    - Hard delete is admin-only and cascades to owned records
    """

    __tablename__ = "employees"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Personal information
    first_name: str = Field(max_length=50)
    middle_name: Optional[str] = Field(default=None, max_length=50)
    last_name: str = Field(max_length=50)
    date_of_birth: Optional[date] = Field(default=None)
    gender: Optional[str] = Field(default=None, max_length=20)
    personal_email: Optional[str] = Field(default=None, max_length=255)
    work_email: Optional[str] = Field(default=None, max_length=255, unique=True)
    cell_phone: Optional[str] = Field(default=None, max_length=20)
    work_phone: Optional[str] = Field(default=None, max_length=20)

    home_address1: Optional[str] = Field(default=None, max_length=100)
    home_address2: Optional[str] = Field(default=None, max_length=100)
    home_city: Optional[str] = Field(default=None, max_length=50)
    home_state: Optional[str] = Field(default=None, max_length=50)
    home_zip: Optional[str] = Field(default=None, max_length=10)

    birth_city: Optional[str] = Field(default=None, max_length=50)
    birth_state: Optional[str] = Field(default=None, max_length=50)
    birth_country: Optional[str] = Field(default=None, max_length=50)

    drivers_license_number: Optional[str] = Field(default=None, max_length=50)
    dl_state_issued: Optional[str] = Field(default=None, max_length=50)
    dl_issue_date: Optional[date] = Field(default=None)
    dl_expiration_date: Optional[date] = Field(default=None)

    ssn_encrypted: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Professional information
    job_title: Optional[str] = Field(default=None, max_length=100)
    work_location: Optional[str] = Field(default=None, max_length=100, index=True)
    qualification: Optional[str] = Field(default=None, sa_column=Column(Text))
    npi_number: Optional[str] = Field(default=None, max_length=20, unique=True)
    enumeration_date: Optional[date] = Field(default=None)

    # Credentials
    medical_license_number: Optional[str] = Field(default=None, max_length=50)
    substance_use_license_number: Optional[str] = Field(default=None, max_length=50)
    substance_use_qualification: Optional[str] = Field(
        default=None, sa_column=Column(Text)
    )
    mental_health_license_number: Optional[str] = Field(default=None, max_length=50)
    mental_health_qualification: Optional[str] = Field(
        default=None, sa_column=Column(Text)
    )
    medicaid_number: Optional[str] = Field(default=None, max_length=50)
    medicare_ptan_number: Optional[str] = Field(default=None, max_length=50)

    caqh_provider_id: Optional[str] = Field(default=None, max_length=50)
    caqh_issue_date: Optional[date] = Field(default=None)
    caqh_last_attestation_date: Optional[date] = Field(default=None)
    caqh_enabled: bool = Field(default=False)
    caqh_reattestation_due_date: Optional[date] = Field(default=None)

    # Lifecycle
    status: EmployeeStatus = Field(default=EmployeeStatus.prospective)
    background_check_status: BackgroundCheckStatus = Field(
        default=BackgroundCheckStatus.not_started
    )

    submitted_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    approved_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    approved_by: Optional[UUID] = Field(default=None)
    approval_comments: Optional[str] = Field(default=None, sa_column=Column(Text))
    rejected_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    rejected_by: Optional[UUID] = Field(default=None)
    rejection_reason: Optional[str] = Field(default=None, sa_column=Column(Text))
    rejection_details: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_employee_status", "status"),
        Index("idx_employee_submitted_at", "submitted_at"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
