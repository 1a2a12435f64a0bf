"""
License and Certification Entities

Credentials with an expiration date, tracked by the compliance engine.
"""

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel, UniqueConstraint

from .enums import LicenseStatus


class StateLicense(SQLModel, table=True):
    """
    State-issued professional license.

    Business Rules:
    - license_number is unique within its issuing state
    - status is a cache refreshed from expiration_date
    """

    __tablename__ = "state_licenses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    license_number: str = Field(max_length=50)
    state: str = Field(max_length=50)
    issue_date: Optional[date] = Field(default=None)
    expiration_date: Optional[date] = Field(default=None, index=True)
    status: LicenseStatus = Field(default=LicenseStatus.active)
    responsible_person: Optional[str] = Field(default=None, max_length=100)

    __table_args__ = (
        UniqueConstraint("state", "license_number", name="uq_state_license_number"),
    )


class DEALicense(SQLModel, table=True):
    """DEA registration. Registration numbers are globally unique."""

    __tablename__ = "dea_licenses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    license_number: str = Field(max_length=50, unique=True)
    issue_date: Optional[date] = Field(default=None)
    expiration_date: Optional[date] = Field(default=None, index=True)
    status: LicenseStatus = Field(default=LicenseStatus.active)
    responsible_person: Optional[str] = Field(default=None, max_length=100)


class BoardCertification(SQLModel, table=True):
    __tablename__ = "board_certifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    board_name: str = Field(max_length=100)
    certification: Optional[str] = Field(default=None, max_length=100)
    issue_date: Optional[date] = Field(default=None)
    expiration_date: Optional[date] = Field(default=None, index=True)
    status: LicenseStatus = Field(default=LicenseStatus.active)
    responsible_person: Optional[str] = Field(default=None, max_length=100)
