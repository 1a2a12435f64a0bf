"""
Employee-owned Records

Collections owned by an Employee. They are only written through the
onboarding submission, which replaces each collection as a whole.
"""

from datetime import date
from typing import Dict, Optional, Type
from uuid import UUID, uuid4

from sqlmodel import Column, Field, SQLModel, Text

from .license import BoardCertification, DEALicense, StateLicense


class Education(SQLModel, table=True):
    __tablename__ = "educations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    education_type: Optional[str] = Field(default=None, max_length=50)
    school_institution: str = Field(max_length=100)
    degree: Optional[str] = Field(default=None, max_length=50)
    specialty_major: Optional[str] = Field(default=None, max_length=100)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)


class Employment(SQLModel, table=True):
    __tablename__ = "employments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    employer: str = Field(max_length=100)
    position: Optional[str] = Field(default=None, max_length=100)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)  # null for current position
    description: Optional[str] = Field(default=None, sa_column=Column(Text))


class PeerReference(SQLModel, table=True):
    __tablename__ = "peer_references"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    reference_name: str = Field(max_length=100)
    contact_info: Optional[str] = Field(default=None, max_length=100)
    relationship: Optional[str] = Field(default=None, max_length=100)
    comments: Optional[str] = Field(default=None, sa_column=Column(Text))


class EmergencyContact(SQLModel, table=True):
    __tablename__ = "emergency_contacts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    name: str = Field(max_length=100)
    relationship: Optional[str] = Field(default=None, max_length=50)
    phone: str = Field(max_length=20)
    email: Optional[str] = Field(default=None, max_length=255)


class TaxForm(SQLModel, table=True):
    __tablename__ = "tax_forms"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    form_type: str = Field(max_length=50)  # W-4, I-9, 1099...
    submitted_date: Optional[date] = Field(default=None)
    status: Optional[str] = Field(default=None, max_length=50)


class Training(SQLModel, table=True):
    __tablename__ = "trainings"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    training_type: str = Field(max_length=100)
    provider: Optional[str] = Field(default=None, max_length=100)
    completion_date: Optional[date] = Field(default=None)
    expiration_date: Optional[date] = Field(default=None)
    credits: Optional[float] = Field(default=None)


class PayerEnrollment(SQLModel, table=True):
    __tablename__ = "payer_enrollments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    payer_name: str = Field(max_length=100)
    enrollment_id: Optional[str] = Field(default=None, max_length=50)
    enrollment_date: Optional[date] = Field(default=None)
    status: Optional[str] = Field(default=None, max_length=50)


# Collection name -> table, for every replace-all collection
OWNED_COLLECTIONS: Dict[str, Type[SQLModel]] = {
    "educations": Education,
    "employments": Employment,
    "state_licenses": StateLicense,
    "dea_licenses": DEALicense,
    "board_certifications": BoardCertification,
    "peer_references": PeerReference,
    "emergency_contacts": EmergencyContact,
    "tax_forms": TaxForm,
    "trainings": Training,
    "payer_enrollments": PayerEnrollment,
}
