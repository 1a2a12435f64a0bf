"""
Onboarding Step Registry

The onboarding form is a closed set of steps dispatched through a lookup
table. Schema steps validate the form state against a pydantic model plus a
required-field policy; completion-gate steps are satisfied by persisted
documents or signed forms, never by client-supplied flags.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

NPI_PATTERN = r"^\d{10}$"
PHONE_PATTERN = r"^[\d\s()+-]*$"
SSN_PATTERN = r"^\d{3}-?\d{2}-?\d{4}$"

# Placeholder NPI that some clients pre-fill; treated as "not provided"
PLACEHOLDER_NPI = "1234567890"


class OnboardingStep(str, Enum):
    personal_info = "personal_info"
    professional_info = "professional_info"
    credentials = "credentials"
    education_employment = "education_employment"
    licenses = "licenses"
    certifications = "certifications"
    references_contacts = "references_contacts"
    tax_documentation = "tax_documentation"
    training_payer = "training_payer"
    documents = "documents"
    forms = "forms"
    review = "review"


class CompletionGate(str, Enum):
    documents = "documents"
    forms = "forms"


class FieldError(BaseModel):
    field: str
    message: str


# ============================================================================
# Schemas
# ============================================================================


class StepSchema(BaseModel):
    """Base for step schemas: unknown keys ignored, blank strings are absent"""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PersonalInfo(StepSchema):
    first_name: Optional[str] = Field(None, max_length=50)
    middle_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(None, max_length=20)
    ssn: Optional[str] = Field(None, pattern=SSN_PATTERN)
    personal_email: Optional[EmailStr] = None
    work_email: Optional[EmailStr] = None
    cell_phone: Optional[str] = Field(None, max_length=20, pattern=PHONE_PATTERN)
    work_phone: Optional[str] = Field(None, max_length=20, pattern=PHONE_PATTERN)
    home_address1: Optional[str] = Field(None, max_length=100)
    home_address2: Optional[str] = Field(None, max_length=100)
    home_city: Optional[str] = Field(None, max_length=50)
    home_state: Optional[str] = Field(None, max_length=50)
    home_zip: Optional[str] = Field(None, max_length=10)
    birth_city: Optional[str] = Field(None, max_length=50)
    birth_state: Optional[str] = Field(None, max_length=50)
    birth_country: Optional[str] = Field(None, max_length=50)
    drivers_license_number: Optional[str] = Field(None, max_length=50)
    dl_state_issued: Optional[str] = Field(None, max_length=50)
    dl_issue_date: Optional[date] = None
    dl_expiration_date: Optional[date] = None


class ProfessionalInfo(StepSchema):
    job_title: Optional[str] = Field(None, max_length=100)
    work_location: Optional[str] = Field(None, max_length=100)
    qualification: Optional[str] = None
    npi_number: Optional[str] = Field(None, pattern=NPI_PATTERN)
    enumeration_date: Optional[date] = None


class Credentials(StepSchema):
    medical_license_number: Optional[str] = Field(None, max_length=50)
    substance_use_license_number: Optional[str] = Field(None, max_length=50)
    substance_use_qualification: Optional[str] = None
    mental_health_license_number: Optional[str] = Field(None, max_length=50)
    mental_health_qualification: Optional[str] = None
    medicaid_number: Optional[str] = Field(None, max_length=50)
    medicare_ptan_number: Optional[str] = Field(None, max_length=50)
    caqh_provider_id: Optional[str] = Field(None, max_length=50)
    caqh_issue_date: Optional[date] = None
    caqh_last_attestation_date: Optional[date] = None
    caqh_enabled: Optional[bool] = None
    caqh_reattestation_due_date: Optional[date] = None


class EducationEntry(StepSchema):
    education_type: Optional[str] = Field(None, max_length=50)
    school_institution: str = Field(..., max_length=100)
    degree: Optional[str] = Field(None, max_length=50)
    specialty_major: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class EmploymentEntry(StepSchema):
    employer: str = Field(..., max_length=100)
    position: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None


class StateLicenseEntry(StepSchema):
    license_number: str = Field(..., max_length=50)
    state: str = Field(..., max_length=50)
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    responsible_person: Optional[str] = Field(None, max_length=100)


class DEALicenseEntry(StepSchema):
    license_number: str = Field(..., max_length=50)
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    responsible_person: Optional[str] = Field(None, max_length=100)


class BoardCertificationEntry(StepSchema):
    board_name: str = Field(..., max_length=100)
    certification: Optional[str] = Field(None, max_length=100)
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    responsible_person: Optional[str] = Field(None, max_length=100)


class PeerReferenceEntry(StepSchema):
    reference_name: str = Field(..., max_length=100)
    contact_info: Optional[str] = Field(None, max_length=100)
    relationship: Optional[str] = Field(None, max_length=100)
    comments: Optional[str] = None


class EmergencyContactEntry(StepSchema):
    name: str = Field(..., max_length=100)
    relationship: Optional[str] = Field(None, max_length=50)
    phone: str = Field(..., max_length=20, pattern=PHONE_PATTERN)
    email: Optional[EmailStr] = None


class TaxFormEntry(StepSchema):
    form_type: str = Field(..., max_length=50)
    submitted_date: Optional[date] = None
    status: Optional[str] = Field(None, max_length=50)


class TrainingEntry(StepSchema):
    training_type: str = Field(..., max_length=100)
    provider: Optional[str] = Field(None, max_length=100)
    completion_date: Optional[date] = None
    expiration_date: Optional[date] = None
    credits: Optional[float] = Field(None, ge=0)


class PayerEnrollmentEntry(StepSchema):
    payer_name: str = Field(..., max_length=100)
    enrollment_id: Optional[str] = Field(None, max_length=50)
    enrollment_date: Optional[date] = None
    status: Optional[str] = Field(None, max_length=50)


class EducationEmployment(StepSchema):
    educations: Optional[List[EducationEntry]] = None
    employments: Optional[List[EmploymentEntry]] = None


class Licenses(StepSchema):
    state_licenses: Optional[List[StateLicenseEntry]] = None
    dea_licenses: Optional[List[DEALicenseEntry]] = None


class Certifications(StepSchema):
    board_certifications: Optional[List[BoardCertificationEntry]] = None


class ReferencesContacts(StepSchema):
    peer_references: Optional[List[PeerReferenceEntry]] = None
    emergency_contacts: Optional[List[EmergencyContactEntry]] = None


class TaxDocumentation(StepSchema):
    tax_forms: Optional[List[TaxFormEntry]] = None


class TrainingPayer(StepSchema):
    trainings: Optional[List[TrainingEntry]] = None
    payer_enrollments: Optional[List[PayerEnrollmentEntry]] = None


# ============================================================================
# Step definitions
# ============================================================================


@dataclass(frozen=True)
class SchemaStep:
    schema: Type[StepSchema]
    required: Tuple[str, ...] = ()
    min_items: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CompletionGateStep:
    gate: CompletionGate


@dataclass(frozen=True)
class ReviewStep:
    """Full-form validation over every schema step"""


StepDefinition = Union[SchemaStep, CompletionGateStep, ReviewStep]

STEP_REGISTRY: Dict[OnboardingStep, StepDefinition] = {
    OnboardingStep.personal_info: SchemaStep(
        PersonalInfo,
        required=(
            "first_name",
            "last_name",
            "date_of_birth",
            "ssn",
            "personal_email",
            "cell_phone",
        ),
    ),
    OnboardingStep.professional_info: SchemaStep(
        ProfessionalInfo, required=("job_title", "work_location")
    ),
    OnboardingStep.credentials: SchemaStep(Credentials),
    OnboardingStep.education_employment: SchemaStep(
        EducationEmployment, min_items={"educations": 1}
    ),
    OnboardingStep.licenses: SchemaStep(Licenses),
    OnboardingStep.certifications: SchemaStep(Certifications),
    OnboardingStep.references_contacts: SchemaStep(
        ReferencesContacts, min_items={"emergency_contacts": 1}
    ),
    OnboardingStep.tax_documentation: SchemaStep(TaxDocumentation),
    OnboardingStep.training_payer: SchemaStep(TrainingPayer),
    OnboardingStep.documents: CompletionGateStep(CompletionGate.documents),
    OnboardingStep.forms: CompletionGateStep(CompletionGate.forms),
    OnboardingStep.review: ReviewStep(),
}

STEP_ORDER: List[OnboardingStep] = list(OnboardingStep)

SCHEMA_STEPS: List[Tuple[OnboardingStep, SchemaStep]] = [
    (step, definition)
    for step, definition in STEP_REGISTRY.items()
    if isinstance(definition, SchemaStep)
]

# Collections and the schema step that owns them
COLLECTION_ENTRIES: Dict[str, Type[StepSchema]] = {
    "educations": EducationEntry,
    "employments": EmploymentEntry,
    "state_licenses": StateLicenseEntry,
    "dea_licenses": DEALicenseEntry,
    "board_certifications": BoardCertificationEntry,
    "peer_references": PeerReferenceEntry,
    "emergency_contacts": EmergencyContactEntry,
    "tax_forms": TaxFormEntry,
    "trainings": TrainingEntry,
    "payer_enrollments": PayerEnrollmentEntry,
}

# Scalar fields copied onto the Employee row at submission
EMPLOYEE_FIELD_SCHEMAS: Tuple[Type[StepSchema], ...] = (
    PersonalInfo,
    ProfessionalInfo,
    Credentials,
)


def next_step(step: OnboardingStep) -> Optional[OnboardingStep]:
    index = STEP_ORDER.index(step)
    if index + 1 < len(STEP_ORDER):
        return STEP_ORDER[index + 1]
    return None


def _label(name: str) -> str:
    label = name.replace("_", " ")
    for acronym in ("ssn", "npi", "dea", "caqh", "ptan"):
        label = label.replace(acronym, acronym.upper())
    return label[0].upper() + label[1:]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _format_error(error: Dict[str, Any]) -> FieldError:
    field_path = ".".join(str(part) for part in error["loc"])
    message = error["msg"]
    if error["type"] == "string_pattern_mismatch":
        name = str(error["loc"][-1])
        message = f"{_label(name)} has an invalid format"
    elif error["type"] == "missing" or (
        error["type"] == "string_type" and error.get("input") is None
    ):
        message = f"{_label(str(error['loc'][-1]))} is required"
    return FieldError(field=field_path, message=message)


def validate_schema_step(
    definition: SchemaStep, form_state: Mapping[str, Any]
) -> List[FieldError]:
    """Required fields, minimum collection sizes, then field formats"""
    errors: List[FieldError] = []

    for name in definition.required:
        if _is_blank(form_state.get(name)):
            errors.append(FieldError(field=name, message=f"{_label(name)} is required"))

    for name, minimum in definition.min_items.items():
        items = form_state.get(name)
        count = len(items) if isinstance(items, list) else 0
        if count < minimum:
            singular = _label(name[:-1] if name.endswith("s") else name).lower()
            noun = "entry is" if minimum == 1 else "entries are"
            errors.append(
                FieldError(
                    field=name,
                    message=f"At least {minimum} {singular} {noun} required",
                )
            )

    flagged = {error.field for error in errors}
    subset = {
        key: form_state[key]
        for key in definition.schema.model_fields
        if key in form_state
    }
    try:
        definition.schema.model_validate(subset)
    except ValidationError as exc:
        for error in exc.errors():
            field_error = _format_error(error)
            if field_error.field not in flagged:
                errors.append(field_error)
                flagged.add(field_error.field)

    return errors


def validate_full_form(form_state: Mapping[str, Any]) -> List[FieldError]:
    """Union of every schema step, in step order"""
    errors: List[FieldError] = []
    for _, definition in SCHEMA_STEPS:
        errors.extend(validate_schema_step(definition, form_state))
    return errors


def parse_employee_fields(form_state: Mapping[str, Any]) -> Dict[str, Any]:
    """Validated scalar employee fields present in the form state"""
    fields: Dict[str, Any] = {}
    for schema in EMPLOYEE_FIELD_SCHEMAS:
        subset = {key: form_state[key] for key in schema.model_fields if key in form_state}
        parsed = schema.model_validate(subset)
        fields.update(parsed.model_dump(exclude_unset=True))
    return fields


def parse_collections(form_state: Mapping[str, Any]) -> Dict[str, List[Dict[str, Any]]]:
    """Validated collection entries present in the form state"""
    collections: Dict[str, List[Dict[str, Any]]] = {}
    for name, entry_schema in COLLECTION_ENTRIES.items():
        items = form_state.get(name)
        if items is None:
            continue
        collections[name] = [
            entry_schema.model_validate(item).model_dump() for item in items
        ]
    return collections
