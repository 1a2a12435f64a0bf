"""
Onboarding Service Domain Entities

All domain entities organized by model.
Each aggregate in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AlertSeverity,
    BackgroundCheckStatus,
    ComplianceBucket,
    DocumentType,
    EmployeeStatus,
    FormStatus,
    InformationRequestStatus,
    InvitationStatus,
    LicenseKind,
    LicenseStatus,
    StorageType,
    UserRole,
)

# Export all entities
from .audit_event import AuditEvent
from .document import Document, RequiredDocumentType
from .employee import Employee
from .invitation import Invitation
from .license import BoardCertification, DEALicense, StateLicense
from .onboarding import FormAssignment, InformationRequest, OnboardingDraft
from .records import (
    OWNED_COLLECTIONS,
    Education,
    EmergencyContact,
    Employment,
    PayerEnrollment,
    PeerReference,
    TaxForm,
    Training,
)
from .user import User

__all__ = [
    # Enums
    "AlertSeverity",
    "BackgroundCheckStatus",
    "ComplianceBucket",
    "DocumentType",
    "EmployeeStatus",
    "FormStatus",
    "InformationRequestStatus",
    "InvitationStatus",
    "LicenseKind",
    "LicenseStatus",
    "StorageType",
    "UserRole",
    # Entities
    "OWNED_COLLECTIONS",
    "AuditEvent",
    "BoardCertification",
    "DEALicense",
    "Document",
    "Education",
    "EmergencyContact",
    "Employee",
    "Employment",
    "FormAssignment",
    "InformationRequest",
    "Invitation",
    "OnboardingDraft",
    "PayerEnrollment",
    "PeerReference",
    "RequiredDocumentType",
    "StateLicense",
    "TaxForm",
    "Training",
    "User",
]
