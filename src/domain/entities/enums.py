"""
Onboarding Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account role used for authorization"""

    admin = "admin"
    hr = "hr"
    viewer = "viewer"
    prospective_employee = "prospective_employee"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    cancelled = "cancelled"


class EmployeeStatus(str, Enum):
    """Employee lifecycle status"""

    prospective = "prospective"
    pending_approval = "pending_approval"
    information_needed = "information_needed"
    active = "active"
    rejected = "rejected"
    inactive = "inactive"


class BackgroundCheckStatus(str, Enum):
    """Background check progress"""

    not_started = "not_started"
    pending = "pending"
    completed = "completed"
    failed = "failed"


class LicenseStatus(str, Enum):
    """Cached status of a license or certification"""

    active = "active"
    expiring = "expiring"
    expired = "expired"


class LicenseKind(str, Enum):
    """Kinds of tracked credentials"""

    state_license = "state_license"
    dea_license = "dea_license"
    board_certification = "board_certification"


class DocumentType(str, Enum):
    """Closed set of uploadable document categories"""

    license = "license"
    certificate = "certificate"
    identification = "identification"
    resume = "resume"
    tax_form = "tax_form"
    training = "training"
    insurance = "insurance"
    background_check = "background_check"
    other = "other"


class StorageType(str, Enum):
    """Where a document blob lives"""

    local = "local"
    remote = "remote"


class FormStatus(str, Enum):
    """E-signature form assignment status"""

    pending = "pending"
    sent = "sent"
    completed = "completed"


class InformationRequestStatus(str, Enum):
    """HR request for more information"""

    pending = "pending"
    fulfilled = "fulfilled"


class ComplianceBucket(str, Enum):
    """Disjoint expiration windows"""

    expired = "expired"
    expiring_30 = "expiring_30"
    expiring_60 = "expiring_60"
    expiring_90 = "expiring_90"
    active = "active"


class AlertSeverity(str, Enum):
    """Compliance alert severity"""

    high = "high"
    medium = "medium"
    low = "low"
