"""
Use Cases

Organized by domain folder:
- invitations/: Inviting and registering prospective employees
- onboarding/: Multi-step onboarding form and submission
- approvals/: HR review of submitted onboardings
- employees/: Direct employee management
- documents/: Document upload and retrieval
- compliance/: License expiration tracking
- audit/: Audit logs

Import from subdirectories for better organization.
"""

from .approvals import (
    ApproveBatchUseCase,
    ApproveEmployeeUseCase,
    RejectEmployeeUseCase,
    RequestInfoUseCase,
)
from .audit import GetAuditEventsUseCase
from .compliance import (
    GetComplianceDashboardUseCase,
    RefreshLicenseStatusesUseCase,
)
from .invitations import AcceptInvitationUseCase, CreateInvitationUseCase
from .onboarding import SaveDraftUseCase, SubmitOnboardingUseCase, ValidateStepUseCase

__all__ = [
    # Invitations
    "CreateInvitationUseCase",
    "AcceptInvitationUseCase",
    # Onboarding
    "SaveDraftUseCase",
    "ValidateStepUseCase",
    "SubmitOnboardingUseCase",
    # Approvals
    "ApproveEmployeeUseCase",
    "RejectEmployeeUseCase",
    "RequestInfoUseCase",
    "ApproveBatchUseCase",
    # Compliance
    "GetComplianceDashboardUseCase",
    "RefreshLicenseStatusesUseCase",
    # Audit
    "GetAuditEventsUseCase",
]
