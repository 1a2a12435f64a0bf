from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.document_repository import IDocumentRepository
from src.app.repositories.employee_record_repository import IEmployeeRecordRepository
from src.app.repositories.employee_repository import IEmployeeRepository
from src.app.repositories.form_assignment_repository import IFormAssignmentRepository
from src.app.repositories.information_request_repository import (
    IInformationRequestRepository,
)
from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.license_repository import ILicenseRepository
from src.app.repositories.onboarding_draft_repository import IOnboardingDraftRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    invitations: IInvitationRepository
    employees: IEmployeeRepository
    records: IEmployeeRecordRepository
    licenses: ILicenseRepository
    documents: IDocumentRepository
    drafts: IOnboardingDraftRepository
    form_assignments: IFormAssignmentRepository
    information_requests: IInformationRequestRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
