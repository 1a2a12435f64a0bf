from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.document_repository import DocumentRepository
from src.adapter.repositories.employee_record_repository import EmployeeRecordRepository
from src.adapter.repositories.employee_repository import EmployeeRepository
from src.adapter.repositories.form_assignment_repository import FormAssignmentRepository
from src.adapter.repositories.information_request_repository import (
    InformationRequestRepository,
)
from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.repositories.license_repository import LicenseRepository
from src.adapter.repositories.onboarding_draft_repository import OnboardingDraftRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.employees = EmployeeRepository(self.session)
        self.records = EmployeeRecordRepository(self.session)
        self.licenses = LicenseRepository(self.session)
        self.documents = DocumentRepository(self.session)
        self.drafts = OnboardingDraftRepository(self.session)
        self.form_assignments = FormAssignmentRepository(self.session)
        self.information_requests = InformationRequestRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
