import base64
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.services.blob_store import DocumentStorage
from src.app.services.encryption import FieldEncryptor
from src.app.use_cases.employees import (
    CreateEmployeeUseCase,
    DeactivateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
)
from src.domain.entities import (
    Document,
    DocumentType,
    Employee,
    EmployeeStatus,
    StorageType,
    User,
    UserRole,
)
from tests.fixtures.blob_store import InMemoryBlobStore

KEY = base64.urlsafe_b64encode(b"e" * 32).decode("ascii")


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.employees = MagicMock()
    uow.employees.get_by_id = AsyncMock(return_value=None)
    uow.employees.get_by_work_email = AsyncMock(return_value=None)
    uow.employees.get_status = AsyncMock()
    uow.employees.create = AsyncMock(side_effect=lambda employee: employee)
    uow.employees.transition_status = AsyncMock(return_value=True)
    uow.employees.delete = AsyncMock()

    uow.records = MagicMock()
    uow.records.get_all = AsyncMock(return_value={})

    uow.documents = MagicMock()
    uow.documents.get_by_employee = AsyncMock(return_value=[])

    uow.users = MagicMock()
    uow.users.get_by_employee_id = AsyncMock(return_value=None)
    uow.users.update = AsyncMock()

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


def employee_with(status=EmployeeStatus.active, **fields):
    return Employee(id=uuid4(), first_name="Jane", last_name="Doe", status=status, **fields)


@pytest.mark.asyncio
async def test_get_employee_masks_ssn(mock_uow):
    encryptor = FieldEncryptor(KEY)
    employee = employee_with(ssn_encrypted=encryptor.encrypt("123-45-6789"))
    mock_uow.employees.get_by_id.return_value = employee

    result = await GetEmployeeUseCase(mock_uow, encryptor).execute("hr", None, employee.id)

    details = result.value
    assert details.ssn_masked == "***-**-6789"
    assert "ssn_encrypted" not in details.profile
    assert details.profile["first_name"] == "Jane"


@pytest.mark.asyncio
async def test_get_employee_denies_other_prospective_employee(mock_uow):
    result = await GetEmployeeUseCase(mock_uow).execute(
        "prospective_employee", uuid4(), uuid4()
    )

    assert result.error.code == "INSUFFICIENT_ROLE"
    mock_uow.employees.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_create_employee_starts_prospective(mock_uow):
    result = await CreateEmployeeUseCase(mock_uow).execute(
        uuid4(), "hr", "Jane", "Doe", work_email="Jane@Clinic.com"
    )

    assert result.is_ok()
    employee = mock_uow.employees.create.call_args.args[0]
    assert employee.status == EmployeeStatus.prospective
    assert employee.work_email == "jane@clinic.com"


@pytest.mark.asyncio
async def test_create_employee_with_taken_work_email(mock_uow):
    mock_uow.employees.get_by_work_email.return_value = employee_with()

    result = await CreateEmployeeUseCase(mock_uow).execute(
        uuid4(), "admin", "Jane", "Doe", work_email="jane@clinic.com"
    )

    assert result.error.code == "CONFLICT"


@pytest.mark.asyncio
async def test_viewer_cannot_create_employee(mock_uow):
    result = await CreateEmployeeUseCase(mock_uow).execute(uuid4(), "viewer", "Jane", "Doe")

    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_deactivate_active_employee(mock_uow):
    employee = employee_with()
    user = User(email="jane@x.com", password_hash="hash", role=UserRole.viewer)
    mock_uow.employees.get_by_id.return_value = employee
    mock_uow.users.get_by_employee_id.return_value = user

    result = await DeactivateEmployeeUseCase(mock_uow).execute(uuid4(), "admin", employee.id)

    assert result.is_ok()
    assert user.is_active is False
    args = mock_uow.employees.transition_status.call_args.args
    assert args[2] == EmployeeStatus.inactive


@pytest.mark.asyncio
async def test_deactivate_pending_employee_is_invalid(mock_uow):
    employee = employee_with(EmployeeStatus.pending_approval)
    mock_uow.employees.get_by_id.return_value = employee

    result = await DeactivateEmployeeUseCase(mock_uow).execute(uuid4(), "admin", employee.id)

    assert result.error.code == "INVALID_STATUS"


@pytest.mark.asyncio
async def test_delete_employee_removes_blobs_after_commit(mock_uow):
    # Arrange
    employee = employee_with()
    store = InMemoryBlobStore()
    store.objects["documents/a.pdf"] = b"%PDF"
    storage = DocumentStorage({StorageType.local: store}, primary=StorageType.local)
    mock_uow.employees.get_by_id.return_value = employee
    mock_uow.documents.get_by_employee.return_value = [
        Document(
            employee_id=employee.id,
            document_type=DocumentType.resume,
            document_name="CV",
            file_name="a.pdf",
            mime_type="application/pdf",
            storage_type=StorageType.local,
            storage_key="documents/a.pdf",
            archived=True,
        )
    ]

    # Act
    result = await DeleteEmployeeUseCase(mock_uow, storage).execute(
        uuid4(), "admin", employee.id
    )

    # Assert
    assert result.value.documents_removed == 1
    assert store.objects == {}
    mock_uow.documents.get_by_employee.assert_called_once_with(
        employee.id, include_archived=True
    )
    mock_uow.employees.delete.assert_called_once_with(employee.id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_hr_cannot_delete_employee(mock_uow):
    result = await DeleteEmployeeUseCase(mock_uow).execute(uuid4(), "hr", uuid4())

    assert result.error.code == "INSUFFICIENT_ROLE"
