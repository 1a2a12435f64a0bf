from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.services.blob_store import DocumentStorage
from src.app.use_cases.documents import (
    DeleteDocumentUseCase,
    DownloadDocumentUseCase,
    UploadDocumentUseCase,
)
from src.domain.entities import (
    Document,
    DocumentType,
    Employee,
    EmployeeStatus,
    StorageType,
)
from tests.fixtures.blob_store import InMemoryBlobStore

PDF = b"%PDF-1.4 license scan"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.employees = MagicMock()
    uow.employees.get_by_id = AsyncMock()

    uow.documents = MagicMock()
    uow.documents.get_by_id = AsyncMock(return_value=None)
    uow.documents.create = AsyncMock(side_effect=lambda document: document)
    uow.documents.delete = AsyncMock()

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


@pytest.fixture
def store():
    return InMemoryBlobStore()


@pytest.fixture
def storage(store):
    return DocumentStorage({StorageType.local: store}, primary=StorageType.local)


@pytest.fixture
def employee(mock_uow):
    employee = Employee(
        id=uuid4(), first_name="Jane", last_name="Doe", status=EmployeeStatus.prospective
    )
    mock_uow.employees.get_by_id.return_value = employee
    return employee


async def upload(mock_uow, storage, employee_id, role="hr", actor=None, **overrides):
    params = dict(
        document_type="license",
        file_name="state license.pdf",
        content_type="application/pdf",
        content=PDF,
    )
    params.update(overrides)
    return await UploadDocumentUseCase(mock_uow, storage).execute(
        uuid4(), role, actor, employee_id, **params
    )


@pytest.mark.asyncio
async def test_upload_stores_blob_and_metadata(mock_uow, storage, store, employee):
    result = await upload(mock_uow, storage, employee.id, description=" Front side ")

    assert result.is_ok()
    document = mock_uow.documents.create.call_args.args[0]
    assert document.file_name == "state_license.pdf"
    assert document.document_type == DocumentType.license
    assert document.description == "Front side"
    assert document.file_size == len(PDF)
    assert document.storage_key.startswith(f"documents/{employee.id}/")
    assert store.objects[document.storage_key] == PDF
    assert mock_uow.audit_events.create.call_args.args[0].action == "document_uploaded"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_prospective_employee_uploads_only_to_own_record(mock_uow, storage, employee):
    other = uuid4()

    denied = await upload(mock_uow, storage, employee.id, role="prospective_employee", actor=other)
    allowed = await upload(
        mock_uow, storage, employee.id, role="prospective_employee", actor=employee.id
    )

    assert denied.error.code == "INSUFFICIENT_ROLE"
    assert allowed.is_ok()


@pytest.mark.asyncio
async def test_upload_rejects_unknown_document_type(mock_uow, storage, employee):
    result = await upload(mock_uow, storage, employee.id, document_type="selfie")

    assert result.error.code == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_upload_rejects_script_in_description(mock_uow, storage, employee):
    result = await upload(
        mock_uow, storage, employee.id, description="<script>alert(1)</script>"
    )

    assert result.error.code == "VALIDATION_FAILED"
    assert result.error.details[0]["field"] == "description"


@pytest.mark.asyncio
async def test_upload_rejects_disguised_executable(mock_uow, storage, store, employee):
    result = await upload(mock_uow, storage, employee.id, content=b"MZ\x90\x00binary")

    assert result.error.code == "INVALID_FILE"
    assert store.objects == {}


@pytest.mark.asyncio
async def test_upload_reports_storage_failure(mock_uow, employee):
    broken = DocumentStorage(
        {StorageType.local: InMemoryBlobStore(fail_uploads=True)}, primary=StorageType.local
    )

    result = await upload(mock_uow, broken, employee.id)

    assert result.error.code == "STORAGE_ERROR"
    mock_uow.documents.create.assert_not_called()


@pytest.mark.asyncio
async def test_upload_for_unknown_employee(mock_uow, storage):
    mock_uow.employees.get_by_id.return_value = None

    result = await upload(mock_uow, storage, uuid4())

    assert result.error.code == "EMPLOYEE_NOT_FOUND"


def stored_document(employee_id, key="documents/x/license.pdf"):
    return Document(
        id=uuid4(),
        employee_id=employee_id,
        document_type=DocumentType.license,
        document_name="License",
        file_name="license.pdf",
        file_size=len(PDF),
        mime_type="application/pdf",
        storage_type=StorageType.local,
        storage_key=key,
    )


@pytest.mark.asyncio
async def test_download_hides_other_employees_documents(mock_uow, storage, store):
    document = stored_document(uuid4())
    store.objects[document.storage_key] = PDF
    mock_uow.documents.get_by_id.return_value = document

    result = await DownloadDocumentUseCase(mock_uow, storage).execute(
        "prospective_employee", uuid4(), document.id
    )

    assert result.error.code == "DOCUMENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_download_returns_content(mock_uow, storage, store):
    document = stored_document(uuid4())
    store.objects[document.storage_key] = PDF
    mock_uow.documents.get_by_id.return_value = document

    result = await DownloadDocumentUseCase(mock_uow, storage).execute("hr", None, document.id)

    assert result.value.content == PDF
    assert result.value.mime_type == "application/pdf"


@pytest.mark.asyncio
async def test_delete_document_is_admin_only(mock_uow, storage):
    result = await DeleteDocumentUseCase(mock_uow, storage).execute(uuid4(), "hr", uuid4())

    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_delete_document_removes_blob_and_row(mock_uow, storage, store):
    document = stored_document(uuid4())
    store.objects[document.storage_key] = PDF
    mock_uow.documents.get_by_id.return_value = document

    result = await DeleteDocumentUseCase(mock_uow, storage).execute(
        uuid4(), "admin", document.id
    )

    assert result.value.deleted is True
    assert store.objects == {}
    mock_uow.documents.delete.assert_called_once_with(document)
    mock_uow.commit.assert_called_once()
