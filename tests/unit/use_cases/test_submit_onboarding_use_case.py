import base64
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.services.encryption import FieldEncryptor
from src.app.services.notifier import Notifier
from src.app.use_cases.onboarding import SubmitOnboardingUseCase
from src.domain.entities import (
    DEALicense,
    DocumentType,
    Employee,
    EmployeeStatus,
    LicenseStatus,
    OnboardingDraft,
    RequiredDocumentType,
    StateLicense,
)
from tests.fixtures.json_loader import TestDataLoader

KEY = base64.urlsafe_b64encode(b"s" * 32).decode("ascii")


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with the repositories a submission writes through"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.employees = MagicMock()
    uow.employees.get_by_id = AsyncMock()
    uow.employees.get_status = AsyncMock()
    uow.employees.get_by_work_email = AsyncMock(return_value=None)
    uow.employees.get_by_npi = AsyncMock(return_value=None)
    uow.employees.update = AsyncMock(side_effect=lambda employee: employee)
    uow.employees.transition_status = AsyncMock(return_value=True)

    uow.records = MagicMock()
    uow.records.find_state_license = AsyncMock(return_value=None)
    uow.records.find_dea_license = AsyncMock(return_value=None)
    uow.records.replace_all = AsyncMock()

    uow.drafts = MagicMock()
    uow.drafts.get_by_employee = AsyncMock(return_value=None)
    uow.drafts.delete_by_employee = AsyncMock()

    uow.documents = MagicMock()
    uow.documents.get_required_types = AsyncMock(return_value=[])
    uow.documents.get_by_employee = AsyncMock(return_value=[])

    uow.form_assignments = MagicMock()
    uow.form_assignments.get_by_employee = AsyncMock(return_value=[])

    uow.information_requests = MagicMock()
    uow.information_requests.mark_fulfilled = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


@pytest.fixture
def employee(mock_uow):
    employee = Employee(
        id=uuid4(),
        first_name="Jane",
        last_name="Doe",
        work_email="jane@x.com",
        status=EmployeeStatus.prospective,
    )
    mock_uow.employees.get_by_id.return_value = employee
    return employee


def use_case(mock_uow, notifier=None):
    return SubmitOnboardingUseCase(mock_uow, notifier, FieldEncryptor(KEY))


@pytest.mark.asyncio
async def test_submit_persists_form_and_moves_to_pending_approval(mock_uow, employee):
    # Arrange
    notifier = MagicMock(spec=Notifier)
    notifier.send = AsyncMock()
    form_state = TestDataLoader.form_state()
    user_id = uuid4()

    # Act
    result = await use_case(mock_uow, notifier).execute(user_id, employee.id, form_state)

    # Assert
    assert result.is_ok()
    assert result.value.status == "pending_approval"
    assert result.value.message == "Onboarding submitted for HR review"

    assert employee.job_title == "Nurse Practitioner"
    assert employee.npi_number == "1987654321"
    assert FieldEncryptor(KEY).decrypt(employee.ssn_encrypted) == "123-45-6789"
    assert employee.work_email == "jane@x.com"

    employee_id, records = mock_uow.records.replace_all.call_args.args
    assert employee_id == employee.id
    assert len(records["educations"]) == 1
    assert records["state_licenses"][0].status == LicenseStatus.active
    assert records["state_licenses"][0].employee_id == employee.id

    args = mock_uow.employees.transition_status.call_args.args
    assert args[1] == {EmployeeStatus.prospective, EmployeeStatus.information_needed}
    assert args[2] == EmployeeStatus.pending_approval
    mock_uow.information_requests.mark_fulfilled.assert_called_once_with(employee.id)
    mock_uow.drafts.delete_by_employee.assert_called_once_with(employee.id)
    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "submit"
    assert audit.event_metadata["resubmission"] is False
    mock_uow.commit.assert_called_once()
    assert notifier.send.call_args.args[0].kind == "onboarding_submitted"


@pytest.mark.asyncio
async def test_submit_merges_stored_draft(mock_uow, employee):
    """Collections saved earlier in the draft count towards validation"""
    form_state = TestDataLoader.form_state()
    educations = form_state.pop("educations")
    mock_uow.drafts.get_by_employee.return_value = OnboardingDraft(
        employee_id=employee.id, data={"educations": educations}
    )

    result = await use_case(mock_uow).execute(uuid4(), employee.id, form_state)

    assert result.is_ok()
    records = mock_uow.records.replace_all.call_args.args[1]
    assert records["educations"][0].school_institution == "UC Davis"


@pytest.mark.asyncio
async def test_submit_decrypts_drafted_ssn(mock_uow, employee):
    form_state = TestDataLoader.form_state()
    form_state.pop("ssn")
    mock_uow.drafts.get_by_employee.return_value = OnboardingDraft(
        employee_id=employee.id,
        data={"ssn_encrypted": FieldEncryptor(KEY).encrypt("123456789")},
    )

    result = await use_case(mock_uow).execute(uuid4(), employee.id, form_state)

    assert result.is_ok()
    assert FieldEncryptor(KEY).decrypt(employee.ssn_encrypted) == "123-45-6789"


@pytest.mark.asyncio
async def test_submit_returns_every_field_error(mock_uow, employee):
    form_state = TestDataLoader.form_state(educations=[], npi_number="12")

    result = await use_case(mock_uow).execute(uuid4(), employee.id, form_state)

    assert result.error.code == "VALIDATION_FAILED"
    fields = {detail["field"] for detail in result.error.details}
    assert fields == {"educations", "npi_number"}
    mock_uow.records.replace_all.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_submit_blocked_until_required_documents_uploaded(mock_uow, employee):
    mock_uow.documents.get_required_types.return_value = [
        RequiredDocumentType(document_type=DocumentType.resume, name="Resume")
    ]

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.error.code == "DOCUMENTS_INCOMPLETE"
    assert result.error.message == "Please upload 1 more required document"


@pytest.mark.asyncio
async def test_submit_after_submission_is_locked(mock_uow, employee):
    employee.status = EmployeeStatus.pending_approval

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.error.code == "ONBOARDING_LOCKED"


@pytest.mark.asyncio
async def test_resubmission_is_flagged(mock_uow, employee):
    employee.status = EmployeeStatus.information_needed

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.is_ok()
    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.event_metadata["resubmission"] is True


@pytest.mark.asyncio
async def test_npi_registered_to_other_employee_conflicts(mock_uow, employee):
    mock_uow.employees.get_by_npi.return_value = Employee(
        id=uuid4(), first_name="Other", last_name="Person"
    )

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.error.code == "CONFLICT"
    assert result.error.reason == "npi_number"
    mock_uow.employees.update.assert_not_called()


@pytest.mark.asyncio
async def test_placeholder_npi_is_treated_as_absent(mock_uow, employee):
    form_state = TestDataLoader.form_state(npi_number="1234567890")

    result = await use_case(mock_uow).execute(uuid4(), employee.id, form_state)

    assert result.is_ok()
    assert employee.npi_number is None
    mock_uow.employees.get_by_npi.assert_not_called()


@pytest.mark.asyncio
async def test_duplicate_state_license_in_payload_conflicts(mock_uow, employee):
    form_state = TestDataLoader.form_state()
    form_state["state_licenses"].append(dict(form_state["state_licenses"][0]))

    result = await use_case(mock_uow).execute(uuid4(), employee.id, form_state)

    assert result.error.code == "CONFLICT"
    assert result.error.reason == "state_licenses.1.license_number"


@pytest.mark.asyncio
async def test_state_license_held_by_other_employee_conflicts(mock_uow, employee):
    mock_uow.records.find_state_license.return_value = StateLicense(
        employee_id=uuid4(), license_number="NP-55102", state="CA"
    )

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.error.code == "CONFLICT"
    assert result.error.reason == "state_licenses.0.license_number"


@pytest.mark.asyncio
async def test_own_dea_license_is_not_a_conflict(mock_uow, employee):
    """Resubmitting the same DEA number replaces the employee's own record"""
    mock_uow.records.find_dea_license.return_value = DEALicense(
        employee_id=employee.id, license_number="MD1234563"
    )

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_integrity_error_maps_to_conflict(mock_uow, employee):
    mock_uow.records.replace_all.side_effect = IntegrityError("INSERT", {}, Exception())

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.error.code == "CONFLICT"
    assert result.error.reason == "integrity_error"
    mock_uow.commit.assert_not_called()


@pytest.mark.parametrize(
    "database_message, field",
    [
        (
            "UNIQUE constraint failed: state_licenses.state, state_licenses.license_number",
            "state_licenses",
        ),
        (
            'duplicate key value violates unique constraint "uq_state_license_number"',
            "state_licenses",
        ),
        ("UNIQUE constraint failed: dea_licenses.license_number", "dea_licenses"),
        ("UNIQUE constraint failed: employees.work_email", "work_email"),
        ("UNIQUE constraint failed: employees.npi_number", "npi_number"),
    ],
)
@pytest.mark.asyncio
async def test_integrity_error_names_conflicting_field(
    mock_uow, employee, database_message, field
):
    # Arrange
    mock_uow.records.replace_all.side_effect = IntegrityError(
        "INSERT", {}, Exception(database_message)
    )

    # Act
    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    # Assert
    assert result.error.code == "CONFLICT"
    assert result.error.reason == field
    assert result.error.details[0]["field"] == field
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_lost_transition_reports_current_status(mock_uow, employee):
    mock_uow.employees.transition_status.return_value = False
    mock_uow.employees.get_status.return_value = EmployeeStatus.pending_approval

    result = await use_case(mock_uow).execute(
        uuid4(), employee.id, TestDataLoader.form_state()
    )

    assert result.error.code == "ONBOARDING_LOCKED"
    mock_uow.commit.assert_not_called()
