from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.app.services.encryption import FieldEncryptor
from src.domain.entities import (
    AuditEvent,
    Employee,
    EmployeeStatus,
    Invitation,
    InvitationStatus,
    OnboardingDraft,
    StateLicense,
    User,
    UserRole,
)
from tests.fixtures.factories import create_employee


async def invite_and_accept(client: AsyncClient, hr_headers, test_data):
    """Invite jane@x.com and redeem the invitation; returns the accept payload"""
    invite = await client.post(
        "/employees/invite", json=test_data.get_copy("invite_request"), headers=hr_headers
    )
    assert invite.status_code == 201
    token = invite.json()["token"]

    accepted = await client.post(
        f"/invitations/{token}/accept", json=test_data.get_copy("accept_request")
    )
    assert accepted.status_code == 201
    return accepted.json()


def employee_headers(accepted):
    return {"Authorization": f"Bearer {accepted['access_token']}"}


@pytest.mark.asyncio
async def test_invitation_token_lookup(client: AsyncClient, db_session, hr_headers, test_data):
    """The raw token resolves the invitation but is never stored"""
    # Act
    invite = await client.post(
        "/employees/invite", json=test_data.get_copy("invite_request"), headers=hr_headers
    )
    token = invite.json()["token"]
    details = await client.get(f"/invitations/{token}")

    # Assert
    assert details.status_code == 200
    assert details.json()["email"] == "jane@x.com"
    assert "token" not in details.json()

    invitation = (await db_session.exec(select(Invitation))).one()
    assert invitation.token_hash != token
    assert invitation.status == InvitationStatus.pending


@pytest.mark.asyncio
async def test_invite_requires_staff_role(client: AsyncClient, test_data):
    response = await client.post("/employees/invite", json=test_data.get_copy("invite_request"))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_duplicate_pending_invitation(client: AsyncClient, hr_headers, test_data):
    payload = test_data.get_copy("invite_request")
    await client.post("/employees/invite", json=payload, headers=hr_headers)

    response = await client.post("/employees/invite", json=payload, headers=hr_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVITE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_invitation_cannot_be_used_twice(client: AsyncClient, hr_headers, test_data):
    invite = await client.post(
        "/employees/invite", json=test_data.get_copy("invite_request"), headers=hr_headers
    )
    token = invite.json()["token"]
    await client.post(f"/invitations/{token}/accept", json=test_data.get_copy("accept_request"))

    response = await client.post(
        f"/invitations/{token}/accept", json=test_data.get_copy("accept_request")
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVITATION_ALREADY_USED"


@pytest.mark.asyncio
async def test_accept_creates_prospective_employee(
    client: AsyncClient, db_session, hr_headers, test_data
):
    accepted = await invite_and_accept(client, hr_headers, test_data)

    employee = await db_session.get(Employee, UUID(accepted["employee_id"]))
    user = await db_session.get(User, UUID(accepted["user_id"]))
    assert employee.status == EmployeeStatus.prospective
    assert employee.work_email == "jane@x.com"
    assert user.role == UserRole.prospective_employee
    assert user.employee_id == employee.id


@pytest.mark.asyncio
async def test_submit_with_empty_educations_fails_validation(
    client: AsyncClient, db_session, hr_headers, test_data
):
    # Arrange
    accepted = await invite_and_accept(client, hr_headers, test_data)
    form_state = test_data.form_state(educations=[])

    # Act
    response = await client.post(
        "/onboarding/submit", json={"form_state": form_state}, headers=employee_headers(accepted)
    )

    # Assert
    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_FAILED"
    assert {"field": "educations", "message": "At least 1 education entry is required"} in body[
        "errors"
    ]
    employee = await db_session.get(Employee, UUID(accepted["employee_id"]))
    assert employee.status == EmployeeStatus.prospective


@pytest.mark.asyncio
async def test_draft_then_submit_then_approve(
    client: AsyncClient, db_session, hr_headers, test_data
):
    """Invite -> accept -> save draft -> validate -> submit -> HR approves"""
    accepted = await invite_and_accept(client, hr_headers, test_data)
    headers = employee_headers(accepted)
    employee_id = accepted["employee_id"]
    form_state = test_data.form_state()

    # Save part of the form and come back to it
    educations = form_state.pop("educations")
    saved = await client.post(
        "/onboarding/save-draft",
        json={"data": {"educations": educations}, "current_step": "education_employment"},
        headers=headers,
    )
    assert saved.status_code == 200

    overview = await client.get("/onboarding/my-onboarding", headers=headers)
    assert overview.status_code == 200
    assert overview.json()["current_step"] == "education_employment"
    assert overview.json()["draft"]["educations"][0]["school_institution"] == "UC Davis"

    step = await client.post(
        "/onboarding/validate-step",
        json={"step": "education_employment", "form_state": {}},
        headers=headers,
    )
    assert step.status_code == 200
    assert step.json()["next_step"] == "licenses"

    # Submit the rest; the draft supplies the educations
    submitted = await client.post(
        "/onboarding/submit", json={"form_state": form_state}, headers=headers
    )
    assert submitted.status_code == 201
    assert submitted.json()["status"] == "pending_approval"

    employee = await db_session.get(Employee, UUID(employee_id))
    await db_session.refresh(employee)
    assert employee.status == EmployeeStatus.pending_approval
    assert employee.ssn_encrypted and "6789" not in employee.ssn_encrypted
    assert employee.submitted_at is not None
    drafts = (await db_session.exec(select(OnboardingDraft))).all()
    assert drafts == []
    licenses = (await db_session.exec(select(StateLicense))).all()
    assert [item.license_number for item in licenses] == ["NP-55102"]

    # Locked for edits while HR reviews
    locked = await client.post(
        "/onboarding/save-draft", json={"data": {"job_title": "MD"}}, headers=headers
    )
    assert locked.status_code == 400
    assert locked.json()["error"]["code"] == "ONBOARDING_LOCKED"

    queue = await client.get("/hr/pending-approvals", headers=hr_headers)
    assert queue.status_code == 200
    assert [item["employee_id"] for item in queue.json()["items"]] == [employee_id]

    approved = await client.post(
        f"/hr/approve/{employee_id}",
        json={"comments": "Credentials verified"},
        headers=hr_headers,
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "active"
    assert approved.json()["assigned_role"] == "viewer"

    user = await db_session.get(User, UUID(accepted["user_id"]))
    await db_session.refresh(user)
    assert user.role == UserRole.viewer

    actions = (
        await db_session.exec(
            select(AuditEvent.action).where(AuditEvent.entity_id == UUID(employee_id))
        )
    ).all()
    assert set(actions) == {"submit", "approve"}


@pytest.mark.asyncio
async def test_duplicate_license_across_employees_conflicts(
    client: AsyncClient, db_session, hr_headers, test_data
):
    other = await create_employee(db_session, first_name="Sam", work_email="sam@x.com")
    db_session.add(StateLicense(employee_id=other.id, license_number="NP-55102", state="CA"))
    await db_session.commit()
    accepted = await invite_and_accept(client, hr_headers, test_data)

    response = await client.post(
        "/onboarding/submit",
        json={"form_state": test_data.form_state()},
        headers=employee_headers(accepted),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"
    assert response.json()["errors"][0]["field"] == "state_licenses.0.license_number"


@pytest.mark.asyncio
async def test_staff_account_has_no_onboarding(client: AsyncClient, hr_headers):
    response = await client.get("/onboarding/my-onboarding", headers=hr_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_drafted_ssn_is_stored_encrypted_and_returned_masked(
    client: AsyncClient, db_session, hr_headers, test_data
):
    # Arrange
    accepted = await invite_and_accept(client, hr_headers, test_data)
    headers = employee_headers(accepted)
    form_state = test_data.form_state()
    ssn = form_state.pop("ssn")

    # Act
    saved = await client.post(
        "/onboarding/save-draft",
        json={"data": {"ssn": ssn}, "current_step": "personal_info"},
        headers=headers,
    )
    overview = await client.get("/onboarding/my-onboarding", headers=headers)

    # Assert
    for response in (saved, overview):
        assert response.status_code == 200
        assert "123-45-6789" not in response.text
        assert "123456789" not in response.text
    assert saved.json()["data"] == {"ssn_masked": "***-**-6789"}
    assert overview.json()["draft"] == {"ssn_masked": "***-**-6789"}

    draft = (await db_session.exec(select(OnboardingDraft))).one()
    assert "ssn" not in draft.data
    assert FieldEncryptor().decrypt(draft.data["ssn_encrypted"]) == "123-45-6789"

    # The drafted SSN is used when the rest of the form is submitted
    submitted = await client.post(
        "/onboarding/submit", json={"form_state": form_state}, headers=headers
    )
    assert submitted.status_code == 201
    employee = await db_session.get(Employee, UUID(accepted["employee_id"]))
    await db_session.refresh(employee)
    assert FieldEncryptor().decrypt(employee.ssn_encrypted) == "123-45-6789"
