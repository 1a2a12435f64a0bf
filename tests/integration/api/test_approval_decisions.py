import asyncio
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.approvals import ApproveEmployeeUseCase, RejectEmployeeUseCase
from src.domain.entities import (
    AuditEvent,
    Employee,
    EmployeeStatus,
    InformationRequest,
    InformationRequestStatus,
    User,
    UserRole,
)
from tests.fixtures.factories import bearer, create_employee, create_onboarding_user


@pytest.mark.asyncio
async def test_approve_after_reject_is_already_processed(
    client: AsyncClient, db_session, hr_headers
):
    # Arrange
    employee = await create_employee(db_session, EmployeeStatus.pending_approval)

    # Act
    rejected = await client.post(
        f"/hr/reject/{employee.id}", json={"reason": "Incomplete references"}, headers=hr_headers
    )
    approved = await client.post(
        f"/hr/approve/{employee.id}", json={"comments": "Looks good"}, headers=hr_headers
    )

    # Assert
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "rejected"
    assert approved.status_code == 400
    assert approved.json()["error"] == {
        "code": "ALREADY_PROCESSED",
        "message": "Employee has already been rejected",
    }
    await db_session.refresh(employee)
    assert employee.status == EmployeeStatus.rejected
    assert employee.rejection_reason == "Incomplete references"


@pytest.mark.asyncio
async def test_concurrent_decisions_only_one_wins(session_factory, db_session):
    """Both deciders read pending_approval; the status CAS lets exactly one through"""
    # Arrange
    employee = await create_employee(db_session, EmployeeStatus.pending_approval)
    approver_id, rejecter_id = uuid4(), uuid4()

    async with session_factory() as approve_session, session_factory() as reject_session:
        # Rejecter loads the employee before the approval commits
        stale = await reject_session.get(Employee, employee.id)
        assert stale.status == EmployeeStatus.pending_approval

        # Act
        approved = await ApproveEmployeeUseCase(
            SqlAlchemyUnitOfWork(approve_session)
        ).execute(approver_id, employee.id, "Verified")
        rejected = await RejectEmployeeUseCase(
            SqlAlchemyUnitOfWork(reject_session)
        ).execute(rejecter_id, employee.id, "Duplicate record")

    # Assert
    assert approved.is_ok()
    assert rejected.is_err()
    assert rejected.error.code == "ALREADY_PROCESSED"
    assert rejected.error.reason == "active"

    await db_session.refresh(employee)
    assert employee.status == EmployeeStatus.active
    assert employee.approved_by == approver_id
    assert employee.rejected_by is None
    actions = (await db_session.exec(select(AuditEvent.action))).all()
    assert actions == ["approve"]


@pytest.mark.asyncio
async def test_batch_approval_with_mixed_statuses(client: AsyncClient, db_session, hr_headers):
    pending = await create_employee(db_session, EmployeeStatus.pending_approval)
    active = await create_employee(
        db_session, EmployeeStatus.active, first_name="Al", work_email="al@x.com"
    )
    missing = uuid4()

    response = await client.post(
        "/hr/approve-batch",
        json={
            "employee_ids": [str(pending.id), str(active.id), str(missing)],
            "comments": "Quarterly batch",
        },
        headers=hr_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["approved"] == 1
    assert body["failed"] == 2
    results = {item["employee_id"]: item for item in body["results"]}
    assert results[str(pending.id)]["success"] is True
    assert results[str(active.id)]["error"] == "Employee has already been approved"
    assert results[str(missing)]["error"] == "Employee not found"


@pytest.mark.asyncio
async def test_batch_approval_with_malformed_id(client: AsyncClient, db_session, hr_headers):
    # Arrange
    pending = await create_employee(db_session, EmployeeStatus.pending_approval)
    active = await create_employee(
        db_session, EmployeeStatus.active, first_name="Al", work_email="al@x.com"
    )

    # Act
    response = await client.post(
        "/hr/approve-batch",
        json={
            "employee_ids": [str(pending.id), str(active.id), "99999"],
            "comments": "Quarterly batch",
        },
        headers=hr_headers,
    )

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["approved"] == 1
    assert body["failed"] == 2
    results = {item["employee_id"]: item for item in body["results"]}
    assert results["99999"] == {
        "employee_id": "99999",
        "success": False,
        "error": "Employee not found",
    }
    await db_session.refresh(pending)
    assert pending.status == EmployeeStatus.active


@pytest.mark.asyncio
async def test_simultaneous_approvals_over_http(client: AsyncClient, db_session, hr_headers):
    # Arrange
    employee = await create_employee(db_session, EmployeeStatus.pending_approval)

    # Act
    first, second = await asyncio.gather(
        client.post(
            f"/hr/approve/{employee.id}", json={"comments": "First"}, headers=hr_headers
        ),
        client.post(
            f"/hr/approve/{employee.id}", json={"comments": "Second"}, headers=hr_headers
        ),
    )

    # Assert
    assert sorted([first.status_code, second.status_code]) == [200, 400]
    loser = first if first.status_code == 400 else second
    assert loser.json()["error"] == {
        "code": "ALREADY_PROCESSED",
        "message": "Employee has already been approved",
    }
    await db_session.refresh(employee)
    assert employee.status == EmployeeStatus.active
    actions = (await db_session.exec(select(AuditEvent.action))).all()
    assert actions == ["approve"]


@pytest.mark.asyncio
async def test_approve_requires_comments(client: AsyncClient, db_session, hr_headers):
    employee = await create_employee(db_session, EmployeeStatus.pending_approval)

    response = await client.post(f"/hr/approve/{employee.id}", json={}, headers=hr_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "COMMENTS_REQUIRED"


@pytest.mark.asyncio
async def test_approve_unknown_employee(client: AsyncClient, hr_headers):
    response = await client.post(
        f"/hr/approve/{uuid4()}", json={"comments": "ok"}, headers=hr_headers
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "EMPLOYEE_NOT_FOUND"


@pytest.mark.asyncio
async def test_reject_deactivates_account(client: AsyncClient, db_session, hr_headers):
    employee = await create_employee(
        db_session, EmployeeStatus.pending_approval, work_email="jane@x.com"
    )
    user = await create_onboarding_user(db_session, employee)

    response = await client.post(
        f"/hr/reject/{employee.id}", json={"reason": "Failed verification"}, headers=hr_headers
    )

    assert response.status_code == 200
    await db_session.refresh(user)
    assert user.is_active is False


@pytest.mark.asyncio
async def test_request_info_then_resubmit(
    client: AsyncClient, db_session, hr_headers, test_data
):
    """HR asks for more information; the employee resubmits the full form"""
    # Arrange
    employee = await create_employee(
        db_session, EmployeeStatus.pending_approval, work_email="jane@x.com"
    )
    user = await create_onboarding_user(db_session, employee)
    employee_headers = bearer(user.id, UserRole.prospective_employee.value, employee.id)

    # Act
    requested = await client.post(
        f"/hr/request-info/{employee.id}",
        json={"requested_items": ["Updated DEA certificate"], "due_date": "2030-01-15"},
        headers=hr_headers,
    )
    overview = await client.get("/onboarding/my-onboarding", headers=employee_headers)
    resubmitted = await client.post(
        "/onboarding/submit",
        json={"form_state": test_data.form_state()},
        headers=employee_headers,
    )

    # Assert
    assert requested.status_code == 200
    assert requested.json()["status"] == "information_needed"
    assert overview.json()["status"] == "information_needed"
    assert overview.json()["information_requests"][0]["requested_items"] == [
        "Updated DEA certificate"
    ]
    assert resubmitted.status_code == 201
    request = (await db_session.exec(select(InformationRequest))).one()
    await db_session.refresh(request)
    assert request.status == InformationRequestStatus.fulfilled
    await db_session.refresh(employee)
    assert employee.status == EmployeeStatus.pending_approval


@pytest.mark.asyncio
async def test_approval_history_lists_decisions(client: AsyncClient, db_session, hr_headers):
    approved = await create_employee(db_session, EmployeeStatus.pending_approval)
    rejected = await create_employee(
        db_session, EmployeeStatus.pending_approval, first_name="Rex", work_email="rex@x.com"
    )
    await client.post(f"/hr/approve/{approved.id}", json={"comments": "ok"}, headers=hr_headers)
    await client.post(f"/hr/reject/{rejected.id}", json={"reason": "no"}, headers=hr_headers)

    everything = await client.get("/hr/approval-history", headers=hr_headers)
    only_rejected = await client.get(
        "/hr/approval-history", params={"status": "rejected"}, headers=hr_headers
    )
    invalid = await client.get(
        "/hr/approval-history", params={"status": "pending"}, headers=hr_headers
    )

    assert everything.json()["total"] == 2
    assert [item["employee_id"] for item in only_rejected.json()["items"]] == [str(rejected.id)]
    assert invalid.status_code == 400


@pytest.mark.asyncio
async def test_pending_approvals_require_staff(client: AsyncClient, db_session):
    viewer = User(email="viewer@clinic.com", password_hash="unused", role=UserRole.viewer)
    db_session.add(viewer)
    await db_session.commit()

    forbidden = await client.get(
        "/hr/pending-approvals", headers=bearer(viewer.id, UserRole.viewer.value)
    )
    anonymous = await client.get("/hr/pending-approvals")

    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["code"] == "INSUFFICIENT_ROLE"
    assert anonymous.status_code == 401
