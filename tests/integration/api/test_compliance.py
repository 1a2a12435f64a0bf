from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient

from src.domain.base import today
from src.domain.entities import EmployeeStatus, LicenseStatus
from tests.fixtures.factories import add_state_license, create_employee


@pytest_asyncio.fixture
async def licensed_staff(db_session):
    """Two active employees holding licenses in every bucket"""
    current_day = today()
    jane = await create_employee(db_session, EmployeeStatus.active, work_email="jane@x.com")
    omar = await create_employee(
        db_session, EmployeeStatus.active, first_name="Omar", last_name="Reyes",
        work_email="omar@x.com",
    )
    licenses = {
        "expired": await add_state_license(
            db_session, jane.id, "RN-100", current_day - timedelta(days=3)
        ),
        "due_10": await add_state_license(
            db_session, jane.id, "RN-101", current_day + timedelta(days=10), state="NV"
        ),
        "due_45": await add_state_license(
            db_session, omar.id, "RN-102", current_day + timedelta(days=45)
        ),
        "due_80": await add_state_license(
            db_session, omar.id, "RN-103", current_day + timedelta(days=80), state="OR"
        ),
        "due_400": await add_state_license(
            db_session, omar.id, "RN-104", current_day + timedelta(days=400), state="WA"
        ),
    }
    return {"jane": jane, "omar": omar, "licenses": licenses}


@pytest.mark.asyncio
async def test_dashboard_counts_each_license_once(
    client: AsyncClient, hr_headers, licensed_staff
):
    response = await client.get("/compliance/dashboard", headers=hr_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total_licenses"] == 5
    assert body["expired_licenses"] == 1
    assert body["expiring_in_30_days"] == 1
    assert body["expiring_in_60_days"] == 1
    assert body["expiring_in_90_days"] == 1
    assert body["active_licenses"] == 4
    assert body["compliance_score"] == 80
    assert body["as_of"] == today().isoformat()


@pytest.mark.asyncio
async def test_dashboard_without_licenses(client: AsyncClient, hr_headers):
    response = await client.get("/compliance/dashboard", headers=hr_headers)

    assert response.status_code == 200
    assert response.json()["total_licenses"] == 0
    assert response.json()["compliance_score"] == 0


@pytest.mark.asyncio
async def test_alerts_sorted_by_urgency(client: AsyncClient, hr_headers, licensed_staff):
    response = await client.get("/compliance/alerts", headers=hr_headers)

    assert response.status_code == 200
    alerts = response.json()["alerts"]
    assert [alert["license_number"] for alert in alerts] == [
        "RN-100",
        "RN-101",
        "RN-102",
        "RN-103",
    ]
    assert [alert["severity"] for alert in alerts] == ["high", "high", "low", "low"]
    assert alerts[0]["expired"] is True
    assert alerts[0]["days_until_expiration"] == -3
    assert alerts[0]["employee_name"] == "Jane Doe"
    assert alerts[1]["issuer"] == "NV"
    assert alerts[1]["license_kind"] == "state_license"


@pytest.mark.asyncio
async def test_expiring_items_window(client: AsyncClient, hr_headers, licensed_staff):
    default = await client.get("/compliance/expiring", headers=hr_headers)
    wide = await client.get("/compliance/expiring", params={"days": 60}, headers=hr_headers)
    invalid = await client.get("/compliance/expiring", params={"days": -1}, headers=hr_headers)

    # Expired licenses belong to the alerts list, not the expiring report
    assert [item["license_number"] for item in default.json()["items"]] == ["RN-101"]
    assert default.json()["days"] == 30
    assert wide.json()["total"] == 2
    assert invalid.status_code == 400
    assert invalid.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_refresh_statuses_updates_cached_status(
    client: AsyncClient, db_session, admin_headers, licensed_staff
):
    response = await client.post("/compliance/refresh-statuses", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"checked": 5, "updated": 2, "expired": 1, "expiring": 1}
    licenses = licensed_staff["licenses"]
    await db_session.refresh(licenses["expired"])
    await db_session.refresh(licenses["due_10"])
    await db_session.refresh(licenses["due_45"])
    assert licenses["expired"].status == LicenseStatus.expired
    assert licenses["due_10"].status == LicenseStatus.expiring
    assert licenses["due_45"].status == LicenseStatus.active

    again = await client.post("/compliance/refresh-statuses", headers=admin_headers)
    assert again.json()["updated"] == 0


@pytest.mark.asyncio
async def test_refresh_statuses_is_admin_only(client: AsyncClient, hr_headers):
    response = await client.post("/compliance/refresh-statuses", headers=hr_headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"
