"""
Compliance API Routes

License and certification expiration tracking.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.utils.errors import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.compliance import (
    ComplianceAlertsResponse,
    ComplianceDashboardResponse,
    ExpiringItemsResponse,
    GetComplianceAlertsUseCase,
    GetComplianceDashboardUseCase,
    GetExpiringItemsUseCase,
    RefreshLicenseStatusesUseCase,
    RefreshStatusesResponse,
)
from src.depends import get_unit_of_work, require_roles

router = APIRouter(prefix="/compliance", tags=["Compliance"])

hr_staff = require_roles("admin", "hr")


@router.get(
    "/dashboard",
    status_code=status.HTTP_200_OK,
    response_model=ComplianceDashboardResponse,
)
async def compliance_dashboard(
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Credential counts per expiration bucket and the compliance score"""
    result = await GetComplianceDashboardUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/alerts",
    status_code=status.HTTP_200_OK,
    response_model=ComplianceAlertsResponse,
)
async def compliance_alerts(
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Expired credentials and those expiring within 90 days, most urgent first"""
    result = await GetComplianceAlertsUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/expiring",
    status_code=status.HTTP_200_OK,
    response_model=ExpiringItemsResponse,
)
async def expiring_items(
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
    days: int = Query(30, description="Window in days"),
):
    """Credentials expiring within the next N days"""
    result = await GetExpiringItemsUseCase(uow).execute(days=days)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/refresh-statuses",
    status_code=status.HTTP_200_OK,
    response_model=RefreshStatusesResponse,
)
async def refresh_statuses(
    current_user: dict = Depends(require_roles("admin")),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Recompute the cached status of every tracked credential (admin)"""
    result = await RefreshLicenseStatusesUseCase(uow).execute(
        performed_by=UUID(current_user["user_id"])
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
