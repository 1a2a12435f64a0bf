"""
HR Approval API Routes

Review queue and decisions on submitted onboardings.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.utils.errors import parse_uuid, raise_for_error
from src.app.services.notifier import Notifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.approvals import (
    ApprovalHistoryUseCase,
    ApproveBatchUseCase,
    ApproveEmployeeResponse,
    ApproveEmployeeUseCase,
    BatchApprovalResponse,
    ListPendingApprovalsUseCase,
    PaginatedApprovalHistory,
    PaginatedPendingApprovals,
    RejectEmployeeResponse,
    RejectEmployeeUseCase,
    RequestInfoResponse,
    RequestInfoUseCase,
)
from src.depends import get_notifier, get_unit_of_work, require_roles

router = APIRouter(prefix="/hr", tags=["Approvals"])

hr_staff = require_roles("admin", "hr")


class ApproveRequest(BaseModel):
    """Precondition flags default to the configured approval policy"""

    comments: Optional[str] = None
    assigned_role: Optional[str] = None
    enforce_documents: Optional[bool] = None
    validate_licenses: Optional[bool] = None
    require_background_check: Optional[bool] = None
    activate_account: bool = True
    send_notification: bool = True


class RejectRequest(BaseModel):
    reason: Optional[str] = None
    details: Optional[str] = None
    deactivate_account: bool = True
    archive_documents: bool = False
    send_notification: bool = True


class RequestInfoRequest(BaseModel):
    requested_items: List[str] = Field(default_factory=list)
    due_date: Optional[date] = None
    message: Optional[str] = None


class ApproveBatchRequest(BaseModel):
    employee_ids: List[str] = Field(..., min_length=1)
    comments: Optional[str] = None
    assigned_role: Optional[str] = None
    enforce_documents: Optional[bool] = None
    validate_licenses: Optional[bool] = None
    require_background_check: Optional[bool] = None


@router.get(
    "/pending-approvals",
    status_code=status.HTTP_200_OK,
    response_model=PaginatedPendingApprovals,
)
async def list_pending_approvals(
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    from_date: Optional[date] = Query(None, description="Submitted on or after"),
    to_date: Optional[date] = Query(None, description="Submitted on or before"),
    work_location: Optional[str] = Query(None),
    sort_by: str = Query("submitted_at", description="submitted_at or created_at"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
):
    """Employees awaiting review with per-employee completion status"""
    result = await ListPendingApprovalsUseCase(uow).execute(
        page=page,
        limit=limit,
        from_date=from_date,
        to_date=to_date,
        work_location=work_location,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/approval-history",
    status_code=status.HTTP_200_OK,
    response_model=PaginatedApprovalHistory,
)
async def approval_history(
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    decision: Optional[str] = Query(None, alias="status", description="approved or rejected"),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    decided_by: Optional[str] = Query(None),
):
    """Past approve/reject decisions, most recent first"""
    result = await ApprovalHistoryUseCase(uow).execute(
        page=page,
        limit=limit,
        status=decision,
        from_date=from_date,
        to_date=to_date,
        decided_by=parse_uuid(decided_by, "decided_by") if decided_by else None,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/approve/{employee_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApproveEmployeeResponse,
)
async def approve_employee(
    employee_id: str,
    request: ApproveRequest,
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Approve a pending employee.

    Raises:
        - 400 Bad Request: COMMENTS_REQUIRED, ALREADY_PROCESSED, INVALID_STATUS,
                           DOCUMENTS_INCOMPLETE, LICENSE_EXPIRED,
                           BACKGROUND_CHECK_INCOMPLETE, INVALID_ROLE
        - 404 Not Found: EMPLOYEE_NOT_FOUND
    """
    result = await ApproveEmployeeUseCase(uow, notifier).execute(
        UUID(current_user["user_id"]),
        parse_uuid(employee_id, "employee_id"),
        request.comments,
        assigned_role=request.assigned_role,
        enforce_documents=request.enforce_documents,
        validate_licenses=request.validate_licenses,
        require_background_check=request.require_background_check,
        activate_account=request.activate_account,
        send_notification=request.send_notification,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/reject/{employee_id}",
    status_code=status.HTTP_200_OK,
    response_model=RejectEmployeeResponse,
)
async def reject_employee(
    employee_id: str,
    request: RejectRequest,
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Reject a pending employee.

    Raises:
        - 400 Bad Request: REASON_REQUIRED, ALREADY_PROCESSED, INVALID_STATUS
        - 404 Not Found: EMPLOYEE_NOT_FOUND
    """
    result = await RejectEmployeeUseCase(uow, notifier).execute(
        UUID(current_user["user_id"]),
        parse_uuid(employee_id, "employee_id"),
        request.reason,
        details=request.details,
        deactivate_account=request.deactivate_account,
        archive_documents=request.archive_documents,
        send_notification=request.send_notification,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/request-info/{employee_id}",
    status_code=status.HTTP_200_OK,
    response_model=RequestInfoResponse,
)
async def request_info(
    employee_id: str,
    request: RequestInfoRequest,
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Ask a pending employee for more information.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED, ALREADY_PROCESSED, INVALID_STATUS
        - 404 Not Found: EMPLOYEE_NOT_FOUND
    """
    result = await RequestInfoUseCase(uow, notifier).execute(
        UUID(current_user["user_id"]),
        parse_uuid(employee_id, "employee_id"),
        request.requested_items,
        due_date=request.due_date,
        message=request.message,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/approve-batch",
    status_code=status.HTTP_200_OK,
    response_model=BatchApprovalResponse,
)
async def approve_batch(
    request: ApproveBatchRequest,
    current_user: dict = Depends(hr_staff),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """Approve several employees; each succeeds or fails on its own"""
    result = await ApproveBatchUseCase(uow, notifier).execute(
        UUID(current_user["user_id"]),
        request.employee_ids,
        request.comments,
        assigned_role=request.assigned_role,
        enforce_documents=request.enforce_documents,
        validate_licenses=request.validate_licenses,
        require_background_check=request.require_background_check,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
