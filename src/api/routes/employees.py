"""
Employee API Routes

Direct employee management by HR and admins.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.utils.errors import claim_uuid, parse_uuid, raise_for_error
from src.app.services.blob_store import DocumentStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.documents import DocumentListResponse, ListDocumentsUseCase
from src.app.use_cases.employees import (
    CreateEmployeeUseCase,
    DeactivateEmployeeResponse,
    DeactivateEmployeeUseCase,
    DeleteEmployeeResponse,
    DeleteEmployeeUseCase,
    EmployeeDetailsResponse,
    EmployeeSummary,
    GetEmployeeUseCase,
)
from src.depends import get_current_user, get_document_storage, get_unit_of_work

router = APIRouter(prefix="/employees", tags=["Employees"])


class CreateEmployeeRequest(BaseModel):
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    work_email: Optional[str] = None
    personal_email: Optional[str] = None
    job_title: Optional[str] = Field(None, max_length=100)
    work_location: Optional[str] = Field(None, max_length=100)
    cell_phone: Optional[str] = Field(None, max_length=20)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=EmployeeSummary,
)
async def create_employee(
    request: CreateEmployeeRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create an employee directly (admin, hr).

    Raises:
        - 400 Bad Request: VALIDATION_FAILED
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 409 Conflict: CONFLICT when the work email is taken
    """
    result = await CreateEmployeeUseCase(uow).execute(
        UUID(current_user["user_id"]),
        current_user["role"],
        request.first_name,
        request.last_name,
        work_email=request.work_email,
        personal_email=request.personal_email,
        job_title=request.job_title,
        work_location=request.work_location,
        cell_phone=request.cell_phone,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{employee_id}",
    status_code=status.HTTP_200_OK,
    response_model=EmployeeDetailsResponse,
)
async def get_employee(
    employee_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Full employee record with owned collections; SSN masked"""
    result = await GetEmployeeUseCase(uow).execute(
        current_user["role"],
        claim_uuid(current_user, "employee_id"),
        parse_uuid(employee_id, "employee_id"),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{employee_id}/documents",
    status_code=status.HTTP_200_OK,
    response_model=DocumentListResponse,
)
async def list_employee_documents(
    employee_id: str,
    include_archived: bool = False,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Documents uploaded for an employee, newest first"""
    result = await ListDocumentsUseCase(uow).execute(
        current_user["role"],
        claim_uuid(current_user, "employee_id"),
        parse_uuid(employee_id, "employee_id"),
        include_archived=include_archived,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{employee_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=DeactivateEmployeeResponse,
)
async def deactivate_employee(
    employee_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    End an active employment (admin).

    Raises:
        - 400 Bad Request: INVALID_STATUS unless the employee is active
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: EMPLOYEE_NOT_FOUND
    """
    result = await DeactivateEmployeeUseCase(uow).execute(
        UUID(current_user["user_id"]),
        current_user["role"],
        parse_uuid(employee_id, "employee_id"),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteEmployeeResponse,
)
async def delete_employee(
    employee_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """
    Hard delete an employee and everything it owns (admin).

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: EMPLOYEE_NOT_FOUND
    """
    result = await DeleteEmployeeUseCase(uow, storage).execute(
        UUID(current_user["user_id"]),
        current_user["role"],
        parse_uuid(employee_id, "employee_id"),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
