"""
List Pending Approvals Use Case

HR review queue with per-employee completion status.
"""

import math
from datetime import date
from typing import Optional

from libs.result import Error, Result, Return
from src.app.repositories.employee_repository import EmployeeSearch
from src.app.services.completeness import documents_status, forms_status
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import today
from src.domain.compliance import is_expired
from src.domain.entities import Employee, EmployeeStatus

from .dtos import ApprovalCompletionStatus, PaginatedPendingApprovals, PendingApprovalItem

SORTABLE_FIELDS = ("submitted_at", "created_at")


class ListPendingApprovalsUseCase:
    """
    Use case for listing employees awaiting HR review.

    Business Rules:
    - Only pending_approval employees
    - Optional submitted date range and work location filters
    - Sort by submitted or created date, newest first by default
    - Page-based pagination
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        page: int = 1,
        limit: int = 20,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        work_location: Optional[str] = None,
        sort_by: str = "submitted_at",
        sort_order: str = "desc",
    ) -> Result[PaginatedPendingApprovals]:
        if sort_by not in SORTABLE_FIELDS:
            return Return.err(
                Error("VALIDATION_FAILED", f"Cannot sort pending approvals by {sort_by}")
            )

        criteria = EmployeeSearch(
            statuses=[EmployeeStatus.pending_approval],
            from_date=from_date,
            to_date=to_date,
            date_field="submitted_at",
            work_location=work_location,
            sort_by=sort_by,
            descending=sort_order.lower() != "asc",
            offset=(page - 1) * limit,
            limit=limit,
        )

        async with self.uow:
            employees, total = await self.uow.employees.search(criteria)

            items = []
            for employee in employees:
                items.append(
                    PendingApprovalItem(
                        employee_id=str(employee.id),
                        first_name=employee.first_name,
                        last_name=employee.last_name,
                        work_email=employee.work_email,
                        job_title=employee.job_title,
                        work_location=employee.work_location,
                        status=employee.status.value,
                        submitted_at=employee.submitted_at.isoformat()
                        if employee.submitted_at
                        else None,
                        created_at=employee.created_at.isoformat(),
                        completion_status=await self._completion(employee),
                    )
                )

            return Return.ok(
                PaginatedPendingApprovals(
                    items=items,
                    page=page,
                    limit=limit,
                    total=total,
                    total_pages=math.ceil(total / limit) if total else 0,
                )
            )

    async def _completion(self, employee: Employee) -> ApprovalCompletionStatus:
        documents = await documents_status(self.uow, employee.id)
        forms = await forms_status(self.uow, employee.id)
        current_day = today()
        licenses = await self.uow.licenses.list_by_employee(employee.id)
        licenses_verified = not any(
            is_expired(item.expiration_date, current_day) for item in licenses
        )

        checks = (documents.complete, licenses_verified, forms.complete)
        return ApprovalCompletionStatus(
            documents_uploaded=documents.complete,
            licenses_verified=licenses_verified,
            forms_completed=forms.complete,
            overall_progress=round(sum(checks) / len(checks) * 100),
        )
