"""
Approval History Use Case
"""

import math
from datetime import date
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.employee_repository import EmployeeSearch
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EmployeeStatus

from .dtos import ApprovalHistoryItem, PaginatedApprovalHistory

# Filter value -> status reached by the decision
DECISION_STATUSES = {
    "approved": EmployeeStatus.active,
    "rejected": EmployeeStatus.rejected,
}


class ApprovalHistoryUseCase:
    """
    Use case for listing past HR decisions.

    Business Rules:
    - Approved (active) and rejected employees, most recent decision first
    - Optional decision type, decision date range and decider filters
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        page: int = 1,
        limit: int = 20,
        status: Optional[str] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        decided_by: Optional[UUID] = None,
    ) -> Result[PaginatedApprovalHistory]:
        if status is None:
            statuses = list(DECISION_STATUSES.values())
        elif status in DECISION_STATUSES:
            statuses = [DECISION_STATUSES[status]]
        else:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    f"Unknown decision status: {status} (expected approved or rejected)",
                )
            )

        criteria = EmployeeSearch(
            statuses=statuses,
            from_date=from_date,
            to_date=to_date,
            date_field="decided_at",
            decided_by=decided_by,
            sort_by="decided_at",
            descending=True,
            offset=(page - 1) * limit,
            limit=limit,
        )

        async with self.uow:
            employees, total = await self.uow.employees.search(criteria)

            items = []
            for employee in employees:
                approved = employee.status == EmployeeStatus.active
                decided_at = employee.approved_at if approved else employee.rejected_at
                decided_by_id = employee.approved_by if approved else employee.rejected_by
                items.append(
                    ApprovalHistoryItem(
                        employee_id=str(employee.id),
                        first_name=employee.first_name,
                        last_name=employee.last_name,
                        status=employee.status.value,
                        decided_at=decided_at.isoformat() if decided_at else None,
                        decided_by=str(decided_by_id) if decided_by_id else None,
                        approval_comments=employee.approval_comments,
                        rejection_reason=employee.rejection_reason,
                    )
                )

            return Return.ok(
                PaginatedApprovalHistory(
                    items=items,
                    page=page,
                    limit=limit,
                    total=total,
                    total_pages=math.ceil(total / limit) if total else 0,
                )
            )
