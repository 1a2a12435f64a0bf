"""
Approve Batch Use Case
"""

import logging
from typing import Iterable, Optional, Union
from uuid import UUID

from libs.result import Result, Return
from src.app.services.notifier import Notifier
from src.app.services.unit_of_work import UnitOfWork

from .approve_employee_use_case import ApproveEmployeeUseCase
from .dtos import BatchApprovalResponse, BatchApprovalResult

logger = logging.getLogger(__name__)


class ApproveBatchUseCase:
    """
    Use case for approving several employees at once.

    Each employee is approved in its own unit of work: one failure never
    rolls back another employee's approval. Ids that are not UUIDs fail
    on their own as unknown employees.
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[Notifier] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        approver_id: UUID,
        employee_ids: Iterable[Union[str, UUID]],
        comments: Optional[str],
        assigned_role: Optional[str] = None,
        enforce_documents: Optional[bool] = None,
        validate_licenses: Optional[bool] = None,
        require_background_check: Optional[bool] = None,
    ) -> Result[BatchApprovalResponse]:
        approve = ApproveEmployeeUseCase(self.uow, self.notifier)
        results = []
        for raw_id in employee_ids:
            try:
                employee_id = UUID(str(raw_id))
            except ValueError:
                results.append(
                    BatchApprovalResult(
                        employee_id=str(raw_id), success=False, error="Employee not found"
                    )
                )
                continue

            result = await approve.execute(
                approver_id,
                employee_id,
                comments,
                assigned_role=assigned_role,
                enforce_documents=enforce_documents,
                validate_licenses=validate_licenses,
                require_background_check=require_background_check,
            )
            if result.is_ok():
                results.append(
                    BatchApprovalResult(
                        employee_id=str(employee_id),
                        success=True,
                        status=result.value.status,
                    )
                )
            else:
                results.append(
                    BatchApprovalResult(
                        employee_id=str(employee_id),
                        success=False,
                        error=result.error.message,
                    )
                )

        approved = sum(1 for item in results if item.success)
        logger.info(
            f"Batch approval by {approver_id}: {approved} approved, "
            f"{len(results) - approved} failed"
        )
        return Return.ok(
            BatchApprovalResponse(
                approved=approved, failed=len(results) - approved, results=results
            )
        )
