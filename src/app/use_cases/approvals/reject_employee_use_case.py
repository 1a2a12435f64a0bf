"""
Reject Employee Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.notifier import Notification, Notifier, notify_safely
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, EmployeeStatus
from src.domain.lifecycle import (
    LifecycleAction,
    blocked_transition_error,
    can_transition,
    sources_for,
    target_of,
)

from .dtos import RejectEmployeeResponse

logger = logging.getLogger(__name__)


class RejectEmployeeUseCase:
    """
    Use case for rejecting an employee.

    Business Rules:
    - A rejection reason is required
    - Status must be pending_approval; a concurrent decision wins
    - Linked account can be deactivated and documents archived
    - Rejected is terminal for the onboarding cycle
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[Notifier] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        rejecter_id: UUID,
        employee_id: UUID,
        reason: Optional[str],
        details: Optional[str] = None,
        deactivate_account: bool = True,
        archive_documents: bool = False,
        send_notification: bool = True,
    ) -> Result[RejectEmployeeResponse]:
        reason = (reason or "").strip()
        if not reason:
            return Return.err(Error("REASON_REQUIRED", "A rejection reason is required"))

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            if not can_transition(LifecycleAction.reject, employee.status):
                return Return.err(
                    blocked_transition_error(LifecycleAction.reject, employee.status)
                )

            rejected_at = utcnow()
            moved = await self.uow.employees.transition_status(
                employee_id,
                sources_for(LifecycleAction.reject),
                target_of(LifecycleAction.reject),
                {
                    "rejected_at": rejected_at,
                    "rejected_by": rejecter_id,
                    "rejection_reason": reason,
                    "rejection_details": details,
                },
            )
            if not moved:
                current = await self.uow.employees.get_status(employee_id)
                if current is None:
                    return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))
                return Return.err(blocked_transition_error(LifecycleAction.reject, current))

            user = await self.uow.users.get_by_employee_id(employee_id)
            if user is not None and deactivate_account and user.is_active:
                user.is_active = False
                await self.uow.users.update(user)

            archived = 0
            if archive_documents:
                archived = await self.uow.documents.archive_by_employee(employee_id)

            audit = AuditEvent(
                entity_type="employee",
                entity_id=employee_id,
                performed_by=rejecter_id,
                action="reject",
                event_metadata={
                    "reason": reason,
                    "details": details,
                    "account_deactivated": bool(user is not None and deactivate_account),
                    "documents_archived": archived,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Employee {employee_id} rejected by {rejecter_id}")

            recipient = user.email if user is not None else employee.work_email
            if send_notification and recipient:
                await notify_safely(
                    self.notifier,
                    Notification(
                        kind="rejected",
                        recipient=recipient,
                        subject="Update on your onboarding",
                        body=f"Your onboarding was not approved: {reason}",
                        context={"employee_id": str(employee_id)},
                    ),
                )

            return Return.ok(
                RejectEmployeeResponse(
                    employee_id=str(employee_id),
                    status=EmployeeStatus.rejected.value,
                    rejected_at=rejected_at.isoformat(),
                    rejected_by=str(rejecter_id),
                    documents_archived=archived,
                    message="Employee rejected",
                )
            )
