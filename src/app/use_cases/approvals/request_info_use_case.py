"""
Request Information Use Case

Sends a submitted onboarding back to the employee for more information.
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.notifier import Notification, Notifier, notify_safely
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, EmployeeStatus, InformationRequest
from src.domain.lifecycle import (
    LifecycleAction,
    blocked_transition_error,
    can_transition,
    sources_for,
    target_of,
)

from .dtos import RequestInfoResponse

logger = logging.getLogger(__name__)


class RequestInfoUseCase:
    """
    Use case for requesting more information from an employee.

    Business Rules:
    - At least one requested item
    - Status must be pending_approval
    - Creates an InformationRequest and moves the employee to
      information_needed; the employee resubmits through the full form
    - Repeatable across review rounds
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[Notifier] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        requester_id: UUID,
        employee_id: UUID,
        requested_items: List[str],
        due_date: Optional[date] = None,
        message: Optional[str] = None,
    ) -> Result[RequestInfoResponse]:
        items = [item.strip() for item in requested_items or [] if item and item.strip()]
        if not items:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    "At least one requested item is required",
                    details=[
                        {
                            "field": "requested_items",
                            "message": "At least one requested item is required",
                        }
                    ],
                )
            )

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            if not can_transition(LifecycleAction.request_info, employee.status):
                return Return.err(
                    blocked_transition_error(LifecycleAction.request_info, employee.status)
                )

            moved = await self.uow.employees.transition_status(
                employee_id,
                sources_for(LifecycleAction.request_info),
                target_of(LifecycleAction.request_info),
            )
            if not moved:
                current = await self.uow.employees.get_status(employee_id)
                if current is None:
                    return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))
                return Return.err(
                    blocked_transition_error(LifecycleAction.request_info, current)
                )

            request = InformationRequest(
                employee_id=employee_id,
                requested_items=items,
                message=message,
                due_date=due_date,
                requested_by=requester_id,
            )
            request = await self.uow.information_requests.create(request)

            audit = AuditEvent(
                entity_type="employee",
                entity_id=employee_id,
                performed_by=requester_id,
                action="request_info",
                event_metadata={
                    "request_id": str(request.id),
                    "requested_items": items,
                    "due_date": due_date.isoformat() if due_date else None,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Information requested from employee {employee_id}")

            user = await self.uow.users.get_by_employee_id(employee_id)
            recipient = user.email if user is not None else employee.work_email
            if recipient:
                await notify_safely(
                    self.notifier,
                    Notification(
                        kind="information_requested",
                        recipient=recipient,
                        subject="More information needed for your onboarding",
                        body=message or "Please update: " + ", ".join(items),
                        context={
                            "employee_id": str(employee_id),
                            "requested_items": items,
                        },
                    ),
                )

            return Return.ok(
                RequestInfoResponse(
                    employee_id=str(employee_id),
                    status=EmployeeStatus.information_needed.value,
                    request_id=str(request.id),
                    request_status=request.status.value,
                    requested_items=items,
                    due_date=due_date.isoformat() if due_date else None,
                    message="Information request sent",
                )
            )
