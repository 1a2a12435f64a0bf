"""
Deactivate Employee Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, EmployeeStatus, UserRole
from src.domain.lifecycle import (
    LifecycleAction,
    blocked_transition_error,
    can_transition,
    sources_for,
    target_of,
)

from .dtos import DeactivateEmployeeResponse

logger = logging.getLogger(__name__)


class DeactivateEmployeeUseCase:
    """
    Use case for ending an active employment.

    Business Rules:
    - Admin only
    - active -> inactive; the linked account is disabled
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, role: str, employee_id: UUID
    ) -> Result[DeactivateEmployeeResponse]:
        if role != UserRole.admin.value:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only admins can deactivate employees")
            )

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            if not can_transition(LifecycleAction.deactivate, employee.status):
                return Return.err(
                    blocked_transition_error(LifecycleAction.deactivate, employee.status)
                )

            moved = await self.uow.employees.transition_status(
                employee_id,
                sources_for(LifecycleAction.deactivate),
                target_of(LifecycleAction.deactivate),
            )
            if not moved:
                current = await self.uow.employees.get_status(employee_id)
                if current is None:
                    return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))
                return Return.err(
                    blocked_transition_error(LifecycleAction.deactivate, current)
                )

            user = await self.uow.users.get_by_employee_id(employee_id)
            account_deactivated = False
            if user is not None and user.is_active:
                user.is_active = False
                await self.uow.users.update(user)
                account_deactivated = True

            audit = AuditEvent(
                entity_type="employee",
                entity_id=employee_id,
                performed_by=user_id,
                action="deactivate",
                event_metadata={"account_deactivated": account_deactivated},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Employee {employee_id} deactivated by {user_id}")

            return Return.ok(
                DeactivateEmployeeResponse(
                    id=str(employee_id),
                    status=EmployeeStatus.inactive.value,
                    account_deactivated=account_deactivated,
                )
            )
