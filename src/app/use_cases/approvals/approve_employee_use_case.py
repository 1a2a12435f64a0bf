"""
Approve Employee Use Case

Activates an employee whose onboarding is awaiting HR review.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from config import ApplicationConfig
from src.app.services.completeness import documents_status
from src.app.services.notifier import Notification, Notifier, notify_safely
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import today, utcnow
from src.domain.compliance import is_expired
from src.domain.entities import (
    AuditEvent,
    BackgroundCheckStatus,
    Employee,
    EmployeeStatus,
    UserRole,
)
from src.domain.lifecycle import (
    LifecycleAction,
    blocked_transition_error,
    can_transition,
    sources_for,
    target_of,
)

from .dtos import ApproveEmployeeResponse

logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES = (UserRole.admin, UserRole.hr, UserRole.viewer)


def _flag(value: Optional[bool], default: bool) -> bool:
    return default if value is None else value


class ApproveEmployeeUseCase:
    """
    Use case for approving an employee.

    Business Rules:
    - Approval comments are required
    - Status must be pending_approval
    - Optional preconditions, each with its own error:
      required documents uploaded, no expired license, background check done
    - The status change is a compare-and-swap; a concurrent decision wins
      and this call reports ALREADY_PROCESSED
    - Linked account moves from prospective_employee to the assigned role
      and is reactivated when requested
    - Employee is notified after commit (best-effort)
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[Notifier] = None):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self,
        approver_id: UUID,
        employee_id: UUID,
        comments: Optional[str],
        assigned_role: Optional[str] = None,
        enforce_documents: Optional[bool] = None,
        validate_licenses: Optional[bool] = None,
        require_background_check: Optional[bool] = None,
        activate_account: bool = True,
        send_notification: bool = True,
    ) -> Result[ApproveEmployeeResponse]:
        comments = (comments or "").strip()
        if not comments:
            return Return.err(
                Error("COMMENTS_REQUIRED", "Approval comments are required")
            )

        if assigned_role is not None and assigned_role not in [
            role.value for role in ASSIGNABLE_ROLES
        ]:
            return Return.err(
                Error("INVALID_ROLE", f"Role '{assigned_role}' cannot be assigned")
            )

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            if not can_transition(LifecycleAction.approve, employee.status):
                return Return.err(
                    blocked_transition_error(LifecycleAction.approve, employee.status)
                )

            precondition = await self._check_preconditions(
                employee,
                _flag(enforce_documents, ApplicationConfig.APPROVAL_ENFORCE_DOCUMENTS),
                _flag(validate_licenses, ApplicationConfig.APPROVAL_VALIDATE_LICENSES),
                _flag(
                    require_background_check,
                    ApplicationConfig.APPROVAL_REQUIRE_BACKGROUND_CHECK,
                ),
            )
            if precondition is not None:
                return Return.err(precondition)

            approved_at = utcnow()
            moved = await self.uow.employees.transition_status(
                employee_id,
                sources_for(LifecycleAction.approve),
                target_of(LifecycleAction.approve),
                {
                    "approved_at": approved_at,
                    "approved_by": approver_id,
                    "approval_comments": comments,
                },
            )
            if not moved:
                current = await self.uow.employees.get_status(employee_id)
                if current is None:
                    return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))
                return Return.err(blocked_transition_error(LifecycleAction.approve, current))

            role = await self._resolve_role(employee_id, assigned_role)

            user = await self.uow.users.get_by_employee_id(employee_id)
            if user is not None:
                if user.role == UserRole.prospective_employee:
                    user.role = UserRole(role)
                if activate_account and not user.is_active:
                    user.is_active = True
                await self.uow.users.update(user)

            audit = AuditEvent(
                entity_type="employee",
                entity_id=employee_id,
                performed_by=approver_id,
                action="approve",
                event_metadata={
                    "comments": comments,
                    "assigned_role": role,
                    "account_linked": user is not None,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Employee {employee_id} approved by {approver_id}")

            recipient = user.email if user is not None else employee.work_email
            if send_notification and recipient:
                await notify_safely(
                    self.notifier,
                    Notification(
                        kind="approved",
                        recipient=recipient,
                        subject="Your onboarding has been approved",
                        body=f"Welcome aboard, {employee.first_name}!",
                        context={"employee_id": str(employee_id), "role": role},
                    ),
                )

            return Return.ok(
                ApproveEmployeeResponse(
                    employee_id=str(employee_id),
                    status=EmployeeStatus.active.value,
                    approved_at=approved_at.isoformat(),
                    approved_by=str(approver_id),
                    assigned_role=role,
                    message="Employee approved",
                )
            )

    async def _check_preconditions(
        self,
        employee: Employee,
        enforce_documents: bool,
        validate_licenses: bool,
        require_background_check: bool,
    ) -> Optional[Error]:
        if enforce_documents:
            status = await documents_status(self.uow, employee.id)
            if not status.complete:
                return Error(
                    "DOCUMENTS_INCOMPLETE",
                    status.message,
                    details=[{"field": "documents", "message": name} for name in status.missing],
                )

        if validate_licenses:
            current_day = today()
            expired = [
                item
                for item in await self.uow.licenses.list_by_employee(employee.id)
                if is_expired(item.expiration_date, current_day)
            ]
            if expired:
                count = len(expired)
                return Error(
                    "LICENSE_EXPIRED",
                    f"{count} license{'s' if count != 1 else ''} expired; "
                    f"renewal is required before approval",
                    details=[
                        {
                            "field": item.kind.value,
                            "message": f"{item.number} expired on "
                            f"{item.expiration_date.isoformat()}",
                        }
                        for item in expired
                    ],
                )

        if (
            require_background_check
            and employee.background_check_status != BackgroundCheckStatus.completed
        ):
            return Error(
                "BACKGROUND_CHECK_INCOMPLETE",
                "Background check must be completed before approval "
                f"(status: {employee.background_check_status.value})",
            )

        return None

    async def _resolve_role(self, employee_id: UUID, assigned_role: Optional[str]) -> str:
        if assigned_role:
            return assigned_role
        invitation = await self.uow.invitations.get_by_employee_id(employee_id)
        if invitation is not None and invitation.role != UserRole.prospective_employee:
            return invitation.role.value
        return ApplicationConfig.DEFAULT_EMPLOYEE_ROLE
