"""
Accept Invitation Use Case

Redeems an invitation: creates the account and the prospective employee.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.api.utils.jwt import create_access_token
from src.app.services.security import hash_password, hash_token, password_policy_violation
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    AuditEvent,
    Employee,
    EmployeeStatus,
    User,
    UserRole,
)

from .dtos import AcceptInvitationResponse
from .validate_invitation_use_case import redeemability_error

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for redeeming an invitation.

    Business Rules:
    - Token must resolve to a pending, unexpired invitation
    - Password policy: 8+ characters with a letter and a digit; confirmation must match
    - Email must not already have an account
    - Creates Employee (status=prospective) and User (role=prospective_employee)
    - Invitation becomes accepted and remembers the employee it created;
      of two simultaneous redemptions only the first succeeds
    - Returns an onboarding access token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token: str, password: str, confirm_password: Optional[str] = None
    ) -> Result[AcceptInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(hash_token(token))
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            now = utcnow()
            error = redeemability_error(invitation, now)
            if error is not None:
                return Return.err(error)

            violation = password_policy_violation(password)
            if violation:
                return Return.err(
                    Error(
                        "INVALID_PASSWORD",
                        violation,
                        details=[{"field": "password", "message": violation}],
                    )
                )
            if confirm_password is not None and confirm_password != password:
                return Return.err(
                    Error(
                        "INVALID_PASSWORD",
                        "Passwords do not match",
                        details=[
                            {"field": "confirm_password", "message": "Passwords do not match"}
                        ],
                    )
                )

            if await self.uow.users.get_by_email(invitation.email):
                return Return.err(
                    Error("ACCOUNT_EXISTS", "An account already exists for this email")
                )

            employee = Employee(
                first_name=invitation.first_name,
                last_name=invitation.last_name,
                work_email=invitation.email,
                status=EmployeeStatus.prospective,
            )
            claimed = await self.uow.invitations.mark_accepted(
                invitation.id, employee.id, now
            )
            if not claimed:
                return Return.err(
                    Error("INVITATION_ALREADY_USED", "This invitation has already been used")
                )

            try:
                employee = await self.uow.employees.create(employee)
                user = await self.uow.users.create(
                    User(
                        email=invitation.email,
                        password_hash=hash_password(password),
                        role=UserRole.prospective_employee,
                        employee_id=employee.id,
                    )
                )
            except IntegrityError as e:
                logger.warning(f"Invitation {invitation.id} could not be redeemed: {e}")
                return Return.err(
                    Error("ACCOUNT_EXISTS", "An account already exists for this email")
                )

            audit = AuditEvent(
                entity_type="invitation",
                entity_id=invitation.id,
                performed_by=user.id,
                action="invitation_accepted",
                event_metadata={"employee_id": str(employee.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Invitation {invitation.id} accepted, employee {employee.id}")

            access_token = create_access_token(
                user_id=user.id,
                role=user.role.value,
                employee_id=employee.id,
            )

            return Return.ok(
                AcceptInvitationResponse(
                    access_token=access_token,
                    user_id=str(user.id),
                    employee_id=str(employee.id),
                    role=user.role.value,
                )
            )
