"""
Record Access Rules

Staff roles see every employee; a prospective employee only their own.
"""

from typing import Optional
from uuid import UUID

from src.domain.entities import UserRole

STAFF_ROLES = (UserRole.admin.value, UserRole.hr.value)


def is_staff(role: str) -> bool:
    return role in STAFF_ROLES


def can_access_employee(
    role: str, actor_employee_id: Optional[UUID], employee_id: UUID
) -> bool:
    if is_staff(role):
        return True
    return (
        role == UserRole.prospective_employee.value
        and actor_employee_id is not None
        and actor_employee_id == employee_id
    )
