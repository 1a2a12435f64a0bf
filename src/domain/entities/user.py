"""
User Entity

Login account linked to an employee record.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - authenticated account.

    Business Rules:
    - Email is globally unique
    - Accounts created from invitations start as prospective_employee
    - Approval moves the role to the assigned role
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)  # bcrypt

    role: UserRole = Field(default=UserRole.prospective_employee)
    is_active: bool = Field(default=True)

    employee_id: Optional[UUID] = Field(default=None, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
