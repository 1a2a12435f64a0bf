"""
Invitation Entity

Single-use invitations that let a prospective employee start onboarding.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import InvitationStatus, UserRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - invites a person to onboard as an employee.

    Business Rules:
    - Created by admin/hr
    - Expires after INVITATION_EXPIRY_DAYS (7 by default)
    - Only the SHA-256 hash of the token is stored
    - At most one pending, unexpired invitation per email
    - Terminal once accepted, expired or cancelled
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255, nullable=False, index=True)
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)

    # Role the account receives once onboarding is approved
    role: UserRole = Field(default=UserRole.viewer)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    invited_by: Optional[UUID] = Field(default=None)
    employee_id: Optional[UUID] = Field(default=None, index=True)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_status_email", "status", "email"),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now
