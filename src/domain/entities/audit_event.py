"""
AuditEvent Entity

Immutable log of lifecycle and compliance events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of state-changing actions.

    Business Rules:
    - Immutable (never updated or deleted)
    - Written in the same transaction as the change it records
    - performed_by nullable for system jobs (expiration sweep)
    - Metadata stores additional context (comments, reasons, counts)
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    entity_type: str = Field(max_length=50)  # e.g., "employee", "invitation"
    entity_id: Optional[UUID] = Field(default=None, index=True)
    performed_by: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "approve", "submit"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_entity", "entity_type", "entity_id"),
    )
