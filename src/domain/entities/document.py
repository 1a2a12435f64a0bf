"""
Document Entities

Uploaded employee documents and the catalogue of required document types.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import DocumentType, StorageType


class Document(SQLModel, table=True):
    """
    Document entity - metadata for a stored blob.

    Business Rules:
    - File size limited to MAX_UPLOAD_SIZE_BYTES (10 MB)
    - Only pdf, jpg, jpeg, png, doc, docx are accepted
    - Archived documents do not count towards completeness
    """

    __tablename__ = "documents"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    employee_id: UUID = Field(foreign_key="employees.id", ondelete="CASCADE", index=True)

    document_type: DocumentType = Field(nullable=False)
    document_name: str = Field(max_length=255)
    file_name: str = Field(max_length=255)
    file_size: int = Field(default=0)
    mime_type: str = Field(max_length=100)

    storage_type: StorageType = Field(default=StorageType.local)
    storage_key: str = Field(max_length=500)

    description: Optional[str] = Field(default=None, max_length=500)
    archived: bool = Field(default=False)
    uploaded_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_document_employee_type", "employee_id", "document_type"),
    )


class RequiredDocumentType(SQLModel, table=True):
    """Catalogue of document types an employee has to upload"""

    __tablename__ = "required_document_types"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    document_type: DocumentType = Field(nullable=False)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    is_required: bool = Field(default=True)
