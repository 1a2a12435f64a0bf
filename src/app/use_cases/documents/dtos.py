"""
Document Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel


class DocumentResponse(BaseModel):
    """Document metadata; the blob itself is only served by download"""

    id: str
    employee_id: str
    document_type: str
    document_name: str
    file_name: str
    file_size: int
    mime_type: str
    storage_type: str
    description: Optional[str]
    archived: bool
    created_at: str


class DocumentListResponse(BaseModel):
    documents: List[DocumentResponse]
    total: int


class DocumentDownload(BaseModel):
    file_name: str
    mime_type: str
    content: bytes


class DeleteDocumentResponse(BaseModel):
    id: str
    deleted: bool
