from src.domain.entities import Document

from .dtos import DocumentResponse


def to_document_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=str(document.id),
        employee_id=str(document.employee_id),
        document_type=document.document_type.value,
        document_name=document.document_name,
        file_name=document.file_name,
        file_size=document.file_size,
        mime_type=document.mime_type,
        storage_type=document.storage_type.value,
        description=document.description,
        archived=document.archived,
        created_at=document.created_at.isoformat(),
    )
