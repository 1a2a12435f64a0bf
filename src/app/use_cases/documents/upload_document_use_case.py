"""
Upload Document Use Case

Validates an uploaded file, stores the blob and records its metadata.
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

from libs.result import Error, Result, Return
from config import ApplicationConfig
from src.app.services.access import can_access_employee
from src.app.services.blob_store import DocumentStorage, StorageError
from src.app.services.file_validation import (
    ALLOWED_FILE_TYPES,
    file_extension,
    sanitize_description,
    sanitize_filename,
    validate_upload,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Document, DocumentType

from .dtos import DocumentResponse
from .mappers import to_document_response

logger = logging.getLogger(__name__)


class UploadDocumentUseCase:
    """
    Use case for uploading an employee document.

    Business Rules:
    - Staff upload for anyone; a prospective employee only for themselves
    - document_type must be one of the known document types
    - pdf, jpg, jpeg, png, doc, docx up to MAX_UPLOAD_SIZE_BYTES; content
      must match the extension
    - File name is sanitized; description limited and free of script markers
    - Blob goes to the configured backend, falling back once to local
    """

    def __init__(
        self,
        uow: UnitOfWork,
        storage: DocumentStorage,
        max_size: Optional[int] = None,
    ):
        self.uow = uow
        self.storage = storage
        self.max_size = max_size or ApplicationConfig.MAX_UPLOAD_SIZE_BYTES

    async def execute(
        self,
        user_id: UUID,
        role: str,
        actor_employee_id: Optional[UUID],
        employee_id: UUID,
        document_type: str,
        file_name: str,
        content_type: Optional[str],
        content: bytes,
        document_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Result[DocumentResponse]:
        if not can_access_employee(role, actor_employee_id, employee_id):
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    "You can only upload documents to your own record",
                )
            )

        try:
            kind = DocumentType(document_type)
        except ValueError:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    f"Unknown document type: {document_type}",
                    details=[{"field": "document_type", "message": "Unknown document type"}],
                )
            )

        try:
            description = sanitize_description(description)
        except ValueError as e:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    str(e),
                    details=[{"field": "description", "message": str(e)}],
                )
            )

        safe_name = sanitize_filename(file_name or "")
        invalid = validate_upload(safe_name, content_type, content, self.max_size)
        if invalid is not None:
            return Return.err(invalid)

        if content_type:
            mime_type = content_type.split(";")[0].strip()
        else:
            mime_type = sorted(ALLOWED_FILE_TYPES[file_extension(safe_name)])[0]

        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            key = f"documents/{employee_id}/{uuid4().hex}_{safe_name}"
            try:
                blob = await self.storage.save(key, content, mime_type)
            except StorageError as e:
                logger.error(f"Could not store document for employee {employee_id}: {e}")
                return Return.err(Error("STORAGE_ERROR", "Document could not be stored"))

            document = Document(
                employee_id=employee_id,
                document_type=kind,
                document_name=(document_name or "").strip() or safe_name,
                file_name=safe_name,
                file_size=len(content),
                mime_type=mime_type,
                storage_type=blob.storage_type,
                storage_key=blob.key,
                description=description,
                uploaded_by=user_id,
            )
            document = await self.uow.documents.create(document)

            audit = AuditEvent(
                entity_type="document",
                entity_id=document.id,
                performed_by=user_id,
                action="document_uploaded",
                event_metadata={
                    "employee_id": str(employee_id),
                    "document_type": kind.value,
                    "file_size": len(content),
                    "storage_type": blob.storage_type.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(to_document_response(document))
