"""
Delete Document Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.blob_store import DocumentStorage, StorageError, StoredBlob
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, UserRole

from .dtos import DeleteDocumentResponse

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """
    Use case for deleting a document.

    Business Rules:
    - Admin only
    - The blob is removed first; metadata is kept when the blob store fails
    """

    def __init__(self, uow: UnitOfWork, storage: DocumentStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self, user_id: UUID, role: str, document_id: UUID
    ) -> Result[DeleteDocumentResponse]:
        if role != UserRole.admin.value:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only admins can delete documents")
            )

        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None:
                return Return.err(Error("DOCUMENT_NOT_FOUND", "Document not found"))

            try:
                await self.storage.remove(
                    StoredBlob(document.storage_type, document.storage_key)
                )
            except StorageError as e:
                logger.error(f"Could not delete blob of document {document_id}: {e}")
                return Return.err(Error("STORAGE_ERROR", "Document could not be deleted"))

            await self.uow.documents.delete(document)

            audit = AuditEvent(
                entity_type="document",
                entity_id=document_id,
                performed_by=user_id,
                action="document_deleted",
                event_metadata={
                    "employee_id": str(document.employee_id),
                    "file_name": document.file_name,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(DeleteDocumentResponse(id=str(document_id), deleted=True))
