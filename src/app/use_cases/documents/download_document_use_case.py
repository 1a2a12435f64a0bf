"""
Download Document Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access import can_access_employee
from src.app.services.blob_store import DocumentStorage, StorageError, StoredBlob
from src.app.services.unit_of_work import UnitOfWork

from .dtos import DocumentDownload

logger = logging.getLogger(__name__)


class DownloadDocumentUseCase:
    def __init__(self, uow: UnitOfWork, storage: DocumentStorage):
        self.uow = uow
        self.storage = storage

    async def execute(
        self, role: str, actor_employee_id: Optional[UUID], document_id: UUID
    ) -> Result[DocumentDownload]:
        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None or not can_access_employee(
                role, actor_employee_id, document.employee_id
            ):
                return Return.err(Error("DOCUMENT_NOT_FOUND", "Document not found"))

            try:
                content = await self.storage.load(
                    StoredBlob(document.storage_type, document.storage_key)
                )
            except StorageError as e:
                logger.error(f"Could not read document {document_id}: {e}")
                return Return.err(Error("STORAGE_ERROR", "Document could not be read"))

            return Return.ok(
                DocumentDownload(
                    file_name=document.file_name,
                    mime_type=document.mime_type,
                    content=content,
                )
            )
