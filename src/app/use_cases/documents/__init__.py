"""
Document Use Cases

Employee document upload, download and deletion.
"""

from .delete_document_use_case import DeleteDocumentUseCase
from .download_document_use_case import DownloadDocumentUseCase
from .dtos import (
    DeleteDocumentResponse,
    DocumentDownload,
    DocumentListResponse,
    DocumentResponse,
)
from .list_documents_use_case import ListDocumentsUseCase
from .upload_document_use_case import UploadDocumentUseCase

__all__ = [
    "UploadDocumentUseCase",
    "DownloadDocumentUseCase",
    "DeleteDocumentUseCase",
    "ListDocumentsUseCase",
    "DocumentResponse",
    "DocumentListResponse",
    "DocumentDownload",
    "DeleteDocumentResponse",
]
