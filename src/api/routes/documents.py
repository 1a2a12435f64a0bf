"""
Document API Routes

Multipart uploads and downloads of employee documents.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import Response

from src.api.utils.errors import claim_uuid, parse_uuid, raise_for_error
from src.app.services.blob_store import DocumentStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.documents import (
    DeleteDocumentResponse,
    DeleteDocumentUseCase,
    DocumentResponse,
    DownloadDocumentUseCase,
    UploadDocumentUseCase,
)
from src.depends import get_current_user, get_document_storage, get_unit_of_work

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    response_model=DocumentResponse,
)
async def upload_document(
    file: UploadFile = File(...),
    employee_id: str = Form(...),
    document_type: str = Form(...),
    document_name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """
    Upload a document for an employee.

    Raises:
        - 400 Bad Request: INVALID_FILE, FILE_TOO_LARGE, VALIDATION_FAILED
        - 403 Forbidden: INSUFFICIENT_ROLE (uploading to another employee)
        - 404 Not Found: EMPLOYEE_NOT_FOUND
        - 500 Internal Server Error: STORAGE_ERROR
    """
    content = await file.read()
    result = await UploadDocumentUseCase(uow, storage).execute(
        UUID(current_user["user_id"]),
        current_user["role"],
        claim_uuid(current_user, "employee_id"),
        parse_uuid(employee_id, "employee_id"),
        document_type,
        file.filename or "",
        file.content_type,
        content,
        document_name=document_name,
        description=description,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{document_id}/download", status_code=status.HTTP_200_OK)
async def download_document(
    document_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Stream a stored document back with its original content type"""
    result = await DownloadDocumentUseCase(uow, storage).execute(
        current_user["role"],
        claim_uuid(current_user, "employee_id"),
        parse_uuid(document_id, "document_id"),
    )
    if result.is_err():
        raise_for_error(result.error)

    download = result.value
    return Response(
        content=download.content,
        media_type=download.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{download.file_name}"'
        },
    )


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteDocumentResponse,
)
async def delete_document(
    document_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """
    Delete a document and its blob (admin).

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: DOCUMENT_NOT_FOUND
        - 500 Internal Server Error: STORAGE_ERROR
    """
    result = await DeleteDocumentUseCase(uow, storage).execute(
        UUID(current_user["user_id"]),
        current_user["role"],
        parse_uuid(document_id, "document_id"),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
