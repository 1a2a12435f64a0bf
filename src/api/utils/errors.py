"""
Error code -> HTTP status mapping shared by the routes.

Codes that are not listed are unexpected and surface as 500 with the
message hidden.
"""

from typing import Dict, NoReturn, Optional
from uuid import UUID

from fastapi import status

from libs.result import Error
from src.api.error import ClientError, ServerError

STATUS_BY_CODE: Dict[str, int] = {
    # Validation
    "VALIDATION_FAILED": status.HTTP_400_BAD_REQUEST,
    "INVALID_STEP": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "COMMENTS_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "REASON_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "DOCUMENTS_INCOMPLETE": status.HTTP_400_BAD_REQUEST,
    "FORMS_INCOMPLETE": status.HTTP_400_BAD_REQUEST,
    "LICENSE_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "BACKGROUND_CHECK_INCOMPLETE": status.HTTP_400_BAD_REQUEST,
    "INVALID_FILE": status.HTTP_400_BAD_REQUEST,
    "FILE_TOO_LARGE": status.HTTP_400_BAD_REQUEST,
    "INVITATION_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "INVITATION_ALREADY_USED": status.HTTP_400_BAD_REQUEST,
    "INVITATION_CANCELLED": status.HTTP_400_BAD_REQUEST,
    # Lifecycle conflicts reported as bad requests
    "ALREADY_PROCESSED": status.HTTP_400_BAD_REQUEST,
    "INVALID_STATUS": status.HTTP_400_BAD_REQUEST,
    "ONBOARDING_LOCKED": status.HTTP_400_BAD_REQUEST,
    "INVITE_ALREADY_EXISTS": status.HTTP_400_BAD_REQUEST,
    "EMPLOYEE_EXISTS": status.HTTP_400_BAD_REQUEST,
    # Uniqueness
    "CONFLICT": status.HTTP_409_CONFLICT,
    "ACCOUNT_EXISTS": status.HTTP_409_CONFLICT,
    # Not found
    "EMPLOYEE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVITATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DOCUMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    # Authorization
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
}


def raise_for_error(error: Error) -> NoReturn:
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


def parse_uuid(value: Optional[str], field: str) -> UUID:
    """UUID from a path/form value, 400 VALIDATION_FAILED when malformed"""
    try:
        return UUID(str(value))
    except ValueError:
        message = f"{field} must be a valid UUID"
        raise ClientError(
            Error("VALIDATION_FAILED", message, details=[{"field": field, "message": message}]),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def claim_uuid(current_user: dict, claim: str) -> Optional[UUID]:
    value = current_user.get(claim)
    return UUID(value) if value else None
