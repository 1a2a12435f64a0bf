"""
Invitation API Routes

Inviting prospective employees and redeeming invitation tokens.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.utils.errors import parse_uuid, raise_for_error
from src.app.services.notifier import Notifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    InvitationDetails,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    ValidateInvitationUseCase,
)
from src.depends import get_current_user, get_notifier, get_unit_of_work

router = APIRouter(tags=["Invitations"])


class CreateInvitationRequest(BaseModel):
    """POST /employees/invite request payload"""

    email: str = Field(..., description="Email of the person to invite")
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    role: str = Field("viewer", description="Role granted once onboarding is approved")


class AcceptInvitationRequest(BaseModel):
    """POST /invitations/{token}/accept request payload"""

    password: str = Field(..., description="Password for the new account")
    confirm_password: Optional[str] = Field(None, description="Must match password")


@router.post(
    "/employees/invite",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateInvitationResponse,
)
async def create_invitation(
    request: CreateInvitationRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Invite a prospective employee.

    HR may only invite the viewer role; admins may invite any staff role.
    The raw token is returned once and never stored.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED, INVALID_ROLE, EMPLOYEE_EXISTS,
                           INVITE_ALREADY_EXISTS
        - 401 Unauthorized: Missing or invalid JWT
        - 403 Forbidden: INSUFFICIENT_ROLE
    """
    use_case = CreateInvitationUseCase(uow, notifier)
    result = await use_case.execute(
        UUID(current_user["user_id"]),
        current_user["role"],
        request.email,
        request.first_name,
        request.last_name,
        role=request.role,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/invitations/{token}",
    status_code=status.HTTP_200_OK,
    response_model=InvitationDetails,
)
async def validate_invitation(
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate an invitation token (public).

    Raises:
        - 400 Bad Request: INVITATION_EXPIRED, INVITATION_ALREADY_USED,
                           INVITATION_CANCELLED
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    result = await ValidateInvitationUseCase(uow).execute(token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/invitations/{token}/accept",
    status_code=status.HTTP_201_CREATED,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    token: str,
    request: AcceptInvitationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Redeem an invitation (public).

    Creates the prospective employee and its account and returns an
    onboarding access token.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD, INVITATION_EXPIRED,
                           INVITATION_ALREADY_USED, INVITATION_CANCELLED
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: ACCOUNT_EXISTS
    """
    result = await AcceptInvitationUseCase(uow).execute(
        token, request.password, request.confirm_password
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/invitations/{invitation_id}/resend",
    status_code=status.HTTP_200_OK,
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    invitation_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Resend a pending invitation with a new token and expiry.

    Raises:
        - 400 Bad Request: Invalid id, INVITATION_ALREADY_USED,
                           INVITATION_CANCELLED
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    invitation_uuid = parse_uuid(invitation_id, "invitation_id")
    result = await ResendInvitationUseCase(uow, notifier).execute(
        UUID(current_user["user_id"]), current_user["role"], invitation_uuid
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/invitations/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=CancelInvitationResponse,
)
async def cancel_invitation(
    invitation_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel an invitation.

    Raises:
        - 400 Bad Request: Invalid id, INVITATION_ALREADY_USED
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    invitation_uuid = parse_uuid(invitation_id, "invitation_id")
    result = await CancelInvitationUseCase(uow).execute(
        UUID(current_user["user_id"]), current_user["role"], invitation_uuid
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
