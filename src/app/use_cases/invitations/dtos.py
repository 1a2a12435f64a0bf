"""
Invitation Use Case DTOs (Data Transfer Objects)

All Response classes for the invitation domain.
"""

from typing import Optional

from pydantic import BaseModel


class CreateInvitationResponse(BaseModel):
    """Response for create invitation use case; the only time the token is shown"""

    invite_id: str
    token: str
    invitation_url: str
    email: str
    first_name: str
    last_name: str
    role: str
    status: str
    expires_at: str


class InvitationDetails(BaseModel):
    """Non-sensitive invitation fields shown on the registration page"""

    email: str
    first_name: str
    last_name: str
    status: str
    expires_at: str


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    access_token: str
    token_type: str = "bearer"
    user_id: str
    employee_id: str
    role: str


class ResendInvitationResponse(BaseModel):
    """Response for resend invitation use case"""

    invite_id: str
    token: str
    invitation_url: str
    status: str
    expires_at: str


class CancelInvitationResponse(BaseModel):
    """Response for cancel invitation use case"""

    invite_id: str
    status: str
    cancelled_by: Optional[str] = None
