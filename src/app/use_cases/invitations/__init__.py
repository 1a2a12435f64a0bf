"""
Invitation Use Cases

Inviting prospective employees and redeeming invitations.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .cancel_invitation_use_case import CancelInvitationUseCase
from .create_invitation_use_case import CreateInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    CancelInvitationResponse,
    CreateInvitationResponse,
    InvitationDetails,
    ResendInvitationResponse,
)
from .resend_invitation_use_case import ResendInvitationUseCase
from .validate_invitation_use_case import ValidateInvitationUseCase

__all__ = [
    "CreateInvitationUseCase",
    "ValidateInvitationUseCase",
    "AcceptInvitationUseCase",
    "ResendInvitationUseCase",
    "CancelInvitationUseCase",
    "CreateInvitationResponse",
    "InvitationDetails",
    "AcceptInvitationResponse",
    "ResendInvitationResponse",
    "CancelInvitationResponse",
]
