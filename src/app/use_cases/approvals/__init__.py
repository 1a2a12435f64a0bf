"""
Approval Use Cases

HR review of submitted onboardings: approve, reject, request information.
"""

from .approval_history_use_case import ApprovalHistoryUseCase
from .approve_batch_use_case import ApproveBatchUseCase
from .approve_employee_use_case import ApproveEmployeeUseCase
from .dtos import (
    ApproveEmployeeResponse,
    BatchApprovalResponse,
    PaginatedApprovalHistory,
    PaginatedPendingApprovals,
    RejectEmployeeResponse,
    RequestInfoResponse,
)
from .list_pending_approvals_use_case import ListPendingApprovalsUseCase
from .reject_employee_use_case import RejectEmployeeUseCase
from .request_info_use_case import RequestInfoUseCase

__all__ = [
    "ApproveEmployeeUseCase",
    "RejectEmployeeUseCase",
    "RequestInfoUseCase",
    "ApproveBatchUseCase",
    "ListPendingApprovalsUseCase",
    "ApprovalHistoryUseCase",
    "ApproveEmployeeResponse",
    "RejectEmployeeResponse",
    "RequestInfoResponse",
    "BatchApprovalResponse",
    "PaginatedPendingApprovals",
    "PaginatedApprovalHistory",
]
