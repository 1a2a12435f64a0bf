"""
Approval Use Case DTOs (Data Transfer Objects)

Responses for HR review of submitted onboardings.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ApproveEmployeeResponse(BaseModel):
    """Response for approve employee use case"""

    employee_id: str
    status: str
    approved_at: str
    approved_by: str
    assigned_role: Optional[str]
    message: str


class RejectEmployeeResponse(BaseModel):
    """Response for reject employee use case"""

    employee_id: str
    status: str
    rejected_at: str
    rejected_by: str
    documents_archived: int = 0
    message: str


class RequestInfoResponse(BaseModel):
    """Response for request information use case"""

    employee_id: str
    status: str
    request_id: str
    request_status: str
    requested_items: List[str]
    due_date: Optional[str]
    message: str


class BatchApprovalResult(BaseModel):
    employee_id: str
    success: bool
    status: Optional[str] = None
    error: Optional[str] = None


class BatchApprovalResponse(BaseModel):
    """Per-employee outcome of a batch approval"""

    approved: int
    failed: int
    results: List[BatchApprovalResult] = Field(default_factory=list)


class ApprovalCompletionStatus(BaseModel):
    documents_uploaded: bool
    licenses_verified: bool
    forms_completed: bool
    overall_progress: int


class PendingApprovalItem(BaseModel):
    employee_id: str
    first_name: str
    last_name: str
    work_email: Optional[str]
    job_title: Optional[str]
    work_location: Optional[str]
    status: str
    submitted_at: Optional[str]
    created_at: str
    completion_status: ApprovalCompletionStatus


class ApprovalHistoryItem(BaseModel):
    employee_id: str
    first_name: str
    last_name: str
    status: str
    decided_at: Optional[str]
    decided_by: Optional[str]
    approval_comments: Optional[str]
    rejection_reason: Optional[str]


class PaginatedPendingApprovals(BaseModel):
    items: List[PendingApprovalItem]
    page: int
    limit: int
    total: int
    total_pages: int


class PaginatedApprovalHistory(BaseModel):
    items: List[ApprovalHistoryItem]
    page: int
    limit: int
    total: int
    total_pages: int
