"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.utils.errors import parse_uuid, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditEventsUseCase
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/audit", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    id: str
    entity_type: str
    entity_id: Optional[str]
    action: str
    performed_by: Optional[str]
    performed_by_email: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /audit/events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    entity_type: Optional[str] = Query(None, description="e.g. employee, invitation"),
    entity_id: Optional[str] = Query(None, description="Events of a single entity"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Audit Events

    Returns lifecycle and compliance audit logs, newest first.
    Only accessible by admin and hr roles.

    Query Parameters:
        - entity_type / entity_id: optional filters
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Insufficient role (must be admin/hr)
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(
        role=current_user["role"],
        entity_type=entity_type,
        entity_id=parse_uuid(entity_id, "entity_id") if entity_id else None,
        limit=limit,
        cursor=cursor,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
