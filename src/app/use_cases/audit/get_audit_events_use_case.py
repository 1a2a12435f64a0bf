"""
Get Audit Events Use Case

Retrieves lifecycle and compliance audit events with pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access import is_staff
from src.app.services.unit_of_work import UnitOfWork


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events.

    Business Rules:
    - Caller must have role=admin or role=hr
    - Optional entity_type / entity_id filters (e.g. one employee's history)
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Each event includes action, performer email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        role: str,
        entity_type: Optional[str] = None,
        entity_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            role: Role from JWT (must be admin or hr)
            entity_type: Only events of this entity type
            entity_id: Only events of this entity
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        if not is_staff(role):
            return Return.err(
                Error(
                    "INSUFFICIENT_ROLE",
                    "You do not have permission to view audit events",
                )
            )

        async with self.uow:
            events, next_cursor = await self.uow.audit_events.get_paginated(
                entity_type=entity_type,
                entity_id=entity_id,
                limit=limit,
                cursor=cursor,
            )

            # Performer emails, looked up once per performer
            emails: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                performed_by_email = None
                if event.performed_by:
                    if event.performed_by not in emails:
                        user = await self.uow.users.get_by_id(event.performed_by)
                        emails[event.performed_by] = user.email if user else None
                    performed_by_email = emails[event.performed_by]

                events_list.append(
                    {
                        "id": str(event.id),
                        "entity_type": event.entity_type,
                        "entity_id": str(event.entity_id) if event.entity_id else None,
                        "action": event.action,
                        "performed_by": str(event.performed_by)
                        if event.performed_by
                        else None,
                        "performed_by_email": performed_by_email,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
