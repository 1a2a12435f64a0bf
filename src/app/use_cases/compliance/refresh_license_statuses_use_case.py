"""
Refresh License Statuses Use Case

Recomputes the cached status column of every tracked credential.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import today
from src.domain.compliance import license_status
from src.domain.entities import AuditEvent, LicenseStatus

from .dtos import RefreshStatusesResponse

logger = logging.getLogger(__name__)


class RefreshLicenseStatusesUseCase:
    """
    Use case for the license status sweep.

    Run daily by the scheduler and on demand by admins. Only rows whose
    status changed are written; one audit event records the sweep.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, performed_by: Optional[UUID] = None, as_of: Optional[date] = None
    ) -> Result[RefreshStatusesResponse]:
        current_day = as_of or today()
        async with self.uow:
            licenses = await self.uow.licenses.list_tracked()

            updated = 0
            counts = {status: 0 for status in LicenseStatus}
            for item in licenses:
                status = license_status(item.expiration_date, current_day)
                counts[status] += 1
                if status != item.status:
                    await self.uow.licenses.update_status(item.kind, item.record_id, status)
                    updated += 1

            response = RefreshStatusesResponse(
                checked=len(licenses),
                updated=updated,
                expired=counts[LicenseStatus.expired],
                expiring=counts[LicenseStatus.expiring],
            )

            audit = AuditEvent(
                entity_type="compliance",
                entity_id=None,
                performed_by=performed_by,
                action="refresh_license_statuses",
                event_metadata=response.model_dump(),
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(
                f"License status sweep: {response.checked} checked, {updated} updated"
            )

            return Return.ok(response)
