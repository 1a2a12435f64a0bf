"""
Get Compliance Dashboard Use Case
"""

from datetime import date
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import today
from src.domain.compliance import summarize

from .dtos import ComplianceDashboardResponse


class GetComplianceDashboardUseCase:
    """
    Use case for the compliance dashboard.

    Every state license, DEA license and board certification is counted in
    exactly one bucket; the score is the share of credentials not expired.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, as_of: Optional[date] = None
    ) -> Result[ComplianceDashboardResponse]:
        current_day = as_of or today()
        async with self.uow:
            licenses = await self.uow.licenses.list_tracked()
            summary = summarize(licenses, current_day)

            return Return.ok(
                ComplianceDashboardResponse(
                    total_licenses=summary.total,
                    active_licenses=summary.active,
                    expiring_in_30_days=summary.expiring_in_30_days,
                    expiring_in_60_days=summary.expiring_in_60_days,
                    expiring_in_90_days=summary.expiring_in_90_days,
                    expired_licenses=summary.expired,
                    compliance_score=summary.compliance_score,
                    as_of=current_day.isoformat(),
                )
            )
