"""
Get Compliance Alerts Use Case
"""

from datetime import date
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import today
from src.domain.compliance import ALERT_WINDOW_DAYS, days_until_expiration

from .alerts import to_alert
from .dtos import ComplianceAlertsResponse


class GetComplianceAlertsUseCase:
    """
    Use case for compliance alerts.

    Business Rules:
    - Every credential expired or expiring within 90 days
    - Sorted by days remaining, most urgent (most overdue) first
    - Severity: high <= 15 days (expired included), medium <= 30, low otherwise
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, as_of: Optional[date] = None
    ) -> Result[ComplianceAlertsResponse]:
        current_day = as_of or today()
        async with self.uow:
            licenses = await self.uow.licenses.list_tracked()

            alerts = [
                to_alert(item, current_day)
                for item in licenses
                if item.expiration_date is not None
                and days_until_expiration(item.expiration_date, current_day)
                <= ALERT_WINDOW_DAYS
            ]
            alerts.sort(key=lambda alert: (alert.days_until_expiration, alert.employee_name))

            return Return.ok(ComplianceAlertsResponse(alerts=alerts, total=len(alerts)))
