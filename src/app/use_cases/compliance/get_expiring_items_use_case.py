"""
Get Expiring Items Use Case
"""

from datetime import date
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import today
from src.domain.compliance import days_until_expiration

from .alerts import to_alert
from .dtos import ExpiringItemsResponse

MAX_WINDOW_DAYS = 365


class GetExpiringItemsUseCase:
    """
    Use case for the expiring-items report.

    Credentials expiring between today and today + days (inclusive).
    Already expired credentials are reported by the alerts list instead.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, days: int = 30, as_of: Optional[date] = None
    ) -> Result[ExpiringItemsResponse]:
        if days < 0 or days > MAX_WINDOW_DAYS:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    f"days must be between 0 and {MAX_WINDOW_DAYS}",
                )
            )

        current_day = as_of or today()
        async with self.uow:
            licenses = await self.uow.licenses.list_tracked()

            items = []
            for item in licenses:
                remaining = days_until_expiration(item.expiration_date, current_day)
                if remaining is not None and 0 <= remaining <= days:
                    items.append(to_alert(item, current_day))
            items.sort(key=lambda alert: (alert.days_until_expiration, alert.employee_name))

            return Return.ok(ExpiringItemsResponse(days=days, items=items, total=len(items)))
