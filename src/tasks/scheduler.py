"""Background task scheduler using APScheduler."""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from config import ApplicationConfig

logger = logging.getLogger(__name__)

# Global scheduler instance
_scheduler: Optional[AsyncIOScheduler] = None


async def refresh_license_statuses_job() -> None:
    """Daily sweep of the cached license status column."""
    from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from src.app.use_cases.compliance import RefreshLicenseStatusesUseCase
    from src.depends import AsyncSessionLocal

    logger.info("Starting scheduled license status sweep")

    async with AsyncSessionLocal() as session:
        result = await RefreshLicenseStatusesUseCase(SqlAlchemyUnitOfWork(session)).execute()
        if result.is_err():
            logger.error(f"License status sweep failed: {result.error.message}")
            return
        logger.info(
            f"License status sweep completed: {result.value.updated} of "
            f"{result.value.checked} updated"
        )


async def report_expiring_licenses_job() -> None:
    """Log credentials expiring within the next 30 days."""
    from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from src.app.use_cases.compliance import GetExpiringItemsUseCase
    from src.depends import AsyncSessionLocal

    async with AsyncSessionLocal() as session:
        result = await GetExpiringItemsUseCase(SqlAlchemyUnitOfWork(session)).execute(days=30)
        if result.is_err():
            logger.error(f"Expiring license report failed: {result.error.message}")
            return

        report = result.value
        logger.info(f"{report.total} credential(s) expire within {report.days} days")
        for item in report.items:
            logger.warning(
                f"{item.license_kind} {item.license_number} of {item.employee_name} "
                f"expires in {item.days_until_expiration} day(s)"
                + (f", responsible: {item.responsible_person}" if item.responsible_person else "")
            )


async def start_scheduler() -> None:
    """Start the background task scheduler."""
    global _scheduler

    _scheduler = AsyncIOScheduler()
    hour = ApplicationConfig.EXPIRATION_SWEEP_HOUR

    _scheduler.add_job(
        refresh_license_statuses_job,
        trigger=CronTrigger(hour=hour, minute=0),
        id="refresh_license_statuses",
        name="Refresh license statuses",
        replace_existing=True,
    )

    # After the sweep so the report sees fresh statuses
    _scheduler.add_job(
        report_expiring_licenses_job,
        trigger=CronTrigger(hour=hour, minute=15),
        id="report_expiring_licenses",
        name="Report expiring licenses",
        replace_existing=True,
    )

    _scheduler.start()
    logger.info("Background scheduler started")


async def stop_scheduler() -> None:
    """Stop the background task scheduler."""
    global _scheduler

    if _scheduler:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Background scheduler stopped")
