from datetime import UTC, date, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp; DateTime columns are stored without tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()
