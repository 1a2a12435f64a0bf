"""
Compliance Expiration Rules

Pure functions over (today, expiration_date). Buckets are disjoint so
every credential is counted exactly once:

    expired      expiration_date < today
    expiring_30  0  <= days <= 30
    expiring_60  31 <= days <= 60
    expiring_90  61 <= days <= 90
    active       days > 90, or no expiration date
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional
from uuid import UUID

from src.domain.entities.enums import (
    AlertSeverity,
    ComplianceBucket,
    LicenseKind,
    LicenseStatus,
)

ALERT_WINDOW_DAYS = 90
EXPIRING_STATUS_DAYS = 30
HIGH_SEVERITY_DAYS = 15
MEDIUM_SEVERITY_DAYS = 30


@dataclass(frozen=True)
class TrackedLicense:
    """Flattened view of any credential with an expiration date"""

    kind: LicenseKind
    record_id: UUID
    employee_id: UUID
    employee_name: str
    number: str
    issuer: Optional[str]
    expiration_date: Optional[date]
    status: LicenseStatus
    responsible_person: Optional[str] = None


@dataclass(frozen=True)
class ComplianceSummary:
    total: int
    active: int
    expiring_in_30_days: int
    expiring_in_60_days: int
    expiring_in_90_days: int
    expired: int
    compliance_score: int


def days_until_expiration(expiration_date: Optional[date], today: date) -> Optional[int]:
    """Whole days until expiration; negative once expired"""
    if expiration_date is None:
        return None
    return (expiration_date - today).days


def classify(expiration_date: Optional[date], today: date) -> ComplianceBucket:
    days = days_until_expiration(expiration_date, today)
    if days is None:
        return ComplianceBucket.active
    if days < 0:
        return ComplianceBucket.expired
    if days <= 30:
        return ComplianceBucket.expiring_30
    if days <= 60:
        return ComplianceBucket.expiring_60
    if days <= ALERT_WINDOW_DAYS:
        return ComplianceBucket.expiring_90
    return ComplianceBucket.active


def license_status(expiration_date: Optional[date], today: date) -> LicenseStatus:
    days = days_until_expiration(expiration_date, today)
    if days is None:
        return LicenseStatus.active
    if days < 0:
        return LicenseStatus.expired
    if days <= EXPIRING_STATUS_DAYS:
        return LicenseStatus.expiring
    return LicenseStatus.active


def is_expired(expiration_date: Optional[date], today: date) -> bool:
    return classify(expiration_date, today) == ComplianceBucket.expired


def alert_severity(days_remaining: int) -> AlertSeverity:
    if days_remaining <= HIGH_SEVERITY_DAYS:
        return AlertSeverity.high
    if days_remaining <= MEDIUM_SEVERITY_DAYS:
        return AlertSeverity.medium
    return AlertSeverity.low


def compliance_score(active: int, total: int) -> int:
    """Percentage of licenses not expired, halves rounded up"""
    if total == 0:
        return 0
    return (active * 200 + total) // (total * 2)


def summarize(licenses: Iterable[TrackedLicense], today: date) -> ComplianceSummary:
    counts: Dict[ComplianceBucket, int] = {bucket: 0 for bucket in ComplianceBucket}
    total = 0
    for item in licenses:
        counts[classify(item.expiration_date, today)] += 1
        total += 1

    expired = counts[ComplianceBucket.expired]
    active = total - expired
    return ComplianceSummary(
        total=total,
        active=active,
        expiring_in_30_days=counts[ComplianceBucket.expiring_30],
        expiring_in_60_days=counts[ComplianceBucket.expiring_60],
        expiring_in_90_days=counts[ComplianceBucket.expiring_90],
        expired=expired,
        compliance_score=compliance_score(active, total),
    )
