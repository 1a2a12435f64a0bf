"""
Alert rows shared by the alerts list and the expiring-items report.
"""

from datetime import date

from src.domain.compliance import TrackedLicense, alert_severity, days_until_expiration

from .dtos import ComplianceAlert


def to_alert(item: TrackedLicense, current_day: date) -> ComplianceAlert:
    days = days_until_expiration(item.expiration_date, current_day)
    return ComplianceAlert(
        employee_id=str(item.employee_id),
        employee_name=item.employee_name,
        license_kind=item.kind.value,
        license_id=str(item.record_id),
        license_number=item.number,
        issuer=item.issuer,
        expiration_date=item.expiration_date.isoformat(),
        days_until_expiration=days,
        expired=days < 0,
        severity=alert_severity(days).value,
        responsible_person=item.responsible_person,
    )
