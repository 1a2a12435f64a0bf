"""
Compliance Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel


class ComplianceDashboardResponse(BaseModel):
    """Credential counts per expiration bucket"""

    total_licenses: int
    active_licenses: int
    expiring_in_30_days: int
    expiring_in_60_days: int
    expiring_in_90_days: int
    expired_licenses: int
    compliance_score: int
    as_of: str


class ComplianceAlert(BaseModel):
    employee_id: str
    employee_name: str
    license_kind: str
    license_id: str
    license_number: str
    issuer: Optional[str]
    expiration_date: str
    days_until_expiration: int
    expired: bool
    severity: str
    responsible_person: Optional[str]


class ComplianceAlertsResponse(BaseModel):
    alerts: List[ComplianceAlert]
    total: int


class ExpiringItemsResponse(BaseModel):
    """Credentials expiring within a window of days"""

    days: int
    items: List[ComplianceAlert]
    total: int


class RefreshStatusesResponse(BaseModel):
    checked: int
    updated: int
    expired: int
    expiring: int
