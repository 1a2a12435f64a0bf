"""
Compliance Use Cases

License and certification expiration tracking.
"""

from .dtos import (
    ComplianceAlertsResponse,
    ComplianceDashboardResponse,
    ExpiringItemsResponse,
    RefreshStatusesResponse,
)
from .get_compliance_alerts_use_case import GetComplianceAlertsUseCase
from .get_compliance_dashboard_use_case import GetComplianceDashboardUseCase
from .get_expiring_items_use_case import GetExpiringItemsUseCase
from .refresh_license_statuses_use_case import RefreshLicenseStatusesUseCase

__all__ = [
    "GetComplianceDashboardUseCase",
    "GetComplianceAlertsUseCase",
    "GetExpiringItemsUseCase",
    "RefreshLicenseStatusesUseCase",
    "ComplianceDashboardResponse",
    "ComplianceAlertsResponse",
    "ExpiringItemsResponse",
    "RefreshStatusesResponse",
]
