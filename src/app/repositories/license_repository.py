from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.compliance import TrackedLicense
from src.domain.entities import LicenseKind, LicenseStatus


class ILicenseRepository(ABC):
    """Read/refresh access to every credential with an expiration date"""

    @abstractmethod
    async def list_tracked(self) -> List[TrackedLicense]:
        """Get state licenses, DEA licenses and board certifications"""
        pass

    @abstractmethod
    async def list_by_employee(self, employee_id: UUID) -> List[TrackedLicense]:
        """Get tracked credentials for one employee"""
        pass

    @abstractmethod
    async def update_status(
        self, kind: LicenseKind, record_id: UUID, status: LicenseStatus
    ) -> None:
        """Update the cached status of a credential"""
        pass
