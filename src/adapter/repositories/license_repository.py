from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.license_repository import ILicenseRepository
from src.domain.compliance import TrackedLicense
from src.domain.entities import (
    BoardCertification,
    DEALicense,
    Employee,
    LicenseKind,
    LicenseStatus,
    StateLicense,
)

_TABLES = {
    LicenseKind.state_license: StateLicense,
    LicenseKind.dea_license: DEALicense,
    LicenseKind.board_certification: BoardCertification,
}


def _to_tracked(kind: LicenseKind, record, employee: Employee) -> TrackedLicense:
    if kind == LicenseKind.state_license:
        number, issuer = record.license_number, record.state
    elif kind == LicenseKind.dea_license:
        number, issuer = record.license_number, "DEA"
    else:
        number, issuer = record.certification or record.board_name, record.board_name

    return TrackedLicense(
        kind=kind,
        record_id=record.id,
        employee_id=employee.id,
        employee_name=employee.full_name,
        number=number,
        issuer=issuer,
        expiration_date=record.expiration_date,
        status=record.status,
        responsible_person=record.responsible_person,
    )


class LicenseRepository(ILicenseRepository):
    """Credential tracking implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self, employee_id: Optional[UUID]) -> List[TrackedLicense]:
        tracked: List[TrackedLicense] = []
        for kind, table in _TABLES.items():
            stmt = select(table, Employee).join(
                Employee, Employee.id == table.employee_id
            )
            if employee_id is not None:
                stmt = stmt.where(table.employee_id == employee_id)
            result = await self.session.exec(stmt)
            tracked.extend(_to_tracked(kind, record, employee) for record, employee in result.all())
        return tracked

    async def list_tracked(self) -> List[TrackedLicense]:
        """Get state licenses, DEA licenses and board certifications"""
        return await self._load(None)

    async def list_by_employee(self, employee_id: UUID) -> List[TrackedLicense]:
        """Get tracked credentials for one employee"""
        return await self._load(employee_id)

    async def update_status(
        self, kind: LicenseKind, record_id: UUID, status: LicenseStatus
    ) -> None:
        """Update the cached status of a credential"""
        table = _TABLES[kind]
        stmt = update(table).where(table.id == record_id).values(status=status)
        await self.session.execute(stmt)
        await self.session.flush()
