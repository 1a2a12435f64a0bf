from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.employee_record_repository import IEmployeeRecordRepository
from src.domain.entities import OWNED_COLLECTIONS, DEALicense, StateLicense


class EmployeeRecordRepository(IEmployeeRecordRepository):
    """Owned-collection repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def replace_all(
        self, employee_id: UUID, collections: Dict[str, Sequence[SQLModel]]
    ) -> None:
        """Delete then re-insert each given collection"""
        for name, records in collections.items():
            table = OWNED_COLLECTIONS[name]
            await self.session.execute(
                delete(table).where(table.employee_id == employee_id)
            )
            for record in records:
                record.employee_id = employee_id
                self.session.add(record)
        await self.session.flush()

    async def get_all(self, employee_id: UUID) -> Dict[str, List[SQLModel]]:
        """Get every owned collection keyed by collection name"""
        collections: Dict[str, List[SQLModel]] = {}
        for name, table in OWNED_COLLECTIONS.items():
            stmt = select(table).where(table.employee_id == employee_id)
            result = await self.session.exec(stmt)
            collections[name] = list(result.all())
        return collections

    async def find_state_license(
        self, state: str, license_number: str
    ) -> Optional[StateLicense]:
        """Find a state license by issuing state and number"""
        stmt = select(StateLicense).where(
            StateLicense.state == state,
            StateLicense.license_number == license_number,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def find_dea_license(self, license_number: str) -> Optional[DEALicense]:
        """Find a DEA registration by number"""
        stmt = select(DEALicense).where(DEALicense.license_number == license_number)
        result = await self.session.exec(stmt)
        return result.first()
