from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlmodel import SQLModel

from src.domain.entities import DEALicense, StateLicense


class IEmployeeRecordRepository(ABC):
    """Repository for collections owned by an employee - application layer"""

    @abstractmethod
    async def replace_all(
        self, employee_id: UUID, collections: Dict[str, Sequence[SQLModel]]
    ) -> None:
        """
        Replace the given collections for an employee.

        Keys are collection names (e.g. "educations"); collections that are
        not present in the mapping are left untouched.
        """
        pass

    @abstractmethod
    async def get_all(self, employee_id: UUID) -> Dict[str, List[SQLModel]]:
        """Get every owned collection keyed by collection name"""
        pass

    @abstractmethod
    async def find_state_license(
        self, state: str, license_number: str
    ) -> Optional[StateLicense]:
        """Find a state license by issuing state and number"""
        pass

    @abstractmethod
    async def find_dea_license(self, license_number: str) -> Optional[DEALicense]:
        """Find a DEA registration by number"""
        pass
