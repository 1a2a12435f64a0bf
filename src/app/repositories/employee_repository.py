from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Employee, EmployeeStatus


@dataclass
class EmployeeSearch:
    """Filter, sort and paging options for employee listings"""

    statuses: List[EmployeeStatus] = field(default_factory=list)
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    # Column the date range applies to
    date_field: str = "submitted_at"
    work_location: Optional[str] = None
    decided_by: Optional[UUID] = None
    sort_by: str = "submitted_at"
    descending: bool = True
    offset: int = 0
    limit: int = 20


class IEmployeeRepository(ABC):
    """Employee repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, employee_id: UUID) -> Optional[Employee]:
        """Get employee by ID"""
        pass

    @abstractmethod
    async def get_status(self, employee_id: UUID) -> Optional[EmployeeStatus]:
        """Read the committed status column, bypassing the identity map"""
        pass

    @abstractmethod
    async def get_by_work_email(self, work_email: str) -> Optional[Employee]:
        """Get employee by work email"""
        pass

    @abstractmethod
    async def get_by_npi(self, npi_number: str) -> Optional[Employee]:
        """Get employee by NPI number"""
        pass

    @abstractmethod
    async def create(self, employee: Employee) -> Employee:
        """Create a new employee"""
        pass

    @abstractmethod
    async def update(self, employee: Employee) -> Employee:
        """Update existing employee"""
        pass

    @abstractmethod
    async def transition_status(
        self,
        employee_id: UUID,
        from_statuses: Iterable[EmployeeStatus],
        to_status: EmployeeStatus,
        values: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Conditionally move an employee to a new status.

        Single UPDATE guarded by the expected current statuses.

        Returns:
            True if this call performed the transition, False if the
            status had already changed (or the row does not exist)
        """
        pass

    @abstractmethod
    async def search(self, criteria: EmployeeSearch) -> Tuple[List[Employee], int]:
        """
        Search employees.

        Returns:
            Tuple of (page of employees, total matching rows)
        """
        pass

    @abstractmethod
    async def delete(self, employee_id: UUID) -> None:
        """Hard delete an employee and every record it owns"""
        pass
