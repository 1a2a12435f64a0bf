from datetime import datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, or_, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.employee_repository import EmployeeSearch, IEmployeeRepository
from src.domain.base import utcnow
from src.domain.entities import (
    BoardCertification,
    DEALicense,
    Document,
    Education,
    EmergencyContact,
    Employee,
    EmployeeStatus,
    Employment,
    FormAssignment,
    InformationRequest,
    OnboardingDraft,
    PayerEnrollment,
    PeerReference,
    StateLicense,
    TaxForm,
    Training,
)

# Tables whose rows are owned by an employee, deleted before the employee row
OWNED_TABLES = (
    Education,
    Employment,
    StateLicense,
    DEALicense,
    BoardCertification,
    PeerReference,
    EmergencyContact,
    TaxForm,
    Training,
    PayerEnrollment,
    Document,
    FormAssignment,
    InformationRequest,
    OnboardingDraft,
)


def _column(name: str):
    if name == "decided_at":
        return func.coalesce(Employee.approved_at, Employee.rejected_at)
    if name not in ("submitted_at", "created_at", "last_name", "updated_at"):
        raise ValueError(f"Unsupported employee column: {name}")
    return getattr(Employee, name)


class EmployeeRepository(IEmployeeRepository):
    """Employee repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, employee_id: UUID) -> Optional[Employee]:
        """Get employee by ID"""
        stmt = select(Employee).where(Employee.id == employee_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_status(self, employee_id: UUID) -> Optional[EmployeeStatus]:
        """Read the committed status column, bypassing the identity map"""
        stmt = select(Employee.status).where(Employee.id == employee_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_work_email(self, work_email: str) -> Optional[Employee]:
        """Get employee by work email"""
        stmt = select(Employee).where(Employee.work_email == work_email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_npi(self, npi_number: str) -> Optional[Employee]:
        """Get employee by NPI number"""
        stmt = select(Employee).where(Employee.npi_number == npi_number)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, employee: Employee) -> Employee:
        """Create a new employee"""
        self.session.add(employee)
        await self.session.flush()
        await self.session.refresh(employee)
        return employee

    async def update(self, employee: Employee) -> Employee:
        """Update existing employee"""
        employee.updated_at = utcnow()
        self.session.add(employee)
        await self.session.flush()
        await self.session.refresh(employee)
        return employee

    async def transition_status(
        self,
        employee_id: UUID,
        from_statuses: Iterable[EmployeeStatus],
        to_status: EmployeeStatus,
        values: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Compare-and-swap on the status column"""
        stmt = (
            update(Employee)
            .where(
                Employee.id == employee_id,
                col(Employee.status).in_(list(from_statuses)),
            )
            .values(status=to_status, updated_at=utcnow(), **(values or {}))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:
            return False

        # Reload so callers holding the instance see the new status
        reload = (
            select(Employee)
            .where(Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        await self.session.exec(reload)
        return True

    async def search(self, criteria: EmployeeSearch) -> Tuple[List[Employee], int]:
        """Search employees with filters, sorting and offset pagination"""
        conditions = []
        if criteria.statuses:
            conditions.append(col(Employee.status).in_(criteria.statuses))

        date_column = _column(criteria.date_field)
        if criteria.from_date:
            conditions.append(date_column >= datetime.combine(criteria.from_date, time.min))
        if criteria.to_date:
            end = datetime.combine(criteria.to_date + timedelta(days=1), time.min)
            conditions.append(date_column < end)

        if criteria.work_location:
            conditions.append(
                col(Employee.work_location).ilike(f"%{criteria.work_location}%")
            )

        if criteria.decided_by:
            conditions.append(
                or_(
                    Employee.approved_by == criteria.decided_by,
                    Employee.rejected_by == criteria.decided_by,
                )
            )

        count_stmt = select(func.count()).select_from(Employee).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        sort_column = _column(criteria.sort_by)
        order = sort_column.desc() if criteria.descending else sort_column.asc()
        stmt = (
            select(Employee)
            .where(*conditions)
            .order_by(order, Employee.id)
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def delete(self, employee_id: UUID) -> None:
        """Hard delete an employee and every record it owns"""
        for table in OWNED_TABLES:
            await self.session.execute(
                delete(table).where(table.employee_id == employee_id)
            )
        await self.session.execute(delete(Employee).where(Employee.id == employee_id))
        await self.session.flush()
