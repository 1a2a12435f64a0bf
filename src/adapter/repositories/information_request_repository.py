from typing import List
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.information_request_repository import (
    IInformationRequestRepository,
)
from src.domain.base import utcnow
from src.domain.entities import InformationRequest, InformationRequestStatus


class InformationRequestRepository(IInformationRequestRepository):
    """InformationRequest repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, request: InformationRequest) -> InformationRequest:
        """Create a new information request"""
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get_pending_by_employee(self, employee_id: UUID) -> List[InformationRequest]:
        """Get open requests for an employee"""
        stmt = (
            select(InformationRequest)
            .where(
                InformationRequest.employee_id == employee_id,
                InformationRequest.status == InformationRequestStatus.pending,
            )
            .order_by(InformationRequest.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def mark_fulfilled(self, employee_id: UUID) -> int:
        """Close every open request of an employee"""
        stmt = (
            update(InformationRequest)
            .where(
                InformationRequest.employee_id == employee_id,
                InformationRequest.status == InformationRequestStatus.pending,
            )
            .values(status=InformationRequestStatus.fulfilled, fulfilled_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
