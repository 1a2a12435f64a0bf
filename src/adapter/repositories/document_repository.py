from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.document_repository import IDocumentRepository
from src.domain.entities import Document, RequiredDocumentType


class DocumentRepository(IDocumentRepository):
    """Document repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        """Get document by ID"""
        stmt = select(Document).where(Document.id == document_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_employee(
        self, employee_id: UUID, include_archived: bool = False
    ) -> List[Document]:
        """Get documents uploaded for an employee, newest first"""
        stmt = select(Document).where(Document.employee_id == employee_id)
        if not include_archived:
            stmt = stmt.where(Document.archived == False)  # noqa: E712
        stmt = stmt.order_by(Document.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, document: Document) -> Document:
        """Create document metadata"""
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def delete(self, document: Document) -> None:
        """Delete document metadata"""
        await self.session.delete(document)
        await self.session.flush()

    async def archive_by_employee(self, employee_id: UUID) -> int:
        """Archive every active document of an employee"""
        stmt = (
            update(Document)
            .where(Document.employee_id == employee_id, Document.archived == False)  # noqa: E712
            .values(archived=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_required_types(self) -> List[RequiredDocumentType]:
        """Get document types flagged as required"""
        stmt = select(RequiredDocumentType).where(
            RequiredDocumentType.is_required == True  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return list(result.all())
