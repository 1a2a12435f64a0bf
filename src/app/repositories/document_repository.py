from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Document, RequiredDocumentType


class IDocumentRepository(ABC):
    """Document repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        """Get document by ID"""
        pass

    @abstractmethod
    async def get_by_employee(
        self, employee_id: UUID, include_archived: bool = False
    ) -> List[Document]:
        """Get documents uploaded for an employee"""
        pass

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """Create document metadata"""
        pass

    @abstractmethod
    async def delete(self, document: Document) -> None:
        """Delete document metadata"""
        pass

    @abstractmethod
    async def archive_by_employee(self, employee_id: UUID) -> int:
        """Archive every active document of an employee"""
        pass

    @abstractmethod
    async def get_required_types(self) -> List[RequiredDocumentType]:
        """Get document types flagged as required"""
        pass
