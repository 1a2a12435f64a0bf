"""
Document Blob Storage

BlobStore is the key-level contract each backend implements.
DocumentStorage routes documents to the configured backend and falls back
to the secondary backend once when the primary is unavailable.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from src.domain.entities import StorageType

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised by blob stores when an operation cannot be completed"""


@dataclass(frozen=True)
class StoredBlob:
    storage_type: StorageType
    key: str


class BlobStore(ABC):
    """Backend contract over opaque storage keys"""

    @abstractmethod
    async def upload(self, key: str, content: bytes, content_type: str) -> None:
        pass

    @abstractmethod
    async def download(self, key: str) -> bytes:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass


class DocumentStorage:
    """Primary/fallback routing over blob stores"""

    def __init__(
        self,
        stores: Dict[StorageType, BlobStore],
        primary: StorageType,
        fallback: Optional[StorageType] = None,
    ):
        if primary not in stores:
            raise ValueError(f"No blob store configured for {primary.value}")
        self.stores = stores
        self.primary = primary
        self.fallback = fallback if fallback in stores and fallback != primary else None

    def _store(self, storage_type: StorageType) -> BlobStore:
        store = self.stores.get(storage_type)
        if store is None:
            raise StorageError(f"No blob store configured for {storage_type.value}")
        return store

    async def save(self, key: str, content: bytes, content_type: str) -> StoredBlob:
        try:
            await self.stores[self.primary].upload(key, content, content_type)
            return StoredBlob(self.primary, key)
        except StorageError as e:
            if self.fallback is None:
                raise
            logger.warning(
                f"{self.primary.value} storage failed for {key}, "
                f"falling back to {self.fallback.value}: {e}"
            )

        await self.stores[self.fallback].upload(key, content, content_type)
        return StoredBlob(self.fallback, key)

    async def load(self, blob: StoredBlob) -> bytes:
        return await self._store(blob.storage_type).download(blob.key)

    async def remove(self, blob: StoredBlob) -> None:
        await self._store(blob.storage_type).delete(blob.key)
