from typing import Iterable, Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.blob_store import LocalBlobStore, S3BlobStore
from src.adapter.services.notifier import LoggingNotifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.app.services.blob_store import DocumentStorage
from src.app.services.notifier import Notifier
from src.domain.entities import StorageType

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_notifier() -> Notifier:
    return LoggingNotifier()


def build_document_storage(config=ApplicationConfig) -> DocumentStorage:
    """Remote (S3) storage falls back to the local directory; local has no fallback"""
    stores = {StorageType.local: LocalBlobStore(config.LOCAL_STORAGE_PATH)}
    primary = StorageType(config.STORAGE_BACKEND)
    if primary == StorageType.remote:
        stores[StorageType.remote] = S3BlobStore(
            bucket=config.S3_BUCKET,
            region=config.S3_REGION,
            endpoint_url=config.S3_ENDPOINT_URL,
            access_key_id=config.S3_ACCESS_KEY_ID,
            secret_access_key=config.S3_SECRET_ACCESS_KEY,
        )
    return DocumentStorage(stores, primary=primary, fallback=StorageType.local)


_document_storage: Optional[DocumentStorage] = None


def get_document_storage() -> DocumentStorage:
    global _document_storage
    if _document_storage is None:
        _document_storage = build_document_storage()
    return _document_storage


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, role and, for onboarding
        accounts, employee_id

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None or "user_id" not in payload or "role" not in payload:
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload


def require_roles(*roles: str):
    """Dependency factory restricting a route to the given roles"""
    allowed: Iterable[str] = frozenset(roles)

    async def dependency(current_user: dict = Depends(get_current_user)) -> dict:
        if current_user["role"] not in allowed:
            raise ClientError(
                Error(
                    "INSUFFICIENT_ROLE",
                    "You do not have permission to perform this action",
                ),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return current_user

    return dependency
