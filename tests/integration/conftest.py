import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.blob_store import DocumentStorage
from src.depends import get_document_storage, get_unit_of_work
from src.domain.entities import StorageType, UserRole
from tests.fixtures.blob_store import InMemoryBlobStore
from tests.fixtures.factories import bearer, create_staff_user
from tests.fixtures.json_loader import TestDataLoader


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File database so that separate sessions see each other's commits
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest_asyncio.fixture
async def client(session_factory, blob_store):
    app = create_app(ApplicationConfig)

    # One session per request, as in production; tests read back through db_session
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    def override_get_document_storage():
        return DocumentStorage({StorageType.local: blob_store}, primary=StorageType.local)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_document_storage] = override_get_document_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user(db_session):
    return await create_staff_user(db_session, UserRole.admin, "admin@clinic.com")


@pytest_asyncio.fixture
async def hr_user(db_session):
    return await create_staff_user(db_session, UserRole.hr, "hr@clinic.com")


@pytest_asyncio.fixture
def admin_headers(admin_user):
    return bearer(admin_user.id, UserRole.admin.value)


@pytest_asyncio.fixture
def hr_headers(hr_user):
    return bearer(hr_user.id, UserRole.hr.value)
