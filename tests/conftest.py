"""
Shared fixtures: an in-memory SQLite database per test and seeded students.
"""
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from collegepath.catalog import get_catalog
from collegepath.infra.db.repositories.user import UserRepository
from collegepath.infra.db.session import init_db

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def user(session):
    return await UserRepository(session).create(
        email="amina@example.com",
        first_name="Amina",
        last_name="Otieno",
    )


@pytest_asyncio.fixture
async def other_user(session):
    return await UserRepository(session).create(
        email="brian@example.com",
        first_name="Brian",
        last_name="Kamau",
    )


@pytest.fixture
def catalog():
    return get_catalog()
