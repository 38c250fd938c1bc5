"""
Test infrastructure for the Registry GraphQL API.

Strategy
--------
- SQLite in-memory via aiosqlite removes the need for a running Postgres
  instance; StaticPool makes every session share the one in-memory
  connection, otherwise each connection would see an empty database.
- The app's get_db dependency is overridden, which also reaches the
  GraphQL context because the context getter depends on get_db.
- Tables are created before and dropped after each test; the two default
  roles are inserted so ``userRole`` resolves like in a migrated database.
- bcrypt runs at its minimum cost so password hashing does not dominate
  the run time.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.middleware import install_query_counter
from app.models import UserRole

settings.BCRYPT_ROUNDS = 4

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables and default roles before each test, drop after."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(
            insert(UserRole.__table__),
            [
                {"name": "admin", "description": "Full access"},
                {"name": "user", "description": "Regular operator"},
            ],
        )
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live AsyncSession for service-level tests."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def graphql(async_client: AsyncClient):
    """
    Return ``execute(query, variables=None)`` posting to the GraphQL
    endpoint and returning the decoded response body.
    """

    async def execute(query: str, variables: dict | None = None) -> dict:
        resp = await async_client.post(
            settings.GRAPHQL_PATH,
            json={"query": query, "variables": variables or {}},
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    return execute
