"""Test configuration and fixtures."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from typing import AsyncGenerator, List, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tenant_api.main import app
from tenant_api.core.database import Base, create_engine, get_db
from tenant_api.core.dependencies import get_publisher
from tenant_api.core.enums import EventAction
from tenant_api.core.exceptions import PublishError
from tenant_api.events.messages import ChangeMessage
from tenant_api.events.publisher import EventPublisher
from tenant_api.models.tenant import Tenant
from tenant_api.repositories.tenant import TenantRepository
from tenant_api.services.tenant import TenantService


# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingPublisher(EventPublisher):
    """Keeps every published message in memory."""

    def __init__(self):
        super().__init__()
        self.published: List[Tuple[str, ChangeMessage]] = []

    async def publish(self, action: EventAction, topic: str, scope: str, message: ChangeMessage) -> None:
        self.published.append((self.subject(action, topic, scope), message))


class FailingPublisher(EventPublisher):
    """Fails every delivery the way an unreachable gateway would."""

    def __init__(self):
        super().__init__()
        self.attempts = 0

    async def publish(self, action: EventAction, topic: str, scope: str, message: ChangeMessage) -> None:
        self.attempts += 1
        raise PublishError("event gateway unavailable")


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh in-memory database and session for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def failing_publisher() -> FailingPublisher:
    return FailingPublisher()


@pytest.fixture
def repository(db_session: AsyncSession) -> TenantRepository:
    return TenantRepository(db_session)


@pytest.fixture
def service(repository: TenantRepository, publisher: RecordingPublisher) -> TenantService:
    return TenantService(repository, publisher)


@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession, publisher: RecordingPublisher
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and publisher overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_publisher] = lambda: publisher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def root_tenant(repository: TenantRepository) -> Tenant:
    """Create a root tenant directly through the repository."""
    return await repository.insert(Tenant(name="acme", description="Acme Corp"))


@pytest_asyncio.fixture
async def child_tenant(repository: TenantRepository, root_tenant: Tenant) -> Tenant:
    return await repository.insert(Tenant(name="acme-east", parent_tenant_id=root_tenant.id))
