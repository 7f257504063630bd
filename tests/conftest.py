"""Pytest configuration and fixtures for tramites.

Environment is set before any tramites import so Settings validates on
first use. DB fixtures build a fresh in-memory SQLite schema per test with
Base.metadata.create_all (the trigger migration is Postgres-only) and seed
the organisation chart from tramites.infrastructure.persistence.seed.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="tramites-test-")
os.environ["MAIL_BACKEND"] = "log"
os.environ["TELEMETRY_ENABLED"] = "false"

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from tests.fakes import TEST_PASSWORD, InMemoryStorage, RecordingNotifier  # noqa: E402
from tramites.api.v1.dependencies.db import get_session_factory_dep  # noqa: E402
from tramites.application.dtos.actor import ActorContext  # noqa: E402
from tramites.application.interfaces.repositories import Repositories  # noqa: E402
from tramites.application.services.notification_dispatcher import (  # noqa: E402
    NotificationDispatcher,
)
from tramites.application.use_cases.documents import (  # noqa: E402
    DocumentLifecycleEngine,
    DocumentQueryService,
    TransactionalPersistenceCoordinator,
    UploadPolicy,
)
from tramites.core.config import get_settings  # noqa: E402
from tramites.core.limiter import limiter  # noqa: E402
from tramites.infrastructure.persistence import models  # noqa: E402,F401
from tramites.infrastructure.persistence.database import (  # noqa: E402
    Base,
    build_session_factory,
)
from tramites.infrastructure.persistence.seed import USERS, seed_reference_data  # noqa: E402
from tramites.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from tramites.main import create_app  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """One in-memory database per test; StaticPool keeps it on a single connection."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
def uow(session_factory: async_sessionmaker[AsyncSession]) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture
async def offices(session_factory: async_sessionmaker[AsyncSession]) -> dict[str, str]:
    """Seeded organisation chart: office id by name."""
    return await seed_reference_data(session_factory, password=TEST_PASSWORD)


@pytest.fixture
async def actors(
    offices: dict[str, str], uow: SqlAlchemyUnitOfWork
) -> dict[str, ActorContext]:
    """ActorContext for every seeded user, keyed by username."""

    async def work(repos: Repositories) -> dict[str, ActorContext]:
        result: dict[str, ActorContext] = {}
        for seed in USERS:
            credentials = await repos.users.get_credentials(seed.username)
            assert credentials is not None
            user = credentials.user
            result[seed.username] = ActorContext(
                user_id=user.id, role=user.role, office_id=user.office_id
            )
        return result

    return await uow.run(work)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier: RecordingNotifier) -> NotificationDispatcher:
    return NotificationDispatcher(notifier)


@pytest.fixture
def coordinator(
    uow: SqlAlchemyUnitOfWork,
    storage: InMemoryStorage,
    dispatcher: NotificationDispatcher,
) -> TransactionalPersistenceCoordinator:
    return TransactionalPersistenceCoordinator(uow, storage, dispatcher)


@pytest.fixture
def upload_policy() -> UploadPolicy:
    return UploadPolicy(max_size=1024 * 1024, allowed_types=("application/pdf", "image/*"))


@pytest.fixture
def lifecycle(
    uow: SqlAlchemyUnitOfWork,
    coordinator: TransactionalPersistenceCoordinator,
    upload_policy: UploadPolicy,
) -> DocumentLifecycleEngine:
    return DocumentLifecycleEngine(uow, coordinator, upload_policy)


@pytest.fixture
def queries(uow: SqlAlchemyUnitOfWork) -> DocumentQueryService:
    return DocumentQueryService(uow)


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    offices: dict[str, str],
    storage: InMemoryStorage,
    dispatcher: NotificationDispatcher,
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh app wired to the test database."""
    app = create_app()
    app.dependency_overrides[get_session_factory_dep] = lambda: session_factory
    app.state.storage = storage
    app.state.dispatcher = dispatcher
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await dispatcher.drain()


@pytest.fixture
def login(client: AsyncClient):
    """Return a coroutine that signs in a seeded user and yields auth headers."""

    async def _login(username: str) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/login",
            json={"identifier": username, "password": TEST_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
