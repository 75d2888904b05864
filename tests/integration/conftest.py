"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- In-memory document store database
- Local storage in a temporary directory
- A failing document store for degraded-mode tests
"""

from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from fintrack.main import app
from fintrack.core.config import Settings
from fintrack.core.context import AppContext, build_context, open_context
from fintrack.core.dependencies import get_app_context
from fintrack.domain.entities import Transaction, TransactionDraft
from fintrack.domain.exceptions import StoreUnavailableException
from fintrack.domain.interfaces import TransactionStore
from fintrack.infrastructure.database import Base, DatabaseSessionManager
from fintrack.infrastructure.stores import (
    JsonFileStorage,
    LocalTransactionStore,
    ResilientTransactionStore,
)


# =============================================================================
# Mock Stores
# =============================================================================

class FailingDocumentStore(TransactionStore):
    """Document store that is never reachable."""

    def __init__(self):
        self.call_count = 0

    def _fail(self):
        self.call_count += 1
        raise StoreUnavailableException("Document store error: connection refused")

    async def ping(self) -> None:
        self._fail()

    def subscribe(self, owner_id, on_data, on_error=None):
        if on_error is not None:
            on_error(StoreUnavailableException("Document store error: connection refused"))
        return lambda: None

    async def snapshot(self, owner_id: str) -> List[Transaction]:
        self._fail()

    async def create(self, owner_id: str, draft: TransactionDraft) -> str:
        self._fail()

    async def delete(self, owner_id: str, transaction_id: str) -> bool:
        self._fail()


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def test_db(test_engine) -> DatabaseSessionManager:
    """Session manager bound to the in-memory engine."""
    db = DatabaseSessionManager()
    db.bind(test_engine)
    return db


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated from the environment, with local storage under tmp_path."""
    return Settings(
        _env_file=None,
        app_id="test-app",
        database_url="sqlite+aiosqlite:///:memory:",
        local_store_path=str(tmp_path / "fintrack_local.json"),
        log_format="console",
    )


# =============================================================================
# Context Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def context(test_settings: Settings, test_db: DatabaseSessionManager) -> AppContext:
    """Context backed by the in-memory document store."""
    return await open_context(test_settings, test_db)


@pytest.fixture
def failing_store() -> FailingDocumentStore:
    return FailingDocumentStore()


@pytest.fixture
def degraded_context(test_settings: Settings, failing_store: FailingDocumentStore) -> AppContext:
    """Context whose document store is unreachable; not yet degraded."""
    local_store = LocalTransactionStore(
        JsonFileStorage(test_settings.local_store_path),
        test_settings,
    )
    return AppContext(
        settings=test_settings,
        store=ResilientTransactionStore(primary=failing_store, fallback=local_store),
    )


@pytest.fixture
def disabled_context(test_settings: Settings, test_db: DatabaseSessionManager) -> AppContext:
    """Context with the document store switched off in settings."""
    return build_context(
        test_settings.model_copy(update={"store_enabled": False}),
        test_db,
    )


# =============================================================================
# App Client Fixtures
# =============================================================================

async def _client_for(context: AppContext) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_app_context] = lambda: context

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(context: AppContext) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the in-memory document store.

    Requests without an X-Owner-ID header act as the local owner.
    """
    async for ac in _client_for(context):
        yield ac


@pytest_asyncio.fixture
async def degraded_client(degraded_context: AppContext) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose document store always fails."""
    async for ac in _client_for(degraded_context):
        yield ac


@pytest_asyncio.fixture
async def disabled_client(disabled_context: AppContext) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with the document store switched off."""
    async for ac in _client_for(disabled_context):
        yield ac


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def expense_request() -> dict:
    return {
        "amount": 250,
        "type": "expense",
        "category": "Food",
        "description": "Lunch",
    }


@pytest.fixture
def income_request() -> dict:
    return {
        "amount": 1000,
        "type": "income",
        "description": "Salary",
    }
