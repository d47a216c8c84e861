"""Service test fixtures — async DB, ledger facade + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - get_ledger dependency overridden to use the test database
    - db_manager patched so readiness probes hit the test database
    - Assertions read through fresh sessions (count_of / decision_of), never the
      session under test

Design Decisions:
    - SQLite file over :memory:: each session gets its own connection, so commit and
      rollback behave as they do against PostgreSQL
"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import decision_ledger.models  # noqa: F401
from decision_ledger.api.dependencies import get_ledger
from decision_ledger.db.base import Base
from decision_ledger.infrastructure.database import DatabaseSessionManager
from decision_ledger.models.decision import Decision
from decision_ledger.models.like_counter import LikeCounter
from decision_ledger.services.decision_ledger import DecisionLedger
import decision_ledger.infrastructure.database as db_module
from decision_ledger.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_db_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def ledger(test_db_manager):
    return DecisionLedger(test_db_manager, operation_timeout_seconds=5.0)


@pytest.fixture
async def client(test_db_manager, ledger):
    """FastAPI test client with the ledger dependency overridden."""
    app.dependency_overrides[get_ledger] = lambda: ledger

    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def count_of(test_session_factory):
    """Read a user's stored like_count (None when no counter row)."""
    async def _count_of(user_id: str) -> int | None:
        async with test_session_factory() as session:
            result = await session.execute(
                select(LikeCounter.like_count).where(LikeCounter.user_id == user_id),
            )
            return result.scalar_one_or_none()
    return _count_of


@pytest.fixture
def decision_of(test_session_factory):
    """Read the stored Decision row for a pair (None when absent)."""
    async def _decision_of(actor_id: str, recipient_id: str) -> Decision | None:
        async with test_session_factory() as session:
            result = await session.execute(
                select(Decision)
                .where(Decision.actor_id == actor_id)
                .where(Decision.recipient_id == recipient_id),
            )
            return result.scalar_one_or_none()
    return _decision_of


@pytest.fixture
def record(ledger):
    """Shorthand: record a sequence of (actor, recipient, liked) decisions."""
    async def _record(*decisions: tuple[str, str, bool]) -> list[bool]:
        return [
            await ledger.record_decision(actor, recipient, liked)
            for actor, recipient, liked in decisions
        ]
    return _record
