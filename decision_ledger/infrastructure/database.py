"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - SQLAlchemy exceptions escaping a session are mapped to core/errors.py types:
      OperationalError/InterfaceError → DatabaseConnectivityError, the rest → DatabaseError
    - No retries on ledger operations; wait_for_database is startup-only

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    InterfaceError, OperationalError, SQLAlchemyError,
)
from sqlalchemy import text

from decision_ledger.core.errors import (
    DatabaseConnectivityError, DatabaseError, LedgerError,
)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except LedgerError:
            await session.rollback()
            raise
        except (OperationalError, InterfaceError) as e:
            await session.rollback()
            logger.error(f"DB connectivity error: {e}")
            raise DatabaseConnectivityError("Connection or operational error") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "query") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def wait_for_database(
        self, timeout_seconds: float = 30.0, interval_seconds: float = 0.5,
    ) -> None:
        """Ping until the database answers or the deadline passes."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_seconds
        attempt = 0
        while True:
            attempt += 1
            if await self.health_check():
                logger.info("Database reachable", extra={"attempt": attempt})
                return
            if loop.time() >= deadline:
                raise DatabaseConnectivityError(
                    f"no answer after {attempt} attempts in {timeout_seconds}s",
                )
            await asyncio.sleep(interval_seconds)

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager

