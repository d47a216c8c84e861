"""Decision Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized and reachable before the first request (lifespan)

Design Decisions:
    - Lifespan over @app.on_event
    - Startup waits for the database with a bounded deadline instead of failing
      on the first refused connection
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decision_ledger.api.error_handlers import register_error_handlers
from decision_ledger.api.routes import decisions, health, liked_you
from decision_ledger.config import get_settings
from decision_ledger.infrastructure.database import init_db
from decision_ledger.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.wait_for_database(
        settings.database_connect_timeout_seconds,
        settings.database_connect_retry_interval_seconds,
    )
    logger.info("Decision Ledger API started")
    yield
    logger.info("Decision Ledger API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Decision Ledger API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(decisions.router)
app.include_router(liked_you.router)

register_error_handlers(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
