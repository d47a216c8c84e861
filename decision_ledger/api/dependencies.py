"""Route Dependencies — wiring between FastAPI and the ledger facade.

Invariants:
    - db_manager read at call time, not import time (it is set by the lifespan)
    - Path ids are stripped before the length check, like body ids
"""

from fastapi import HTTPException, Path, status

import decision_ledger.infrastructure.database as database
from decision_ledger.config import get_settings
from decision_ledger.core.domain_types import UserId
from decision_ledger.schemas.decision import normalize_user_id
from decision_ledger.services.decision_ledger import DecisionLedger


def get_ledger() -> DecisionLedger:
    """FastAPI dependency for the ledger facade."""
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    settings = get_settings()
    return DecisionLedger(
        database.db_manager,
        operation_timeout_seconds=settings.operation_timeout_seconds,
        default_page_size=settings.default_page_size,
    )


def recipient_id_path(recipient_id: str = Path(min_length=1)) -> UserId:
    """Normalize the {recipient_id} path segment the same way as body ids."""
    try:
        return UserId(normalize_user_id(recipient_id))
    except ValueError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
