"""Decisions — record a like or pass and report mutual likes.

Invariants:
    - Body validated by DecisionCreate before reaching the handler
    - PUT is idempotent: repeating a decision leaves the counter unchanged
"""

import logging

from fastapi import APIRouter, Depends

from decision_ledger.api.dependencies import get_ledger
from decision_ledger.core.domain_types import UserId
from decision_ledger.schemas.decision import DecisionCreate, DecisionResponse
from decision_ledger.services.decision_ledger import DecisionLedger

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/decisions", tags=["decisions"])


@router.put("", response_model=DecisionResponse)
async def record_decision(
    body: DecisionCreate, ledger: DecisionLedger = Depends(get_ledger),
):
    """Record actor's like/pass on recipient."""
    mutual_like = await ledger.record_decision(
        UserId(body.actor_id), UserId(body.recipient_id), body.liked,
    )
    return DecisionResponse(mutual_like=mutual_like)
