"""Decision Recorder — transactional state-transition engine for like/pass decisions.

Invariants:
    - One transaction per call: decision upsert, counter adjustment and mutual check
      commit together or not at all
    - Counter moves only when the liked dimension changes (core/decision_transitions.py)
    - Mutual like is checked only for likes; a pass always returns False
    - Any SQLAlchemy error rolls back and surfaces as TransactionFailureError

Design Decisions:
    - Pure counter_effect decides, the shell applies: transition table testable without DB
    - Commit is the last statement of the success path; every other exit rolls back
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from decision_ledger.core.decision_transitions import (
    counter_effect, reports_mutual_like,
)
from decision_ledger.core.domain_types import CounterEffect, UserId
from decision_ledger.core.errors import ErrorContext, TransactionFailureError
from decision_ledger.core.repository_protocols import (
    DecisionStore, LikeCounterStore,
)
from decision_ledger.services.decision_store import SqlDecisionStore
from decision_ledger.services.like_counter import SqlLikeCounter

logger = logging.getLogger(__name__)


class DecisionRecorder:
    """Records one decision per call and reports whether it completed a match."""

    def __init__(
        self,
        db: AsyncSession,
        decisions: DecisionStore | None = None,
        counter: LikeCounterStore | None = None,
    ):
        self.db = db
        self.decisions = decisions or SqlDecisionStore(db)
        self.counter = counter or SqlLikeCounter(db)

    async def record_decision(
        self, actor_id: UserId, recipient_id: UserId, liked: bool,
    ) -> bool:
        """Upsert actor's decision on recipient; return True on a mutual like."""
        try:
            previous = await self.decisions.upsert_decision(
                actor_id, recipient_id, liked,
            )

            effect = counter_effect(previous, liked)
            if effect is CounterEffect.INCREMENT:
                await self.counter.increment(recipient_id)
            elif effect is CounterEffect.DECREMENT:
                await self.counter.decrement(recipient_id)

            reverse_liked = liked and await self.decisions.reverse_like_exists(
                actor_id, recipient_id,
            )
            mutual_like = reports_mutual_like(liked, reverse_liked)

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Decision transaction rolled back: {e}",
                extra={
                    "actor_id": actor_id,
                    "recipient_id": recipient_id,
                    "error_code": "TRANSACTION_FAILURE",
                },
            )
            raise TransactionFailureError(
                "decision was not recorded", "record_decision",
                ErrorContext(
                    actor_id=actor_id, recipient_id=recipient_id,
                    operation="record_decision",
                ),
            ) from e

        logger.info(
            f"Decision recorded ({previous} -> {liked}, counter {effect.value})",
            extra={
                "actor_id": actor_id,
                "recipient_id": recipient_id,
                "mutual_like": mutual_like,
            },
        )
        return mutual_like
