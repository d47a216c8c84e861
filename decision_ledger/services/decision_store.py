"""Decision Store — SQL implementation of the one-row-per-pair decision log.

Invariants:
    - Runs inside the caller's transaction: flushes statements, never commits
    - upsert_decision returns the previous liked value (None when the pair is new)
      and keeps the existing sequence_id on re-decision
    - Two concurrent first decisions on one pair never both observe "no previous row":
      the loser of INSERT ... ON CONFLICT DO NOTHING re-reads the winner's row under lock
    - Listing is ordered by sequence_id ascending and capped at limit

Design Decisions:
    - SELECT ... FOR UPDATE on the pair row (PostgreSQL); SQLite drops the clause and
      relies on its single-writer lock
    - exclude_mutual is a correlated NOT EXISTS against an alias of the same table
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from decision_ledger.core.domain_types import (
    LikedDecision, SequenceId, UserId,
)
from decision_ledger.db.upsert import dialect_insert
from decision_ledger.models.decision import Decision

logger = logging.getLogger(__name__)


class SqlDecisionStore:
    """Decision persistence bound to one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert_decision(
        self, actor_id: UserId, recipient_id: UserId, liked: bool,
    ) -> bool | None:
        """Write the pair's decision; return the value it replaced."""
        decided_at = datetime.now(timezone.utc)

        previous = await self._lock_previous(actor_id, recipient_id)
        if previous is None:
            if await self._insert_if_absent(
                actor_id, recipient_id, liked, decided_at,
            ):
                return None
            # Lost the insert race: the row is committed now, read it under lock
            logger.info(
                "Concurrent first decision on pair, re-reading",
                extra={"actor_id": actor_id, "recipient_id": recipient_id},
            )
            previous = await self._lock_previous(actor_id, recipient_id)

        await self.db.execute(
            update(Decision)
            .where(Decision.actor_id == actor_id)
            .where(Decision.recipient_id == recipient_id)
            .values(liked=liked, decided_at=decided_at)
            .execution_options(synchronize_session=False)
        )
        return previous

    async def reverse_like_exists(
        self, actor_id: UserId, recipient_id: UserId,
    ) -> bool:
        """True when recipient has liked actor."""
        result = await self.db.execute(
            select(
                select(Decision.sequence_id)
                .where(Decision.actor_id == recipient_id)
                .where(Decision.recipient_id == actor_id)
                .where(Decision.liked.is_(True))
                .exists()
            )
        )
        return bool(result.scalar())

    async def query_liked_recipients_of(
        self,
        recipient_id: UserId,
        after_sequence: SequenceId,
        limit: int,
        exclude_mutual: bool = False,
    ) -> list[LikedDecision]:
        """Likes received by recipient after the cursor, oldest sequence first."""
        query = (
            select(Decision.actor_id, Decision.decided_at, Decision.sequence_id)
            .where(Decision.recipient_id == recipient_id)
            .where(Decision.liked.is_(True))
            .where(Decision.sequence_id > after_sequence)
        )
        if exclude_mutual:
            liked_back = aliased(Decision)
            query = query.where(
                ~select(liked_back.sequence_id)
                .where(liked_back.actor_id == recipient_id)
                .where(liked_back.recipient_id == Decision.actor_id)
                .where(liked_back.liked.is_(True))
                .exists()
            )
        query = query.order_by(Decision.sequence_id.asc()).limit(limit)

        result = await self.db.execute(query)
        return [
            LikedDecision(
                actor_id=UserId(row.actor_id),
                decided_at=row.decided_at,
                sequence_id=SequenceId(row.sequence_id),
            )
            for row in result
        ]

    async def _lock_previous(
        self, actor_id: UserId, recipient_id: UserId,
    ) -> bool | None:
        result = await self.db.execute(
            select(Decision.liked)
            .where(Decision.actor_id == actor_id)
            .where(Decision.recipient_id == recipient_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def _insert_if_absent(
        self,
        actor_id: UserId,
        recipient_id: UserId,
        liked: bool,
        decided_at: datetime,
    ) -> bool:
        """INSERT ... ON CONFLICT DO NOTHING. True when this call created the row."""
        statement = (
            dialect_insert(self.db, Decision)
            .values(
                actor_id=actor_id,
                recipient_id=recipient_id,
                liked=liked,
                decided_at=decided_at,
            )
            .on_conflict_do_nothing(index_elements=["actor_id", "recipient_id"])
            .returning(Decision.sequence_id)
        )
        result = await self.db.execute(statement)
        return result.scalar_one_or_none() is not None
