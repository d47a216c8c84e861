"""Liked-You Query Engine — cursor-paginated views of who liked a recipient.

Invariants:
    - Read-only: no transaction beyond single-statement consistency
    - Pages are ordered by sequence_id ascending; next token only on an exactly full page
    - count_liked_you reports 0 for a user with no counter row (never surfaces not-found)

Design Decisions:
    - list_liked_you and list_new_liked_you share _list_page: they differ only in
      exclude_mutual
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from decision_ledger.core.domain_types import (
    LikedYouPage, Liker, UserId, to_unix_timestamp,
)
from decision_ledger.core.errors import LikeCounterNotFoundError
from decision_ledger.core.pagination import PageRequest, next_page_token
from decision_ledger.core.repository_protocols import (
    DecisionStore, LikeCounterStore,
)
from decision_ledger.services.decision_store import SqlDecisionStore
from decision_ledger.services.like_counter import SqlLikeCounter

logger = logging.getLogger(__name__)


class LikedYouQueryEngine:
    """Liked-you listings and counts for one AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        decisions: DecisionStore | None = None,
        counter: LikeCounterStore | None = None,
    ):
        self.decisions = decisions or SqlDecisionStore(db)
        self.counter = counter or SqlLikeCounter(db)

    async def list_liked_you(
        self, recipient_id: UserId, page: PageRequest,
    ) -> LikedYouPage:
        """Everyone whose current decision on recipient is a like."""
        return await self._list_page(recipient_id, page, exclude_mutual=False)

    async def list_new_liked_you(
        self, recipient_id: UserId, page: PageRequest,
    ) -> LikedYouPage:
        """Likers that recipient has not liked back yet."""
        return await self._list_page(recipient_id, page, exclude_mutual=True)

    async def count_liked_you(self, recipient_id: UserId) -> int:
        try:
            return await self.counter.get(recipient_id)
        except LikeCounterNotFoundError:
            logger.debug(
                "No like counter yet, reporting 0",
                extra={"recipient_id": recipient_id},
            )
            return 0

    async def _list_page(
        self, recipient_id: UserId, page: PageRequest, exclude_mutual: bool,
    ) -> LikedYouPage:
        rows = await self.decisions.query_liked_recipients_of(
            recipient_id,
            page.after_sequence,
            page.page_size,
            exclude_mutual=exclude_mutual,
        )
        return LikedYouPage(
            likers=[
                Liker(
                    actor_id=row.actor_id,
                    unix_timestamp=to_unix_timestamp(row.decided_at),
                )
                for row in rows
            ],
            next_pagination_token=next_page_token(
                [row.sequence_id for row in rows], page.page_size,
            ),
        )
