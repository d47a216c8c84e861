"""Decision Ledger — the four operations the transport layer calls.

Invariants:
    - Each operation runs in its own session from DatabaseSessionManager
    - Each operation honors a deadline; expiry raises OperationTimeoutError and the
      session context rolls back and closes
    - Pagination parameters are validated before a session is opened
    - No caching, locking or retries here: consistency comes from the store

Design Decisions:
    - Facade over direct service use in routes: one seam for deadlines and logging
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from decision_ledger.core.domain_types import LikedYouPage, UserId
from decision_ledger.core.errors import ErrorContext, OperationTimeoutError
from decision_ledger.core.pagination import DEFAULT_PAGE_SIZE, parse_page_request
from decision_ledger.infrastructure.database import DatabaseSessionManager
from decision_ledger.services.decision_recorder import DecisionRecorder
from decision_ledger.services.liked_you_query import LikedYouQueryEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DecisionLedger:
    """RecordDecision, ListLikedYou, ListNewLikedYou and CountLikedYou."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        operation_timeout_seconds: float = 5.0,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._db_manager = db_manager
        self._timeout = operation_timeout_seconds
        self._default_page_size = default_page_size

    async def record_decision(
        self, actor_id: UserId, recipient_id: UserId, liked: bool,
    ) -> bool:
        async def op(db: AsyncSession) -> bool:
            return await DecisionRecorder(db).record_decision(
                actor_id, recipient_id, liked,
            )

        return await self._run(
            "record_decision", op,
            ErrorContext(actor_id=actor_id, recipient_id=recipient_id),
        )

    async def list_liked_you(
        self,
        recipient_id: UserId,
        page_size: int | None = None,
        pagination_token: str | None = None,
    ) -> LikedYouPage:
        page = parse_page_request(
            page_size, pagination_token, self._default_page_size,
        )

        async def op(db: AsyncSession) -> LikedYouPage:
            return await LikedYouQueryEngine(db).list_liked_you(recipient_id, page)

        return await self._run(
            "list_liked_you", op, ErrorContext(recipient_id=recipient_id),
        )

    async def list_new_liked_you(
        self,
        recipient_id: UserId,
        page_size: int | None = None,
        pagination_token: str | None = None,
    ) -> LikedYouPage:
        page = parse_page_request(
            page_size, pagination_token, self._default_page_size,
        )

        async def op(db: AsyncSession) -> LikedYouPage:
            return await LikedYouQueryEngine(db).list_new_liked_you(
                recipient_id, page,
            )

        return await self._run(
            "list_new_liked_you", op, ErrorContext(recipient_id=recipient_id),
        )

    async def count_liked_you(self, recipient_id: UserId) -> int:
        async def op(db: AsyncSession) -> int:
            return await LikedYouQueryEngine(db).count_liked_you(recipient_id)

        return await self._run(
            "count_liked_you", op, ErrorContext(recipient_id=recipient_id),
        )

    async def _run(
        self,
        operation: str,
        op: Callable[[AsyncSession], Awaitable[T]],
        context: ErrorContext,
    ) -> T:
        """Run op in a fresh session under the operation deadline."""

        async def in_session() -> T:
            async with self._db_manager.session() as db:
                return await op(db)

        try:
            return await asyncio.wait_for(in_session(), timeout=self._timeout)
        except asyncio.TimeoutError:
            context.operation = operation
            logger.error(
                f"{operation} timed out after {self._timeout}s",
                extra={
                    "operation": operation,
                    "actor_id": context.actor_id,
                    "recipient_id": context.recipient_id,
                    "error_code": "OPERATION_TIMEOUT",
                },
            )
            raise OperationTimeoutError(operation, self._timeout, context)
