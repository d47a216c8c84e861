"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Writes run inside the caller's transaction; implementations never commit

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, the pure transition logic stays sync
"""

from typing import Protocol

from decision_ledger.core.domain_types import LikedDecision, SequenceId, UserId


class DecisionStore(Protocol):
    """Contract for the one-row-per-pair decision log: implemented by shell."""
    async def upsert_decision(
        self, actor_id: UserId, recipient_id: UserId, liked: bool,
    ) -> bool | None: ...
    async def reverse_like_exists(
        self, actor_id: UserId, recipient_id: UserId,
    ) -> bool: ...
    async def query_liked_recipients_of(
        self,
        recipient_id: UserId,
        after_sequence: SequenceId,
        limit: int,
        exclude_mutual: bool = False,
    ) -> list[LikedDecision]: ...


class LikeCounterStore(Protocol):
    """Contract for the denormalized inbound-like counter: implemented by shell."""
    async def increment(self, user_id: UserId) -> None: ...
    async def decrement(self, user_id: UserId) -> None: ...
    async def get(self, user_id: UserId) -> int: ...
