"""Domain Types — rich types that replace bare primitives across the ledger.

Invariants:
    - UserId wraps an opaque string identifier, never parsed or interpreted
    - SequenceId is a pagination cursor only, never a timestamp
    - All valid counter effects encoded as an Enum: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses for read results: rows leave the session as plain values
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
SequenceId = NewType("SequenceId", int)


# ─── Enums ───────────────────────────────────────────────────────

class CounterEffect(str, Enum):
    """Adjustment applied to the recipient's like counter after a decision."""
    INCREMENT = "increment"
    DECREMENT = "decrement"
    NONE = "none"


# ─── Read Results ────────────────────────────────────────────────

@dataclass(frozen=True)
class LikedDecision:
    """One inbound like as stored: who, when, and its cursor position."""
    actor_id: UserId
    decided_at: datetime
    sequence_id: SequenceId


@dataclass(frozen=True)
class Liker:
    """Public view of an inbound like."""
    actor_id: UserId
    unix_timestamp: int


@dataclass(frozen=True)
class LikedYouPage:
    """One page of likers plus the continuation token ("" at the end)."""
    likers: list[Liker] = field(default_factory=list)
    next_pagination_token: str = ""


def to_unix_timestamp(moment: datetime) -> int:
    """Whole seconds since the epoch. Naive datetimes are read as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())
