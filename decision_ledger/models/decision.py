"""Decision ORM — one row per directional (actor → recipient) pair.

Invariants:
    - (actor_id, recipient_id) is unique: re-decisions update in place
    - sequence_id is assigned once at insert and never changes
    - sequence_id is a pagination cursor only, decided_at is the semantic time

Design Decisions:
    - BIGINT primary key rendered as INTEGER on SQLite so it aliases the rowid
      (autoincrement only works on INTEGER PRIMARY KEY there)
    - Composite index (recipient_id, liked, sequence_id) matches the liked-you scans
"""

from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger, Boolean, DateTime, Index, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from decision_ledger.db.base import Base


USER_ID_LENGTH = 64


class Decision(Base):
    """Latest like/pass from actor toward recipient."""
    __tablename__ = "decisions"
    __table_args__ = (
        UniqueConstraint(
            "actor_id", "recipient_id", name="uq_decisions_actor_recipient",
        ),
        Index(
            "ix_decisions_recipient_liked_sequence",
            "recipient_id", "liked", "sequence_id",
        ),
        {"sqlite_autoincrement": True},
    )

    sequence_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    actor_id: Mapped[str] = mapped_column(
        String(USER_ID_LENGTH), nullable=False,
    )
    recipient_id: Mapped[str] = mapped_column(
        String(USER_ID_LENGTH), nullable=False,
    )
    liked: Mapped[bool] = mapped_column(Boolean, nullable=False)
    decided_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
