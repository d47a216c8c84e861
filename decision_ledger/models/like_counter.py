"""LikeCounter ORM — denormalized count of active inbound likes per user.

Invariants:
    - like_count == count of decisions with recipient_id = user_id AND liked, after every commit
    - like_count never negative (CHECK constraint backs the CASE clamp in the shell)
    - Mutated only by the decision recorder
"""

from sqlalchemy import BigInteger, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from decision_ledger.db.base import Base
from decision_ledger.models.decision import USER_ID_LENGTH


class LikeCounter(Base):
    """Inbound like count for one user."""
    __tablename__ = "like_counters"
    __table_args__ = (
        CheckConstraint("like_count >= 0", name="ck_like_counters_non_negative"),
    )

    user_id: Mapped[str] = mapped_column(
        String(USER_ID_LENGTH), primary_key=True,
    )
    like_count: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0,
    )
