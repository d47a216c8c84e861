"""Like Counter — SQL implementation of the denormalized inbound-like count.

Invariants:
    - Every mutation is one atomic statement (no read-modify-write in Python)
    - increment creates the row at 1 when absent
    - decrement clamps at 0 and is a no-op when the row is absent
    - get raises LikeCounterNotFoundError for an absent row; callers decide what that means
    - Runs inside the caller's transaction: never commits
"""

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from decision_ledger.core.domain_types import UserId
from decision_ledger.core.errors import LikeCounterNotFoundError
from decision_ledger.db.upsert import dialect_insert
from decision_ledger.models.like_counter import LikeCounter


class SqlLikeCounter:
    """Like counter persistence bound to one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def increment(self, user_id: UserId) -> None:
        statement = dialect_insert(self.db, LikeCounter).values(
            user_id=user_id, like_count=1,
        )
        statement = statement.on_conflict_do_update(
            index_elements=["user_id"],
            set_={"like_count": LikeCounter.like_count + 1},
        )
        await self.db.execute(statement)

    async def decrement(self, user_id: UserId) -> None:
        await self.db.execute(
            update(LikeCounter)
            .where(LikeCounter.user_id == user_id)
            .values(
                like_count=case(
                    (LikeCounter.like_count > 0, LikeCounter.like_count - 1),
                    else_=0,
                ),
            )
            .execution_options(synchronize_session=False)
        )

    async def get(self, user_id: UserId) -> int:
        result = await self.db.execute(
            select(LikeCounter.like_count).where(LikeCounter.user_id == user_id),
        )
        count = result.scalar_one_or_none()
        if count is None:
            raise LikeCounterNotFoundError(user_id)
        return count
