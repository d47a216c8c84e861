"""ORM Models — SQLAlchemy declarative models for ledger tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Decision and LikeCounter have no FK between them: counter rows are keyed by
      recipient user id, which is an opaque external identifier

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from decision_ledger.models.decision import Decision  # noqa: F401
from decision_ledger.models.like_counter import LikeCounter  # noqa: F401
