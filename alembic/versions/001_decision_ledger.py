"""Decision ledger schema — decisions and like_counters.

Revision ID: 001_decision_ledger
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_decision_ledger"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "decisions",
        sa.Column(
            "sequence_id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            primary_key=True, autoincrement=True,
        ),
        sa.Column("actor_id", sa.String(64), nullable=False),
        sa.Column("recipient_id", sa.String(64), nullable=False),
        sa.Column("liked", sa.Boolean, nullable=False),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "actor_id", "recipient_id", name="uq_decisions_actor_recipient",
        ),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "ix_decisions_recipient_liked_sequence",
        "decisions",
        ["recipient_id", "liked", "sequence_id"],
    )

    op.create_table(
        "like_counters",
        sa.Column("user_id", sa.String(64), primary_key=True),
        sa.Column("like_count", sa.BigInteger, nullable=False, server_default="0"),
        sa.CheckConstraint("like_count >= 0", name="ck_like_counters_non_negative"),
    )


def downgrade() -> None:
    op.drop_table("like_counters")
    op.drop_index("ix_decisions_recipient_liked_sequence", table_name="decisions")
    op.drop_table("decisions")
