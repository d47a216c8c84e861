"""Dialect Upsert — INSERT ... ON CONFLICT constructs for the bound backend.

Invariants:
    - Only backends with native ON CONFLICT support are accepted (PostgreSQL, SQLite)
    - Statements are built per call from the session's bind, never cached globally
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(db: AsyncSession, model):
    """Return the dialect-specific insert() for model, exposing on_conflict_*."""
    dialect_name = db.get_bind().dialect.name
    insert = _INSERT_BY_DIALECT.get(dialect_name)
    if insert is None:
        raise NotImplementedError(
            f"Upsert not supported for dialect '{dialect_name}'",
        )
    return insert(model)
