"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - All sessions are async (AsyncSession); the engine lives in infrastructure/database.py
    - Upserts go through db/upsert.py so PostgreSQL and SQLite share one code path
"""
