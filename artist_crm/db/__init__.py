"""Database Declarations — SQLAlchemy Base shared by every model.

Invariants:
    - All sessions are async (AsyncSession, see infrastructure/database.py)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite in tests
"""
