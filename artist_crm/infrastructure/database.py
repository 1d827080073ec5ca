"""Database Session Manager — async engine, per-request sessions, driver error mapping.

Invariants:
    - A session that raises is rolled back before the error leaves the manager
    - Constraint violations surface as ConflictError (409), every other
      SQLAlchemy failure as DatabaseError (503)
    - SQLite connections run with foreign keys ON so artist deletes cascade
      the same way they do on PostgreSQL

Design Decisions:
    - Singleton db_manager created in the FastAPI lifespan
    - expire_on_commit=False: routes serialize rows after commit without lazy loads
    - Pool sizing only applies to server databases; SQLite keeps SQLAlchemy's default pool
    - create_schema() is for local SQLite runs; PostgreSQL is migrated with alembic
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from artist_crm.core.errors import ConflictError, CrmError, DatabaseError
from artist_crm.db.base import Base

logger = logging.getLogger(__name__)


def is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def translate_db_error(exc: SQLAlchemyError) -> CrmError:
    """Map a SQLAlchemy failure to the API error it should produce."""
    if isinstance(exc, IntegrityError):
        return ConflictError("Record conflicts with existing data")
    if isinstance(exc, OperationalError):
        return DatabaseError("Connection or operational error", "execute")
    if isinstance(exc, DBAPIError):
        return DatabaseError("Database driver error", "query")
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.database_url = database_url
        if is_sqlite(database_url):
            self.engine = create_async_engine(database_url)
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = translate_db_error(e)
            logger.error(
                f"DB error ({type(e).__name__}): {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables straight from the ORM metadata."""
        import artist_crm.models  # noqa: F401  (registers every table on Base)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created from ORM metadata")

    async def health_check(self) -> bool:
        """Readiness check: can we run a trivial query?"""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (CrmError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
