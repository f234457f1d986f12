"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Every session is closed (connection returned to the pool) on all exit paths
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to tagged DatabaseError subclasses (core/errors.py)
    - missing_tables() compares the live schema with Base.metadata (readiness)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: returned rows stay readable after the session closes
    - Schema created from Base.metadata on startup; there is no migration tooling
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy import inspect, text

from librario.core.errors import (
    DatabaseError, DatabaseConflictError, DatabaseConnectionError,
    DatabaseTimeoutError,
)
from librario.db.base import Base

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_timeout: int = 30,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "query",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.warning(
                f"DB integrity error: {e}", extra={"operation": operation},
            )
            raise DatabaseConflictError(operation)
        except (PoolTimeoutError, asyncio.TimeoutError) as e:
            await session.rollback()
            logger.error(
                f"DB timeout: {e}", extra={"operation": operation},
            )
            raise DatabaseTimeoutError(operation)
        except OperationalError as e:
            await session.rollback()
            logger.error(
                f"DB operational error: {e}", extra={"operation": operation},
            )
            raise DatabaseConnectionError(operation)
        except DBAPIError as e:
            await session.rollback()
            logger.error(
                f"DB driver error: {e}", extra={"operation": operation},
            )
            raise DatabaseError("Database driver error", operation)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"SQLAlchemy error: {e}", extra={"operation": operation},
            )
            raise DatabaseError("Database operation failed", operation)
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create any missing tables from the ORM metadata."""
        import librario.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for the readiness check)."""
        try:
            async with self.session("ping") as db:
                await db.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def missing_tables(self) -> list[str]:
        """Names of ORM tables not present in the connected database."""
        import librario.models  # noqa: F401

        try:
            async with self.engine.connect() as conn:
                existing = await conn.run_sync(
                    lambda sync_conn: set(inspect(sync_conn).get_table_names()),
                )
        except SQLAlchemyError as e:
            logger.error(f"Schema inspection failed: {e}")
            raise DatabaseError("Schema inspection failed", "inspect_schema")
        return sorted(set(Base.metadata.tables) - existing)

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the pooled session manager."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
