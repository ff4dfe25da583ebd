"""Database Pool: pooled connections with rollback and error mapping.

Invariants:
    - One DatabasePool per process, built in the app lifespan and stored on app.state
    - Every session rolls back on exception (no partial commits leak)
    - Every SQLAlchemy exception, checkout failures included, leaves as StorageError
    - Construction or verification failure raises PoolInitError (fatal at startup)

Design Decisions:
    - Sync Engine + QueuePool: calls are blocking and run inside WorkerPool threads
    - pool_pre_ping for stale connection detection
    - expire_on_commit=False: returned rows stay readable after the session closes
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from hanoi_scores.core.errors import PoolInitError, StorageError
from hanoi_scores.db.base import Base

logger = logging.getLogger(__name__)


class DatabasePool:
    """Owns the engine (connection pool) and hands out short-lived sessions."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(
            engine, class_=Session, expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: int = 30,
    ) -> "DatabasePool":
        """Build the pool. Raises PoolInitError on a bad URL or missing driver."""
        try:
            engine = create_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        except (ArgumentError, ImportError, TypeError) as e:
            raise PoolInitError("Failed to create pool", e) from e
        return cls(engine)

    def verify(self) -> None:
        """Check out one connection and run SELECT 1."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise PoolInitError("Database unreachable", e) from e

    def create_tables(self) -> None:
        """CREATE TABLE IF NOT EXISTS for every registered model."""
        import hanoi_scores.models  # noqa: F401

        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise PoolInitError("Failed to create tables", e) from e

    @contextmanager
    def session(self, operation: str = "query") -> Iterator[Session]:
        """Provide session with auto-rollback; map errors to StorageError."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(
                f"DB {operation} error: {e}",
                extra={"operation": operation},
            )
            raise StorageError(operation, e) from e
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


def init_db(
    database_url: str,
    pool_size: int = 10,
    max_overflow: int = 0,
    pool_timeout: int = 30,
    create_tables: bool = True,
) -> DatabasePool:
    """Build and verify the pool; optionally bootstrap the schema."""
    pool = DatabasePool.from_url(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
    )
    try:
        pool.verify()
        if create_tables:
            pool.create_tables()
    except PoolInitError:
        pool.dispose()
        raise
    logger.info(
        f"Database pool ready (size={pool_size}, overflow={max_overflow})",
    )
    return pool


async def get_database(request: Request) -> DatabasePool:
    """FastAPI dependency for the process-wide pool."""
    pool = getattr(request.app.state, "database", None)
    if pool is None:
        raise RuntimeError("Database not initialized")
    return pool
