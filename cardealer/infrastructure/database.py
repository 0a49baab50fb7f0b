"""Unit-of-Work Sessions: one AsyncSession per request for the dealership store.

Invariants:
    - A session that sees an exception is rolled back before the exception leaves
    - Driver failures leave this module as CarDealerError subclasses:
      IntegrityError -> ConflictError (409), anything else from SQLAlchemy -> DatabaseError (500)
    - Domain errors raised by services pass through untouched
    - The engine pings pooled connections before handing them out

Design Decisions:
    - db_manager is created by the FastAPI lifespan (init_db), so importing the
      package never opens a connection
    - expire_on_commit=False: services serialize rows after they commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from cardealer.core.errors import CarDealerError, ConflictError, DatabaseError

logger = logging.getLogger(__name__)


def translate_db_error(exc: SQLAlchemyError) -> CarDealerError:
    """Map a SQLAlchemy failure onto the car dealer error taxonomy."""
    if isinstance(exc, IntegrityError):
        # Unique VIN/name/phone/address/username or favorites PK lost a race
        logger.warning(f"Constraint violated: {exc.orig}")
        return ConflictError("Integrity constraint violated")
    if isinstance(exc, OperationalError):
        logger.error(f"Store unreachable: {exc}")
        return DatabaseError("Connection or operational error", "execute")
    if isinstance(exc, DBAPIError):
        logger.error(f"Driver rejected statement: {exc}")
        return DatabaseError("Database driver error", "query")
    logger.error(f"ORM failure: {exc}")
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
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
        except CarDealerError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            raise translate_db_error(e) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips; used by /health/ready."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Readiness check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: a session bound to the current request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
