"""Async Session Factory: DB sessions for scripts and test fixtures outside FastAPI.

Invariants:
    - Same engine options as DatabaseSessionManager minus pooling knobs
    - expire_on_commit=False, matching the request sessions
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
