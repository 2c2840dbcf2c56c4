"""FastAPI dependency injection helpers."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chair_dispatch.infrastructure.database import (
    async_session_factory,
    matching_session_factory,
)


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_matching_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the matching isolation level."""
    return matching_session_factory
