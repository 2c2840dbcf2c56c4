"""
Async SQLAlchemy engine and session factories.

Uses ``asyncpg`` as the PostgreSQL driver for non-blocking I/O.

Two factories share one pool:

* ``async_session_factory``    -- default isolation, used by the API.
* ``matching_session_factory`` -- bound to the matching isolation level
  (``SERIALIZABLE`` by default) so that two concurrent cycles cannot both
  commit an assignment to the same chair.
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from chair_dispatch.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_size=20,
    max_overflow=10,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

matching_session_factory = async_sessionmaker(
    engine.execution_options(isolation_level=settings.matching_isolation_level),
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""
