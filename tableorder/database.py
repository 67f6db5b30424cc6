"""
Database Connection Module
Wraps the SQLAlchemy async engine and session factory in a Database
object that the application factory builds and hands to request handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from tableorder.core.config import Settings

logger = logging.getLogger(__name__)


# Base class for all our models
class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE actions unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns one async engine and its session factory.

    Attributes:
        engine: SQLAlchemy AsyncEngine
        session_maker: async_sessionmaker producing AsyncSession objects
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ):
        engine_kwargs = {"echo": echo}
        is_sqlite = make_url(url).get_backend_name() == "sqlite"
        # SQLite (tests, local runs) does not take queue pool sizing
        if not is_sqlite:
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)

        self.engine = create_async_engine(url, **engine_kwargs)
        if is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_maker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Objects remain accessible after commit
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.db_echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session and make sure it is closed afterwards."""
        async with self.session_maker() as session:
            try:
                yield session
            finally:
                await session.close()

    async def create_all(self) -> None:
        """
        Create all tables in the database.
        Called once at application startup.
        """
        # Register the mapped classes on Base.metadata
        from tableorder import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def ping(self) -> None:
        """Round-trip a trivial statement; raises on failure."""
        async with self.session() as session:
            await session.execute(select(1))

    async def dispose(self) -> None:
        await self.engine.dispose()
