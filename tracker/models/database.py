"""Async database engine and session management."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from tracker.config import Settings
from tracker.models.tables import Base


class Database:
    """
    Owns the engine and its pool for the lifetime of the app.

    Created in the FastAPI lifespan and kept on ``app.state.db``; nothing
    opens a connection at import time, so tests can build one per test.
    """

    def __init__(self, settings: Settings):
        engine_kwargs = {"pool_pre_ping": True, "echo": settings.debug}
        if not settings.database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
            )
        self.engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)
        self._session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """One session per unit of work; rolled back on error, always closed."""
        async with self._session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency, yields an async session from the app's Database."""
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session
