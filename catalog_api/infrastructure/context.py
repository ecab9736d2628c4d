"""Service context.

Owns the process-wide resources (engine, session factory, count cache)
and their start/close sequence. The application entry point creates one
context and hands it to request handlers.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalog_api.infrastructure.cache import CountCache
from catalog_api.infrastructure.config import Settings
from catalog_api.infrastructure.database import create_engine, create_session_factory

logger = structlog.get_logger()


@dataclass
class ServiceContext:
    """Shared dependencies of the catalog services.

    Attributes:
        settings: Application settings.
        engine: Async database engine.
        session_factory: Factory for per-request sessions.
        counts: Count cache shared by the catalog and category services.
    """

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    counts: CountCache

    @classmethod
    def create(cls, settings: Settings) -> "ServiceContext":
        """Build a context from settings without connecting.

        Args:
            settings: Application settings.

        Returns:
            New, not yet started context.
        """
        engine = create_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=create_session_factory(engine),
            counts=CountCache(sweep_interval=settings.count_cache_sweep_interval),
        )

    async def start(self) -> None:
        """Start background work (count cache sweep)."""
        await self.counts.start()
        logger.info("Service context started")

    async def close(self) -> None:
        """Stop background work and release database connections."""
        await self.counts.stop()
        await self.engine.dispose()
        logger.info("Service context closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session for one unit of work.

        Yields:
            AsyncSession, closed on exit.
        """
        async with self.session_factory() as session:
            yield session

    async def ping(self) -> bool:
        """Check database connectivity.

        Returns:
            True if a trivial query succeeds.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True
