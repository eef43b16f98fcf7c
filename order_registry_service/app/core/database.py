"""Database configuration for Order Registry Service"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..models.base import OrderRegistryBase

logger = logging.getLogger(__name__)


class OrderRegistryDatabaseManager:
    """Owns the single engine shared by every request for the process lifetime."""

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 40,
    ) -> None:
        engine_kwargs: Dict[str, Any] = {"echo": echo}

        if database_url.startswith("sqlite"):
            # SQLite configuration for development and tests
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                {
                    "pool_size": pool_size,
                    "max_overflow": max_overflow,
                }
            )

        self.database_url = database_url
        self.async_engine = create_async_engine(database_url, **engine_kwargs)
        self.async_session_maker = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_tables(self) -> None:
        """Create all Order Registry tables."""
        async with self.async_engine.begin() as conn:
            await conn.run_sync(OrderRegistryBase.metadata.create_all, checkfirst=True)

    async def connect(self) -> bool:
        """Open the store connection at startup.

        Failures are logged and reported through the return value only; the
        server keeps running without a reachable database.
        """
        try:
            await self.create_tables()
        except Exception as e:
            logger.error(
                "Database connection failed",
                exc_info=True,
                extra={
                    "database": self.async_engine.url.render_as_string(
                        hide_password=True
                    ),
                    "error_type": type(e).__name__,
                },
            )
            return False

        logger.info(
            "Database connection established",
            extra={
                "database": self.async_engine.url.render_as_string(hide_password=True)
            },
        )
        return True

    async def ping(self) -> bool:
        async with self.async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async database session."""
        async with self.async_session_maker() as session:
            yield session

    async def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        await self.async_engine.dispose()
