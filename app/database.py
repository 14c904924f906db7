# python
"""Database engine and session utilities.

This module wraps the asynchronous SQLAlchemy engine and session factory in an
explicitly constructed :class:`Database` handle. The application creates one
at start-up and stores it on ``app.state``; request handlers receive sessions
through the :func:`get_db` dependency.
"""
import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.core.config import Settings
from models import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for one database URL."""

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int | None = None,
        max_overflow: int | None = None,
        connect_retries: int = 5,
        retry_max_wait: int = 10,
    ):
        url = (url or "").strip()
        if not url:
            raise RuntimeError(
                "DATABASE_URL is not configured. Set it in the environment or .env file "
                "(e.g., DATABASE_URL=postgresql+asyncpg://<user>:<pass>@<host>/<db>)."
            )

        engine_kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        if not url.startswith("sqlite") and pool_size is not None:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow or 0

        self.url = url
        self.connect_retries = connect_retries
        self.retry_max_wait = retry_max_wait
        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(bind=self.engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.effective_database_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            connect_retries=settings.db_connect_retries,
            retry_max_wait=settings.db_retry_max_wait,
        )

    async def connect(self) -> None:
        """Open a first connection, retrying with exponential backoff."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type((OperationalError, DBAPIError, OSError)),
            stop=stop_after_attempt(self.connect_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=self.retry_max_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await self._execute_ping()
        logger.info("Database connection established")

    async def ping(self) -> bool:
        try:
            await self._execute_ping()
            return True
        except (OperationalError, DBAPIError, OSError) as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def _execute_ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, Any]:
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
