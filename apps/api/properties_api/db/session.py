"""Database engine and session management."""
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..core.config import Settings
from ..errors import DatabaseConnectionError
from ..models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        ssl_required: bool = False,
        engine_options: dict[str, Any] | None = None,
    ) -> None:
        connect_args: dict[str, object] = {}
        if ssl_required:
            connect_args["ssl"] = True

        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            connect_args=connect_args,
            **(engine_options or {}),
        )
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.database_echo,
            ssl_required=settings.database_ssl_required,
        )

    async def connect(self) -> None:
        """Open a connection and run a trivial query to prove the database is reachable."""

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            raise DatabaseConnectionError(str(exc)) from exc

    async def create_all(self) -> None:
        """Create the database schema if it does not already exist."""

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection pool closed")


def get_database(request: Request) -> Database:
    """Return the database handle attached to the running application."""

    return request.app.state.database


async def get_session(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency to provide an async session."""

    async with database.session_factory() as session:
        yield session
