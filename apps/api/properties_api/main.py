"""FastAPI application for the property listings backend."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .core.config import Settings, get_settings
from .core.security import TokenRegistry
from .db.session import Database
from .errors import ApiError, DatabaseConnectionError
from .routers import properties as properties_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect to the database before serving and release it on shutdown."""

    database: Database = app.state.database
    settings: Settings = app.state.settings

    try:
        await database.connect()
    except DatabaseConnectionError as exc:
        logger.critical("Database connection error: %s", exc)
        raise SystemExit(1) from exc

    logger.info("Database connected successfully")
    if settings.database_create_schema:
        await database.create_all()

    try:
        yield
    finally:
        await database.dispose()


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Compose the application around an explicit database handle."""

    settings = settings or get_settings()
    _configure_logging(settings)

    app = FastAPI(title="Properties API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.token_registry = TokenRegistry.from_settings(settings)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ApiError, api_error_handler)

    @app.get(f"{settings.api_prefix}/health", tags=["meta"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.head(f"{settings.api_prefix}/health", tags=["meta"])
    async def health_head() -> Response:
        return Response(status_code=200)

    app.include_router(
        properties_router.router,
        prefix=f"{settings.api_prefix}/properties",
        tags=["properties"],
    )
    return app


app = create_app()
