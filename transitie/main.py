"""FastAPI application instance and startup hooks."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from transitie.core import get_logger, get_settings
from transitie.db.engine import create_schema
from transitie.routers import calculations_router
from transitie.routers.dependencies import get_db_engine

LOGGER = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    LOGGER.info(
        "Statutory caps loaded for %s",
        ", ".join(str(year) for year in sorted(settings.cap_table)),
    )
    create_schema(get_db_engine())
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Transitievergoeding", version="0.1.0", lifespan=lifespan)
    app.include_router(calculations_router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()
