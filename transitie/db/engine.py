"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from transitie.core.config import get_settings
from transitie.core.log import get_logger
from transitie.models import Base

LOGGER = get_logger(__name__)


def create_sync_engine(url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)
    if resolved_url.startswith("sqlite"):
        # Request handlers may run in a worker thread other than the creator.
        options.setdefault("connect_args", {"check_same_thread": False})

    LOGGER.debug(
        "Creating SQLAlchemy engine for %s",
        settings.database.masked_url if url is None else "explicit URL",
    )
    return create_engine(resolved_url, future=True, **options)


def create_schema(engine: Engine) -> None:
    """Create missing tables for all registered models."""

    Base.metadata.create_all(engine)
    LOGGER.info("Database schema ready (%d tables)", len(Base.metadata.tables))
