"""Shared FastAPI dependency definitions."""
from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from transitie.core.config import get_settings
from transitie.db.engine import create_sync_engine
from transitie.domain import CompensationEngine, StatutoryCapTable
from transitie.services import Branding, CalculationStore, ReportExporter


@lru_cache(maxsize=1)
def get_db_engine() -> Engine:
    """Engine shared by all requests, created on first use."""

    return create_sync_engine()


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_db_engine(), autoflush=False, expire_on_commit=False)


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session suitable for request-scoped usage."""

    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@lru_cache(maxsize=1)
def get_compensation_engine() -> CompensationEngine:
    """Engine built from the cap table configured at process start."""

    return CompensationEngine(StatutoryCapTable(get_settings().cap_table))


def get_calculation_store(
    session: Session = Depends(get_db_session),
    engine: CompensationEngine = Depends(get_compensation_engine),
) -> CalculationStore:
    return CalculationStore(session, engine)


def get_report_exporter() -> ReportExporter | None:
    """Exporter used for report downloads; host applications override this."""

    return None


def get_branding() -> Branding:
    return Branding.from_settings(get_settings().report)
