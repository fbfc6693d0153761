"""Shared fixtures: in-memory database, engine with a fixed cap table, API client."""
from __future__ import annotations

import os

# No log files from test runs.
os.environ.setdefault("LOG_DIR", "")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from transitie.core.log import init_logging  # noqa: E402

init_logging(console=False, log_dir=None, queue=False)

from transitie.domain import CompensationEngine, StatutoryCapTable  # noqa: E402
from transitie.models import Base  # noqa: E402
from transitie.services import CalculationStore  # noqa: E402

CAPS = {2024: Decimal("94000"), 2025: Decimal("98000"), 2026: Decimal("102000")}


@pytest.fixture()
def cap_table() -> StatutoryCapTable:
    return StatutoryCapTable(CAPS)


@pytest.fixture()
def engine(cap_table: StatutoryCapTable) -> CompensationEngine:
    return CompensationEngine(cap_table)


@pytest.fixture()
def session() -> Session:
    """Provide an in-memory database session for each test."""

    db_engine = create_engine(
        "sqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(db_engine)
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
    with SessionLocal() as session:
        yield session
    db_engine.dispose()


@pytest.fixture()
def store(session: Session, engine: CompensationEngine) -> CalculationStore:
    return CalculationStore(session, engine)


@pytest.fixture()
def client(session: Session, engine: CompensationEngine):
    from transitie.main import app
    from transitie.routers.dependencies import get_compensation_engine, get_db_session

    def _override_get_db_session():
        yield session

    app.dependency_overrides[get_db_session] = _override_get_db_session
    app.dependency_overrides[get_compensation_engine] = lambda: engine
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
