from __future__ import annotations

import io
from collections.abc import Callable, Generator, Sequence
from datetime import datetime, timezone
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.services.csv_ingestion_service import CSVIngestionService
from db.base import Base
from db.models import Measurement, Summary  # noqa: F401 registers all ORM models on Base.metadata
from db.session import build_session_factory, create_db_engine

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
CSV_HEADER = "Date;ExecutionTime;Value"


@pytest.fixture()
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


@pytest.fixture()
def db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture()
def service(fixed_clock: Callable[[], datetime]) -> CSVIngestionService:
    return CSVIngestionService(
        max_rows=10,
        max_validation_errors=100,
        log_validation_errors=False,
        clock=fixed_clock,
    )


@pytest.fixture()
def make_csv() -> Callable[..., io.BytesIO]:
    """Build an in-memory CSV upload from ``(date, execution_time, value)`` rows."""

    def _make(rows: Sequence[Sequence[str]], header: str = CSV_HEADER) -> io.BytesIO:
        lines = [header, *(";".join(row) for row in rows)]
        return io.BytesIO(("\n".join(lines) + "\n").encode("utf-8"))

    return _make
