"""
app/repositories/measurement_repository.py

Persistence layer for uploaded measurements and their summary row.

Write methods never commit on their own; ``transaction()`` is the only
place that commits or rolls back.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.domain.measurement import SummaryStats, ValidatedMeasurement
from db.models.measurement import Measurement
from db.models.summary import Summary


class MeasurementRepository:
    """
    Storage port used by the ingestion pipeline.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Scope one unit of work: commit when the block completes, roll back
        on every other exit path (errors, cancellation, interpreter exit).
        """

        try:
            yield self._session
            self._session.commit()
        except BaseException:
            self._session.rollback()
            raise

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def delete_by_file_name(self, file_name: str) -> int:
        """
        Remove the summary and every measurement stored for *file_name*.

        Returns the number of measurement rows deleted.
        """

        self._session.execute(delete(Summary).where(Summary.file_name == file_name))
        result = self._session.execute(delete(Measurement).where(Measurement.file_name == file_name))
        return result.rowcount or 0

    def insert_rows(
        self,
        file_name: str,
        measurements: Sequence[ValidatedMeasurement],
    ) -> list[Measurement]:
        """
        Add *measurements* under *file_name* and flush them in one batch.
        """

        rows = [
            Measurement(
                file_name=file_name,
                date=measurement.date,
                execution_time=measurement.execution_time,
                value=measurement.value,
            )
            for measurement in measurements
        ]
        self._session.add_all(rows)
        self._session.flush()
        return rows

    def insert_summary(self, file_name: str, stats: SummaryStats) -> Summary:
        summary = Summary(
            file_name=file_name,
            time_delta_seconds=stats.time_delta_seconds,
            min_start_time=stats.min_start_time,
            avg_execution_time=stats.avg_execution_time,
            avg_value=stats.avg_value,
            median_value=stats.median_value,
            max_value=stats.max_value,
            min_value=stats.min_value,
        )
        self._session.add(summary)
        self._session.flush()
        return summary

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_last_values(
        self,
        file_name: str,
        *,
        descending: bool = True,
        limit: int = 10,
    ) -> list[Measurement]:
        """
        Return up to *limit* measurements of *file_name* ordered by date.
        """

        order = Measurement.date.desc() if descending else Measurement.date.asc()
        stmt = (
            select(Measurement)
            .where(Measurement.file_name == file_name)
            .order_by(order, Measurement.id)
            .limit(max(1, limit))
        )
        return list(self._session.scalars(stmt).all())
