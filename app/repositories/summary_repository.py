"""
app/repositories/summary_repository.py

Read-side queries over per-file summaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.summary import Summary


@dataclass(frozen=True)
class SummaryFilter:
    """
    Optional predicates for summary lookups. Bounds are inclusive.
    """

    file_name: str | None = None
    min_start_time: datetime | None = None
    max_start_time: datetime | None = None
    min_avg_value: Decimal | None = None
    max_avg_value: Decimal | None = None
    min_avg_execution_time: Decimal | None = None
    max_avg_execution_time: Decimal | None = None


class SummaryRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_filtered(self, filters: SummaryFilter | None = None) -> list[Summary]:
        """
        Return summaries matching every provided predicate, ordered by id.

        ``file_name`` matches as a substring; the remaining fields are
        inclusive lower/upper bounds.
        """

        filters = filters or SummaryFilter()
        stmt = select(Summary)

        if filters.file_name:
            stmt = stmt.where(Summary.file_name.contains(filters.file_name, autoescape=True))
        if filters.min_start_time is not None:
            stmt = stmt.where(Summary.min_start_time >= filters.min_start_time)
        if filters.max_start_time is not None:
            stmt = stmt.where(Summary.min_start_time <= filters.max_start_time)
        if filters.min_avg_value is not None:
            stmt = stmt.where(Summary.avg_value >= filters.min_avg_value)
        if filters.max_avg_value is not None:
            stmt = stmt.where(Summary.avg_value <= filters.max_avg_value)
        if filters.min_avg_execution_time is not None:
            stmt = stmt.where(Summary.avg_execution_time >= filters.min_avg_execution_time)
        if filters.max_avg_execution_time is not None:
            stmt = stmt.where(Summary.avg_execution_time <= filters.max_avg_execution_time)

        return list(self._session.scalars(stmt.order_by(Summary.id)).all())
