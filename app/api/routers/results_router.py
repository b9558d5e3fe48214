"""
app/api/routers/results_router.py

Filtered lookups over per-file summaries.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.repositories.summary_repository import SummaryFilter, SummaryRepository
from app.schemas.results import SummaryResponse
from db.session import get_db

router = APIRouter(prefix="/api/results", tags=["results"])


@router.get("/results", response_model=list[SummaryResponse])
def get_filtered_results(
    file_name: str | None = Query(default=None, description="Filter by file name (substring)"),
    min_start_time: datetime | None = Query(default=None, description="Minimum start time"),
    max_start_time: datetime | None = Query(default=None, description="Maximum start time"),
    min_avg_value: Decimal | None = Query(default=None, description="Minimum average value"),
    max_avg_value: Decimal | None = Query(default=None, description="Maximum average value"),
    min_avg_execution_time: Decimal | None = Query(default=None, description="Minimum average execution time"),
    max_avg_execution_time: Decimal | None = Query(default=None, description="Maximum average execution time"),
    db: Session = Depends(get_db),
) -> list[SummaryResponse]:
    """
    Return summaries matching every provided filter.
    """

    filters = SummaryFilter(
        file_name=file_name,
        min_start_time=min_start_time,
        max_start_time=max_start_time,
        min_avg_value=min_avg_value,
        max_avg_value=max_avg_value,
        min_avg_execution_time=min_avg_execution_time,
        max_avg_execution_time=max_avg_execution_time,
    )
    summaries = SummaryRepository(db).get_filtered(filters)
    return [SummaryResponse.model_validate(summary) for summary in summaries]
