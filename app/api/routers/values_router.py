"""
app/api/routers/values_router.py

Latest stored measurements of one file.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import DEFAULT_MAX_ROWS
from app.repositories.measurement_repository import MeasurementRepository
from app.schemas.results import MeasurementResponse
from db.session import get_db

router = APIRouter(prefix="/api/values", tags=["values"])


@router.get("/values", response_model=list[MeasurementResponse])
def get_values_by_file_name(
    file_name: str = Query(..., min_length=1, description="File name to filter values by"),
    count: int = Query(default=10, ge=1, le=DEFAULT_MAX_ROWS, description="Number of values to return"),
    sort_descending: bool = Query(default=True, description="Sort by date descending"),
    db: Session = Depends(get_db),
) -> list[MeasurementResponse]:
    """
    Return the latest stored measurements of one file.
    """

    rows = MeasurementRepository(db).get_last_values(
        file_name,
        descending=sort_descending,
        limit=count,
    )
    return [MeasurementResponse.model_validate(row) for row in rows]
