"""
app/schemas/results.py

Response schemas for the read-side endpoints.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class SummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    time_delta_seconds: int
    min_start_time: datetime
    avg_execution_time: Decimal
    avg_value: Decimal
    median_value: Decimal
    max_value: Decimal
    min_value: Decimal


class MeasurementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    date: datetime
    execution_time: Decimal
    value: Decimal
