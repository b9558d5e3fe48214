"""
app/domain/measurement.py

Domain records passed between the CSV ingestion stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol


@dataclass(frozen=True)
class RawRow:
    """
    One parsed CSV line before semantic validation.
    """

    row_number: int
    date: datetime
    execution_time_text: str
    value_text: str


@dataclass(frozen=True)
class ValidatedMeasurement:
    """
    Typed measurement that passed every row rule.
    """

    date: datetime
    execution_time: Decimal
    value: Decimal


class MeasurementLike(Protocol):
    """
    Anything the aggregator can summarize: validated rows or stored ORM rows.
    """

    date: datetime
    execution_time: Decimal
    value: Decimal


@dataclass(frozen=True)
class RowValidationError:
    """
    One CSV row validation error detail.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class SummaryStats:
    """
    Aggregate statistics for one batch of measurements.
    """

    time_delta_seconds: int
    min_start_time: datetime
    avg_execution_time: Decimal
    avg_value: Decimal
    median_value: Decimal
    max_value: Decimal
    min_value: Decimal


@dataclass(frozen=True)
class IngestionResult:
    """
    Outcome of one committed ingestion call.
    """

    file_name: str
    rows_processed: int
    summary: SummaryStats
