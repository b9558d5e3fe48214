"""
app/domain package marker.
"""

from app.domain.errors import (
    BatchSizeError,
    EmptyBatchError,
    IngestionError,
    MalformedInputError,
    MeasurementValidationError,
    StorageFaultError,
    UserInputError,
)
from app.domain.measurement import (
    IngestionResult,
    RawRow,
    RowValidationError,
    SummaryStats,
    ValidatedMeasurement,
)

__all__ = [
    "BatchSizeError",
    "EmptyBatchError",
    "IngestionError",
    "IngestionResult",
    "MalformedInputError",
    "MeasurementValidationError",
    "RawRow",
    "RowValidationError",
    "StorageFaultError",
    "SummaryStats",
    "UserInputError",
    "ValidatedMeasurement",
]
