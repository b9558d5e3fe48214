"""
app/schemas package marker.
"""

from app.schemas.csv_ingestion import (
    CSVUploadErrorResponse,
    CSVUploadResponse,
    CSVValidationErrorResponse,
)
from app.schemas.results import MeasurementResponse, SummaryResponse

__all__ = [
    "CSVUploadErrorResponse",
    "CSVUploadResponse",
    "CSVValidationErrorResponse",
    "MeasurementResponse",
    "SummaryResponse",
]
