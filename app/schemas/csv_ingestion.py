"""
app/schemas/csv_ingestion.py

Response schemas for CSV ingestion endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CSVValidationErrorResponse(BaseModel):
    """
    API response model for one row-level validation error.
    """

    row_number: int = Field(..., ge=1)
    message: str
    column: str | None = None
    value: str | None = None


class CSVUploadResponse(BaseModel):
    """
    API response model for a successfully ingested file.
    """

    message: str = "CSV file processed successfully"
    file_name: str
    rows_processed: int = Field(..., ge=1)
    timestamp: datetime


class CSVUploadErrorResponse(BaseModel):
    """
    API error body for rejected uploads.
    """

    error: str
    message: str
    file_name: str | None = None
    validation_errors: list[CSVValidationErrorResponse] = Field(default_factory=list)
