"""
app/domain/errors.py

Error taxonomy for the CSV ingestion pipeline.

User-input errors (malformed file, failed row validation, batch size out of
bounds) are expected outcomes: they are reported to the caller as-is and
leave the store untouched. ``StorageFaultError`` wraps unexpected database
failures and is safe to retry because ingestion fully replaces a file.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.measurement import RowValidationError


class IngestionError(Exception):
    """Base exception for measurement ingestion failures."""


class UserInputError(IngestionError):
    """Raised when the uploaded file itself is unacceptable."""


class MalformedInputError(UserInputError):
    """
    Raised when the file is structurally broken: missing header, missing
    column, wrong column count, undecodable bytes or an unparseable date.
    """


class MeasurementValidationError(UserInputError):
    """
    Raised when one or more rows break a semantic rule.
    """

    def __init__(self, errors: Sequence[RowValidationError], *, total_errors: int | None = None) -> None:
        self.errors = tuple(errors)
        self.total_errors = len(self.errors) if total_errors is None else total_errors
        super().__init__(f"{self.total_errors} row validation error(s) found.")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": str(self),
            "errors": [
                {
                    "row_number": error.row_number,
                    "column": error.column,
                    "message": error.message,
                    "value": error.value,
                }
                for error in self.errors
            ],
        }


class BatchSizeError(UserInputError):
    """
    Raised when a file holds zero data rows or more than the configured cap.
    """

    def __init__(self, *, max_rows: int) -> None:
        self.max_rows = max_rows
        super().__init__(f"CSV file must contain between 1 and {max_rows} lines of data.")


class EmptyBatchError(IngestionError):
    """Raised when the aggregator is handed no rows at all."""


class StorageFaultError(IngestionError):
    """Raised when measurements cannot be written to the database."""
