"""
app/validators/csv_validator.py

Row-level validation and type parsing for measurement CSV ingestion.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from app.domain.measurement import RawRow, RowValidationError, ValidatedMeasurement

UNSIGNED_DECIMAL_PATTERN = re.compile(r"^\d+(\.\d+)?$", re.ASCII)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class CSVRowValidator:
    """
    Validates candidate rows against the measurement rules.

    Every rule is checked for every row so one pass reports all problems:

    - ``Date`` must be strictly earlier than the clock's current time.
    - ``ExecutionTime`` and ``Value`` must be unsigned decimals
      (digits with an optional fractional part) and non-negative.
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        self._clock = clock or utc_now

    def validate_batch(
        self,
        rows: Iterable[RawRow],
    ) -> tuple[list[ValidatedMeasurement], list[RowValidationError]]:
        """
        Validate every row of a batch against one shared "now".

        Returns the converted measurements and the collected errors. When
        the error list is non-empty the measurements must be discarded.
        """

        now = self._clock()
        measurements: list[ValidatedMeasurement] = []
        errors: list[RowValidationError] = []

        for row in rows:
            measurement, row_errors = self.validate_row(row=row, now=now)
            if row_errors:
                errors.extend(row_errors)
                continue
            if measurement is not None:
                measurements.append(measurement)

        return measurements, errors

    def validate_row(
        self,
        *,
        row: RawRow,
        now: datetime,
    ) -> tuple[ValidatedMeasurement | None, list[RowValidationError]]:
        """
        Validate and convert one candidate row.
        """

        errors: list[RowValidationError] = []

        if row.date >= now:
            errors.append(
                RowValidationError(
                    row_number=row.row_number,
                    column="Date",
                    message="Date must be in the past.",
                    value=row.date.isoformat(),
                )
            )

        execution_time = self._parse_non_negative_decimal(
            value=row.execution_time_text,
            row_number=row.row_number,
            column="ExecutionTime",
            label="Execution time",
            errors=errors,
        )
        value = self._parse_non_negative_decimal(
            value=row.value_text,
            row_number=row.row_number,
            column="Value",
            label="Value",
            errors=errors,
        )

        if errors or execution_time is None or value is None:
            return None, errors

        return ValidatedMeasurement(date=row.date, execution_time=execution_time, value=value), []

    def _parse_non_negative_decimal(
        self,
        *,
        value: str,
        row_number: int,
        column: str,
        label: str,
        errors: list[RowValidationError],
    ) -> Decimal | None:
        raw = value.strip()
        if not raw:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message=f"{label} is required.",
                    value=value,
                )
            )
            return None

        if not UNSIGNED_DECIMAL_PATTERN.match(raw):
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message=f"{label} must be a valid number.",
                    value=value,
                )
            )
            return None

        try:
            parsed = Decimal(raw)
        except InvalidOperation:
            parsed = None

        if parsed is None or parsed < 0:
            errors.append(
                RowValidationError(
                    row_number=row_number,
                    column=column,
                    message=f"{label} must be non-negative.",
                    value=value,
                )
            )
            return None

        return parsed
