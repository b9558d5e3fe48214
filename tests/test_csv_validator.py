from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from app.domain.measurement import RawRow
from app.validators.csv_validator import CSVRowValidator

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
PAST = NOW - timedelta(days=1)


def _row(row_number: int, execution_time: str = "1.5", value: str = "10", date: datetime = PAST) -> RawRow:
    return RawRow(row_number=row_number, date=date, execution_time_text=execution_time, value_text=value)


class TestCSVRowValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = CSVRowValidator(clock=lambda: NOW)

    def test_valid_rows_are_converted_to_decimals(self) -> None:
        measurements, errors = self.validator.validate_batch([_row(2, "0.25", "7"), _row(3, "3", "0")])

        self.assertEqual(errors, [])
        self.assertEqual(len(measurements), 2)
        self.assertEqual(measurements[0].execution_time, Decimal("0.25"))
        self.assertEqual(measurements[0].value, Decimal("7"))
        self.assertEqual(measurements[1].value, Decimal("0"))
        self.assertEqual(measurements[0].date, PAST)

    def test_negative_execution_time_is_rejected(self) -> None:
        measurements, errors = self.validator.validate_batch([_row(2, execution_time="-5")])

        self.assertEqual(measurements, [])
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].column, "ExecutionTime")
        self.assertEqual(errors[0].value, "-5")

    def test_non_numeric_value_is_rejected(self) -> None:
        _, errors = self.validator.validate_batch([_row(2, value="abc")])

        self.assertEqual([(e.row_number, e.column) for e in errors], [(2, "Value")])
        self.assertIn("valid number", errors[0].message)

    def test_exponent_and_signed_forms_are_rejected(self) -> None:
        _, errors = self.validator.validate_batch(
            [_row(2, value="1e3"), _row(3, value="+4"), _row(4, value="5."), _row(5, value=".5")]
        )

        self.assertEqual([e.row_number for e in errors], [2, 3, 4, 5])

    def test_missing_value_is_reported_as_required(self) -> None:
        _, errors = self.validator.validate_batch([_row(2, value="")])

        self.assertEqual(errors[0].message, "Value is required.")

    def test_future_date_is_rejected(self) -> None:
        _, errors = self.validator.validate_batch([_row(2, date=NOW + timedelta(hours=1))])

        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].column, "Date")
        self.assertEqual(errors[0].message, "Date must be in the past.")

    def test_date_equal_to_now_is_rejected(self) -> None:
        _, errors = self.validator.validate_batch([_row(2, date=NOW)])

        self.assertEqual(len(errors), 1)

    def test_all_failures_are_collected(self) -> None:
        rows = [
            _row(2),
            _row(3, execution_time="-1", value="x", date=NOW + timedelta(minutes=5)),
            _row(4),
            _row(5, value="-2"),
        ]

        measurements, errors = self.validator.validate_batch(rows)

        self.assertEqual(len(measurements), 2)
        self.assertEqual(
            [(e.row_number, e.column) for e in errors],
            [(3, "Date"), (3, "ExecutionTime"), (3, "Value"), (5, "Value")],
        )

    def test_clock_is_read_once_per_batch(self) -> None:
        calls: list[int] = []

        def clock() -> datetime:
            calls.append(1)
            return NOW

        CSVRowValidator(clock=clock).validate_batch([_row(2), _row(3), _row(4)])

        self.assertEqual(len(calls), 1)


if __name__ == "__main__":
    unittest.main()
