"""
tests/test_aggregation_service.py

Pytest unit tests for AggregationService.

All tests are pure Python with no database or I/O.

Coverage
--------
- Median for odd and even counts, unsorted input
- Averages, min/max and their ordering identities
- Time delta truncation to whole seconds
- Quantization to six fractional digits
- Empty batch rejection
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.errors import EmptyBatchError
from app.domain.measurement import ValidatedMeasurement
from app.services.aggregation_service import AggregationService, median

START = datetime(2025, 6, 1, 8, 0, 0, tzinfo=timezone.utc)


def _batch(values: list[str], *, step: timedelta = timedelta(minutes=1)) -> list[ValidatedMeasurement]:
    return [
        ValidatedMeasurement(
            date=START + step * index,
            execution_time=Decimal(index + 1),
            value=Decimal(raw),
        )
        for index, raw in enumerate(values)
    ]


@pytest.fixture()
def svc() -> AggregationService:
    return AggregationService()


# ---------------------------------------------------------------------------
# Median
# ---------------------------------------------------------------------------


class TestMedian:
    def test_odd_count_takes_middle_element(self) -> None:
        assert median([Decimal(10), Decimal(20), Decimal(30)]) == Decimal(20)

    def test_even_count_averages_two_middle_elements(self) -> None:
        assert median([Decimal(10), Decimal(20), Decimal(30), Decimal(40)]) == Decimal(25)

    def test_input_order_does_not_matter(self) -> None:
        assert median([Decimal(40), Decimal(10), Decimal(30), Decimal(20)]) == Decimal(25)

    def test_single_value(self) -> None:
        assert median([Decimal("3.5")]) == Decimal("3.5")

    def test_empty_raises(self) -> None:
        with pytest.raises(EmptyBatchError):
            median([])


# ---------------------------------------------------------------------------
# summarize
# ---------------------------------------------------------------------------


class TestSummarize:
    def test_basic_statistics(self, svc: AggregationService) -> None:
        stats = svc.summarize(_batch(["10", "20", "30"]))

        assert stats.min_start_time == START
        assert stats.time_delta_seconds == 120
        assert stats.avg_execution_time == Decimal("2")
        assert stats.avg_value == Decimal("20")
        assert stats.median_value == Decimal("20")
        assert stats.max_value == Decimal("30")
        assert stats.min_value == Decimal("10")

    def test_even_count_median(self, svc: AggregationService) -> None:
        stats = svc.summarize(_batch(["10", "20", "30", "40"]))

        assert stats.median_value == Decimal("25")

    def test_min_start_time_ignores_row_order(self, svc: AggregationService) -> None:
        rows = list(reversed(_batch(["1", "2", "3"])))

        stats = svc.summarize(rows)

        assert stats.min_start_time == START
        assert stats.time_delta_seconds == 120

    def test_time_delta_is_truncated_to_whole_seconds(self, svc: AggregationService) -> None:
        stats = svc.summarize(_batch(["1", "2"], step=timedelta(seconds=1, milliseconds=999)))

        assert stats.time_delta_seconds == 1

    def test_single_row_has_zero_delta(self, svc: AggregationService) -> None:
        stats = svc.summarize(_batch(["5"]))

        assert stats.time_delta_seconds == 0
        assert stats.min_value == stats.median_value == stats.max_value == stats.avg_value == Decimal("5")

    def test_averages_are_quantized_to_six_places(self, svc: AggregationService) -> None:
        stats = svc.summarize(_batch(["1", "2", "2"]))

        assert stats.avg_value == Decimal("1.666667")
        assert stats.avg_value.as_tuple().exponent == -6

    def test_identities_hold(self, svc: AggregationService) -> None:
        stats = svc.summarize(_batch(["0.5", "99.125", "3", "3", "17.75", "0"]))

        assert stats.min_value <= stats.avg_value <= stats.max_value
        assert stats.min_value <= stats.median_value <= stats.max_value
        assert stats.time_delta_seconds >= 0

    def test_repeated_runs_are_identical(self, svc: AggregationService) -> None:
        rows = _batch(["0.1", "0.2", "0.3"])

        assert svc.summarize(rows) == svc.summarize(rows)

    def test_empty_batch_raises(self, svc: AggregationService) -> None:
        with pytest.raises(EmptyBatchError):
            svc.summarize([])
