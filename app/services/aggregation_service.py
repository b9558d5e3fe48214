"""
app/services/aggregation_service.py

Summary statistics for one batch of measurements.

Computes the fixed set of aggregates stored per uploaded file:

    min_start_time       – earliest ``date`` in the batch
    time_delta_seconds   – max(date) - min(date), truncated to whole seconds
    avg_execution_time   – arithmetic mean of ``execution_time``
    avg_value            – arithmetic mean of ``value``
    median_value         – middle ``value`` (mean of the two middles when even)
    max_value/min_value  – extremes of ``value``

Numeric semantics
-----------------
All arithmetic is performed with :class:`decimal.Decimal` under a wide local
context, then quantized to six fractional digits (the NUMERIC(18, 6) column
scale) using banker's rounding. Re-ingesting identical data therefore always
yields byte-identical summaries.

The service is pure: it performs no I/O and holds no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from typing import Final

from app.domain.errors import EmptyBatchError
from app.domain.measurement import MeasurementLike, SummaryStats

logger = logging.getLogger(__name__)

SUMMARY_SCALE: Final[Decimal] = Decimal("0.000001")
"""Quantum matching the six fractional digits of the summary columns."""

_CONTEXT_PRECISION: Final[int] = 60
_ONE_SECOND: Final[timedelta] = timedelta(seconds=1)


def median(values: Sequence[Decimal]) -> Decimal:
    """
    Return the median of *values*.

    Odd count: the middle element of the ascending order.
    Even count: the mean of the two middle elements.

    Raises
    ------
    EmptyBatchError
        When *values* is empty.
    """
    if not values:
        raise EmptyBatchError("Cannot compute the median of an empty batch.")

    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(SUMMARY_SCALE, rounding=ROUND_HALF_EVEN)


class AggregationService:
    """
    Computes :class:`SummaryStats` for a non-empty measurement batch.

    Accepts validated in-memory measurements as well as stored
    ``Measurement`` ORM rows; both expose ``date``, ``execution_time`` and
    ``value``.
    """

    def summarize(self, rows: Sequence[MeasurementLike]) -> SummaryStats:
        """
        Compute the summary statistics for *rows*.

        Parameters
        ----------
        rows:
            Non-empty batch. Order does not matter.

        Returns
        -------
        SummaryStats
            Aggregates quantized to the summary column scale.

        Raises
        ------
        EmptyBatchError
            When *rows* is empty. Callers are expected to reject empty
            batches before aggregation, so this signals a broken invariant.
        """
        if not rows:
            raise EmptyBatchError("Cannot summarize an empty batch of measurements.")

        dates = [row.date for row in rows]
        values = [Decimal(row.value) for row in rows]
        execution_times = [Decimal(row.execution_time) for row in rows]
        count = Decimal(len(rows))

        min_start_time = min(dates)
        time_delta_seconds = (max(dates) - min_start_time) // _ONE_SECOND

        with localcontext() as ctx:
            ctx.prec = _CONTEXT_PRECISION
            stats = SummaryStats(
                time_delta_seconds=time_delta_seconds,
                min_start_time=min_start_time,
                avg_execution_time=_quantize(sum(execution_times, Decimal(0)) / count),
                avg_value=_quantize(sum(values, Decimal(0)) / count),
                median_value=_quantize(median(values)),
                max_value=_quantize(max(values)),
                min_value=_quantize(min(values)),
            )

        logger.debug(
            "summarize rows=%d delta=%ss avg_value=%s median=%s",
            len(rows),
            stats.time_delta_seconds,
            stats.avg_value,
            stats.median_value,
        )
        return stats
