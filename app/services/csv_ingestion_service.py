"""
app/services/csv_ingestion_service.py

Service layer for measurement CSV ingestion.

One call runs the whole pipeline as a single unit of work:

    1. parse: CSVRowMapper turns bytes into candidate rows
    2. validate: CSVRowValidator checks every row; any failure rejects all
    3. bound: the batch must hold between 1 and ``max_rows`` rows
    4. replace: prior measurements and summary for the file are deleted
    5. persist: new measurements are inserted
    6. aggregate: AggregationService summarizes the inserted rows
    7. commit

Steps 1-3 never touch the database. Steps 4-7 run inside
``MeasurementRepository.transaction()`` so readers see either the previous
state of the file or the complete new one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import closing
from functools import lru_cache
from itertools import islice
from typing import BinaryIO

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_csv_ingestion_settings
from app.domain.errors import BatchSizeError, MeasurementValidationError, StorageFaultError
from app.domain.measurement import IngestionResult, RowValidationError
from app.mappers.csv_row_mapper import CSVRowMapper
from app.repositories.measurement_repository import MeasurementRepository
from app.services.aggregation_service import AggregationService
from app.validators.csv_validator import Clock, CSVRowValidator

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[Session], MeasurementRepository]


class CSVIngestionService:
    """
    Coordinates CSV parsing, validation, replacement and aggregation.
    """

    def __init__(
        self,
        *,
        max_rows: int,
        max_validation_errors: int,
        log_validation_errors: bool,
        mapper: CSVRowMapper | None = None,
        validator: CSVRowValidator | None = None,
        aggregator: AggregationService | None = None,
        repository_factory: RepositoryFactory = MeasurementRepository,
        clock: Clock | None = None,
    ) -> None:
        self._max_rows = max(1, max_rows)
        self._max_validation_errors = max(1, max_validation_errors)
        self._log_validation_errors = log_validation_errors
        self._mapper = mapper or CSVRowMapper()
        self._validator = validator or CSVRowValidator(clock=clock)
        self._aggregator = aggregator or AggregationService()
        self._repository_factory = repository_factory

    @property
    def max_rows(self) -> int:
        return self._max_rows

    def ingest_csv(
        self,
        *,
        stream: BinaryIO,
        file_name: str,
        db: Session,
    ) -> IngestionResult:
        """
        Replace everything stored for ``file_name`` with the rows in ``stream``.

        Args:
            stream:     Binary CSV content, positioned at its start.
            file_name:  Partition key; a previous upload under the same name
                        is fully replaced.
            db:         Active SQLAlchemy session (caller owns lifecycle).

        Raises:
            MalformedInputError:         structurally broken file.
            MeasurementValidationError:  one or more rows failed validation.
            BatchSizeError:              zero rows or more than ``max_rows``.
            StorageFaultError:           the database write failed; nothing
                                         was changed and the call may be retried.
        """

        logger.debug("Parsing CSV file=%r", file_name)
        # One row past the cap is enough to tell the batch is oversized.
        with closing(self._mapper.parse_rows(stream)) as rows:
            candidates = list(islice(rows, self._max_rows + 1))

        logger.debug("Validating CSV file=%r rows=%d", file_name, len(candidates))
        measurements, errors = self._validator.validate_batch(candidates)
        if errors:
            self._reject_invalid_rows(file_name, errors)

        if not measurements or len(measurements) > self._max_rows:
            logger.warning(
                "CSV batch size rejected file=%r rows=%d max_rows=%d",
                file_name,
                len(measurements),
                self._max_rows,
            )
            raise BatchSizeError(max_rows=self._max_rows)

        repository = self._repository_factory(db)
        try:
            with repository.transaction():
                deleted = repository.delete_by_file_name(file_name)
                stored = repository.insert_rows(file_name, measurements)
                stats = self._aggregator.summarize(stored)
                repository.insert_summary(file_name, stats)
        except SQLAlchemyError as exc:
            logger.exception("Failed to persist measurements file=%r; rolled back", file_name)
            raise StorageFaultError("Failed to persist measurements.") from exc

        logger.info(
            "CSV ingested file=%r rows=%d replaced_rows=%d time_delta=%ss",
            file_name,
            len(stored),
            deleted,
            stats.time_delta_seconds,
        )
        return IngestionResult(file_name=file_name, rows_processed=len(stored), summary=stats)

    def _reject_invalid_rows(self, file_name: str, errors: list[RowValidationError]) -> None:
        reported = errors[: self._max_validation_errors]
        if self._log_validation_errors:
            for error in reported:
                logger.warning(
                    "CSV validation error file=%r row=%s column=%s message=%s value=%r",
                    file_name,
                    error.row_number,
                    error.column,
                    error.message,
                    error.value,
                )
        raise MeasurementValidationError(reported, total_errors=len(errors))


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_csv_ingestion_service() -> CSVIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """
    settings = get_csv_ingestion_settings()
    return CSVIngestionService(
        max_rows=settings.max_rows,
        max_validation_errors=settings.max_validation_errors,
        log_validation_errors=settings.log_validation_errors,
    )
