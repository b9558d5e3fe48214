"""
app/api/routers/csv_ingestion.py

CSV ingestion HTTP endpoints.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_csv_upload
from app.domain.errors import (
    BatchSizeError,
    IngestionError,
    MalformedInputError,
    MeasurementValidationError,
)
from app.schemas.csv_ingestion import (
    CSVUploadErrorResponse,
    CSVUploadResponse,
    CSVValidationErrorResponse,
)
from app.services.csv_ingestion_service import CSVIngestionService, get_csv_ingestion_service
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/csv", tags=["ingestion"])


def _bad_request(*, error: str, exc: Exception, file_name: str) -> HTTPException:
    validation_errors: list[CSVValidationErrorResponse] = []
    if isinstance(exc, MeasurementValidationError):
        validation_errors = [
            CSVValidationErrorResponse(
                row_number=item.row_number,
                column=item.column,
                message=item.message,
                value=item.value,
            )
            for item in exc.errors
        ]

    body = CSVUploadErrorResponse(
        error=error,
        message=str(exc),
        file_name=file_name,
        validation_errors=validation_errors,
    )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=body.model_dump())


@router.post("/upload", response_model=CSVUploadResponse)
def upload_csv(
    file: UploadFile = Depends(get_csv_upload),
    db: Session = Depends(get_db),
    ingestion_service: CSVIngestionService = Depends(get_csv_ingestion_service),
) -> CSVUploadResponse:
    """
    Ingest one measurements CSV, replacing any previous upload of the same name.
    """

    file_name = file.filename or ""
    try:
        result = ingestion_service.ingest_csv(stream=file.file, file_name=file_name, db=db)
    except MalformedInputError as exc:
        logger.warning("Malformed CSV file=%r: %s", file_name, exc)
        raise _bad_request(error="Malformed file", exc=exc, file_name=file_name) from exc
    except MeasurementValidationError as exc:
        raise _bad_request(error="Validation error", exc=exc, file_name=file_name) from exc
    except BatchSizeError as exc:
        raise _bad_request(error="Validation error", exc=exc, file_name=file_name) from exc
    except IngestionError as exc:
        logger.error("Unexpected error processing CSV file=%r: %s", file_name, exc)
        body = CSVUploadErrorResponse(
            error="Internal server error",
            message="An unexpected error occurred while processing the file",
            file_name=file_name,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=body.model_dump(),
        ) from exc
    finally:
        file.file.close()

    return CSVUploadResponse(
        file_name=result.file_name,
        rows_processed=result.rows_processed,
        timestamp=datetime.now(tz=timezone.utc),
    )
