"""
Ingest a local measurements CSV from the command line.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from app.config import get_app_settings
from app.domain.errors import IngestionError, MeasurementValidationError, UserInputError
from app.services.csv_ingestion_service import get_csv_ingestion_service
from db.session import SessionLocal


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest a measurements CSV file.")
    parser.add_argument("path", type=Path, help="Path to the CSV file.")
    parser.add_argument(
        "--file-name",
        dest="file_name",
        default=None,
        help="Name to store the rows under (defaults to the file's base name).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, get_app_settings().log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    file_name = args.file_name or args.path.name
    service = get_csv_ingestion_service()

    try:
        with args.path.open("rb") as stream, SessionLocal() as db:
            result = service.ingest_csv(stream=stream, file_name=file_name, db=db)
    except UserInputError as exc:
        payload: dict[str, object] = {"file_name": file_name, "status": "rejected", "reason": str(exc)}
        if isinstance(exc, MeasurementValidationError):
            payload["errors"] = exc.to_dict()["errors"]
        print(json.dumps(payload, indent=2))
        return 2
    except IngestionError as exc:
        print(json.dumps({"file_name": file_name, "status": "failed", "reason": str(exc)}, indent=2))
        return 1

    summary = result.summary
    print(
        json.dumps(
            {
                "file_name": result.file_name,
                "status": "ingested",
                "rows_processed": result.rows_processed,
                "time_delta_seconds": summary.time_delta_seconds,
                "min_start_time": summary.min_start_time.isoformat(),
                "avg_execution_time": str(summary.avg_execution_time),
                "avg_value": str(summary.avg_value),
                "median_value": str(summary.median_value),
                "max_value": str(summary.max_value),
                "min_value": str(summary.min_value),
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
