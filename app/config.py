"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

DEFAULT_MAX_ROWS = 10_000
DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class AppSettings:
    """
    Top-level API process settings.
    """

    title: str = "Measurements API"
    log_level: str = "INFO"


@dataclass(frozen=True)
class CSVIngestionSettings:
    """
    Runtime settings for CSV ingestion.
    """

    max_rows: int = DEFAULT_MAX_ROWS
    max_validation_errors: int = 500
    log_validation_errors: bool = True


@dataclass(frozen=True)
class UploadSettings:
    """
    Gatekeeping limits applied to uploaded files before ingestion.
    """

    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached API process settings.
    """

    return AppSettings(
        title=_get_str_env("APP_TITLE", "Measurements API"),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_csv_ingestion_settings() -> CSVIngestionSettings:
    """
    Return cached CSV ingestion settings from environment variables.
    """

    return CSVIngestionSettings(
        max_rows=max(1, _get_int_env("CSV_INGEST_MAX_ROWS", DEFAULT_MAX_ROWS)),
        max_validation_errors=max(1, _get_int_env("CSV_INGEST_MAX_VALIDATION_ERRORS", 500)),
        log_validation_errors=_get_bool_env("CSV_INGEST_LOG_VALIDATION_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload gatekeeping settings.
    """

    return UploadSettings(
        max_bytes=max(1, _get_int_env("CSV_UPLOAD_MAX_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
    )
