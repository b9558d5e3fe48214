"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

import os

from fastapi import Depends, File, HTTPException, UploadFile, status

from app.config import UploadSettings, get_upload_settings

CSV_EXTENSIONS = {".csv"}
CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
}


def _upload_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size

    position = file.file.tell()
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(position)
    return size


def get_csv_upload(
    file: UploadFile | None = File(default=None),
    settings: UploadSettings = Depends(get_upload_settings),
) -> UploadFile:
    """
    Reject uploads that are missing, empty, too large, or not CSV.

    Both the ``.csv`` extension and a CSV content type are required.
    """

    if file is None or _upload_size(file) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "No file uploaded or file is empty."},
        )

    if _upload_size(file) > settings.max_bytes:
        max_mib = settings.max_bytes // (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": f"File size exceeds the maximum limit of {max_mib} MB."},
        )

    _, extension = os.path.splitext((file.filename or "").strip().lower())
    content_type = (file.content_type or "").split(";", 1)[0].strip().lower()
    if extension not in CSV_EXTENSIONS or content_type not in CSV_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid file type. Only CSV files are allowed."},
        )

    return file
