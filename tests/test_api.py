"""
tests/test_api.py

HTTP-level tests for the upload and read endpoints.

The app is built with create_app() and its database, service and upload
settings dependencies are overridden; the lifespan checks are not run.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.config import UploadSettings, get_upload_settings
from app.main import create_app
from app.services.csv_ingestion_service import get_csv_ingestion_service
from db.session import get_db

CSV_OK = (
    "Date;ExecutionTime;Value\n"
    "2025-01-01T10:00:00.000Z;1;10\n"
    "2025-01-01T10:00:30.500Z;2;20\n"
    "2025-01-01T10:01:00.000Z;3;30\n"
).encode("utf-8")


@pytest.fixture()
def client(service, session_factory):
    application = create_app()

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_csv_ingestion_service] = lambda: service
    application.dependency_overrides[get_upload_settings] = lambda: UploadSettings(max_bytes=4096)
    return TestClient(application)


def _upload(client: TestClient, content: bytes, name: str = "data.csv", content_type: str = "text/csv"):
    return client.post("/api/csv/upload", files={"file": (name, content, content_type)})


def test_health(client: TestClient) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


class TestUpload:
    def test_success(self, client: TestClient) -> None:
        resp = _upload(client, CSV_OK)

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "CSV file processed successfully"
        assert body["file_name"] == "data.csv"
        assert body["rows_processed"] == 3
        assert "timestamp" in body

    def test_content_type_parameters_are_ignored(self, client: TestClient) -> None:
        resp = _upload(client, CSV_OK, content_type="text/csv; charset=utf-8")

        assert resp.status_code == 200

    def test_missing_file(self, client: TestClient) -> None:
        resp = client.post("/api/csv/upload")

        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "No file uploaded or file is empty."

    def test_empty_file(self, client: TestClient) -> None:
        resp = _upload(client, b"")

        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "No file uploaded or file is empty."

    def test_file_too_large(self, client: TestClient) -> None:
        resp = _upload(client, CSV_OK + b"2025-01-01T10:00:00.000Z;1;10\n" * 200)

        assert resp.status_code == 400
        assert resp.json()["detail"]["error"].startswith("File size exceeds the maximum limit")

    @pytest.mark.parametrize(
        ("name", "content_type"),
        [("data.txt", "text/csv"), ("data.csv", "text/plain"), ("data", "application/csv")],
    )
    def test_wrong_file_type(self, client: TestClient, name: str, content_type: str) -> None:
        resp = _upload(client, CSV_OK, name=name, content_type=content_type)

        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "Invalid file type. Only CSV files are allowed."

    def test_validation_error_lists_rows(self, client: TestClient) -> None:
        content = b"Date;ExecutionTime;Value\n2025-01-01T10:00:00.000Z;-1;10\n2025-01-01T10:00:01.000Z;1;abc\n"

        resp = _upload(client, content)

        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["error"] == "Validation error"
        assert detail["file_name"] == "data.csv"
        assert [(e["row_number"], e["column"]) for e in detail["validation_errors"]] == [
            (2, "ExecutionTime"),
            (3, "Value"),
        ]

    def test_header_only_is_a_validation_error(self, client: TestClient) -> None:
        resp = _upload(client, b"Date;ExecutionTime;Value\n")

        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "Validation error"

    def test_malformed_file(self, client: TestClient) -> None:
        resp = _upload(client, b"Date;Value\n2025-01-01T10:00:00.000Z;1\n")

        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["error"] == "Malformed file"
        assert "ExecutionTime" in detail["message"]


class TestReads:
    def test_results_after_upload(self, client: TestClient) -> None:
        assert _upload(client, CSV_OK).status_code == 200
        assert _upload(client, CSV_OK, name="other.csv").status_code == 200

        resp = client.get("/api/results/results", params={"file_name": "data"})

        assert resp.status_code == 200
        rows = resp.json()
        assert [row["file_name"] for row in rows] == ["data.csv"]
        row = rows[0]
        assert row["time_delta_seconds"] == 60
        assert Decimal(row["avg_value"]) == Decimal("20")
        assert Decimal(row["median_value"]) == Decimal("20")
        assert Decimal(row["avg_execution_time"]) == Decimal("2")

    def test_results_value_bounds(self, client: TestClient) -> None:
        _upload(client, CSV_OK)

        assert client.get("/api/results/results", params={"min_avg_value": "20.5"}).json() == []
        assert len(client.get("/api/results/results", params={"max_avg_value": "20"}).json()) == 1

    def test_values_latest_first(self, client: TestClient) -> None:
        _upload(client, CSV_OK)

        resp = client.get("/api/values/values", params={"file_name": "data.csv", "count": 2})

        assert resp.status_code == 200
        assert [Decimal(row["value"]) for row in resp.json()] == [Decimal(30), Decimal(20)]

    def test_values_ascending(self, client: TestClient) -> None:
        _upload(client, CSV_OK)

        resp = client.get(
            "/api/values/values",
            params={"file_name": "data.csv", "count": 5, "sort_descending": "false"},
        )

        assert [Decimal(row["value"]) for row in resp.json()] == [Decimal(10), Decimal(20), Decimal(30)]

    @pytest.mark.parametrize("params", [{}, {"file_name": "data.csv", "count": 0}])
    def test_values_query_validation(self, client: TestClient, params: dict) -> None:
        resp = client.get("/api/values/values", params=params)

        assert resp.status_code == 422
