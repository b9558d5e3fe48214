"""
app/services package marker.
"""

from app.services.aggregation_service import AggregationService, median
from app.services.csv_ingestion_service import (
    CSVIngestionService,
    get_csv_ingestion_service,
)

__all__ = [
    "AggregationService",
    "CSVIngestionService",
    "get_csv_ingestion_service",
    "median",
]
