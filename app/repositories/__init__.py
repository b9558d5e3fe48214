"""
app/repositories package marker.
"""

from app.repositories.measurement_repository import MeasurementRepository
from app.repositories.summary_repository import SummaryFilter, SummaryRepository

__all__ = [
    "MeasurementRepository",
    "SummaryFilter",
    "SummaryRepository",
]
