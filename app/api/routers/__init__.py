"""
app/api/routers package marker.
"""

from app.api.routers.csv_ingestion import router as csv_ingestion_router
from app.api.routers.results_router import router as results_router
from app.api.routers.values_router import router as values_router

__all__ = [
    "csv_ingestion_router",
    "results_router",
    "values_router",
]
