"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.measurement import Measurement
from db.models.summary import Summary

__all__ = [
    "Measurement",
    "Summary",
]
