"""
app/validators package marker.
"""

from app.validators.csv_validator import CSVRowValidator

__all__ = [
    "CSVRowValidator",
]
