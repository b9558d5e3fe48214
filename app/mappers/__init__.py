"""
app/mappers package marker.
"""

from app.mappers.csv_row_mapper import REQUIRED_COLUMNS, CSVRowMapper

__all__ = [
    "CSVRowMapper",
    "REQUIRED_COLUMNS",
]
