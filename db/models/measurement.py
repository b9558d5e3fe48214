"""
db/models/measurement.py

One stored row of an uploaded measurements file.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Measurement(Base):
    __tablename__ = "measurements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Name of the uploaded file the row belongs to",
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    execution_time: Mapped[Decimal] = mapped_column(
        Numeric(18, 6),
        nullable=False,
        comment="Execution time in seconds, non-negative",
    )
    value: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)

    __table_args__ = (
        Index("ix_measurements_file_name", "file_name"),
        Index("ix_measurements_date", "date"),
        Index("ix_measurements_file_name_date", "file_name", "date"),
    )
