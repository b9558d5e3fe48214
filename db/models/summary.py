"""
db/models/summary.py

Aggregate statistics computed for one uploaded file.

Exactly one row exists per ``file_name``; it is deleted and recomputed
whenever the file is uploaded again.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class Summary(Base):
    __tablename__ = "summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    time_delta_seconds: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="max(date) - min(date) in whole seconds",
    )
    min_start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Earliest measurement date of the file",
    )
    avg_execution_time: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    avg_value: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    median_value: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    max_value: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    min_value: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)

    __table_args__ = (
        Index("ix_summaries_file_name", "file_name", unique=True),
        Index("ix_summaries_min_start_time", "min_start_time"),
        Index("ix_summaries_avg_value", "avg_value"),
        Index("ix_summaries_avg_execution_time", "avg_execution_time"),
    )
