"""
app/mappers/csv_row_mapper.py

Maps raw measurement CSV bytes onto typed candidate rows.

The file layout is fixed: a header naming ``Date``, ``ExecutionTime`` and
``Value`` (any order), ``;`` as delimiter, and dates written as
``yyyy-MM-ddTHH:mm:ss.fffZ``. Structural problems raise
``MalformedInputError``; semantic checks belong to the row validator.
"""

from __future__ import annotations

import csv
import io
import re
from collections.abc import Iterator, Sequence
from datetime import datetime, timezone
from typing import BinaryIO

from app.domain.errors import MalformedInputError
from app.domain.measurement import RawRow

DATE_COLUMN = "Date"
EXECUTION_TIME_COLUMN = "ExecutionTime"
VALUE_COLUMN = "Value"

REQUIRED_COLUMNS: tuple[str, ...] = (DATE_COLUMN, EXECUTION_TIME_COLUMN, VALUE_COLUMN)

CSV_DELIMITER = ";"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
DATE_FORMAT_DISPLAY = "yyyy-MM-ddTHH:mm:ss.fffZ"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", re.ASCII)


class CSVRowMapper:
    """
    Lazily parses a measurement CSV stream into ``RawRow`` items.
    """

    def __init__(
        self,
        *,
        delimiter: str = CSV_DELIMITER,
        date_format: str = DATE_FORMAT,
        encoding: str = "utf-8-sig",
    ) -> None:
        self._delimiter = delimiter
        self._date_format = date_format
        self._encoding = encoding

    def parse_rows(self, stream: BinaryIO) -> Iterator[RawRow]:
        """
        Yield one ``RawRow`` per non-blank data line of *stream*.

        The generator is single-pass. The underlying binary stream is left
        open; only the text wrapper around it is detached when iteration
        ends or the generator is closed.
        """

        text_stream = io.TextIOWrapper(stream, encoding=self._encoding, newline="")
        try:
            reader = csv.reader(text_stream, delimiter=self._delimiter, strict=True)
            header = next(reader, None)
            if header is None or not any(cell.strip() for cell in header):
                raise MalformedInputError("CSV header row is missing.")

            positions = self._resolve_positions(header)
            width = len(header)

            for cells in reader:
                if not any(cell.strip() for cell in cells):
                    continue

                row_number = reader.line_num
                if len(cells) != width:
                    raise MalformedInputError(
                        f"Row {row_number} has {len(cells)} column(s); expected {width}."
                    )

                yield RawRow(
                    row_number=row_number,
                    date=self._parse_date(cells[positions[DATE_COLUMN]], row_number),
                    execution_time_text=cells[positions[EXECUTION_TIME_COLUMN]].strip(),
                    value_text=cells[positions[VALUE_COLUMN]].strip(),
                )
        except UnicodeDecodeError as exc:
            raise MalformedInputError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise MalformedInputError(f"Invalid CSV format: {exc}") from exc
        finally:
            try:
                text_stream.detach()
            except ValueError:
                pass

    def _resolve_positions(self, header: Sequence[str]) -> dict[str, int]:
        names = [cell.strip() for cell in header]

        duplicates = sorted({name for name in names if name and names.count(name) > 1})
        if duplicates:
            raise MalformedInputError(f"CSV header has duplicate columns: {', '.join(duplicates)}.")

        missing = [column for column in REQUIRED_COLUMNS if column not in names]
        if missing:
            raise MalformedInputError(
                f"CSV header is missing required column(s): {', '.join(missing)}. "
                f"Expected: {CSV_DELIMITER.join(REQUIRED_COLUMNS)}."
            )

        return {column: names.index(column) for column in REQUIRED_COLUMNS}

    def _parse_date(self, raw: str, row_number: int) -> datetime:
        text = raw.strip()
        message = f"Row {row_number}: Date {text!r} does not match {DATE_FORMAT_DISPLAY}."
        # %f alone accepts one to six fractional digits.
        if not DATE_PATTERN.match(text):
            raise MalformedInputError(message)
        try:
            parsed = datetime.strptime(text, self._date_format)
        except ValueError as exc:
            raise MalformedInputError(message) from exc
        return parsed.replace(tzinfo=timezone.utc)
