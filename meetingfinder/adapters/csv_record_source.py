"""
Record source reading busy periods from a flat CSV calendar file.

Each line holds four fields::

    Alice,"Meeting, with Bob",08:00,09:30

attendee name, free-text label (double quotes allow embedded commas),
start and end as zero-padded ``HH:MM``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List

from ..domain.exceptions import InvalidConfigurationError, InvalidRecordError
from ..domain.models import BusyRecord, parse_time_of_day

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS = 4


def split_csv_line(line: str, delimiter: str = ",") -> List[str]:
    """
    Split one line on the delimiter, ignoring delimiters inside double quotes.

    Quote characters toggle the in-quotes state and are dropped from the
    output; there is no escaping beyond that.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def parse_record_line(line: str) -> BusyRecord | None:
    """
    Parse one CSV line into a busy record.

    Returns:
        The record, or None for a blank line.

    Raises:
        InvalidRecordError: If the line is malformed.
    """
    if not line.strip():
        return None

    fields = split_csv_line(line.rstrip("\r\n"))
    if len(fields) != EXPECTED_COLUMNS:
        raise InvalidRecordError(
            f"Expected {EXPECTED_COLUMNS} columns, got {len(fields)}"
        )

    attendee_name, label, start_text, end_text = fields

    try:
        start = parse_time_of_day(start_text)
        end = parse_time_of_day(end_text)
    except ValueError as exc:
        raise InvalidRecordError(str(exc)) from exc

    return BusyRecord(
        attendee_name=attendee_name,
        label=label,
        start=start,
        end=end,
    )


class CsvRecordSource:
    """
    Streams busy records from a CSV calendar file.

    The file is opened anew on every ``read_records`` call and consumed line
    by line, so nothing is held in memory between calls. Malformed lines are
    logged and skipped; they never abort the read.
    """

    def __init__(self, file_path: Path, encoding: str = "utf-8-sig"):
        """
        Initialize the source.

        Args:
            file_path: Path to the CSV calendar file
            encoding: Encoding used to decode each line; the default
                also drops a leading byte order mark

        Raises:
            InvalidConfigurationError: If the file does not exist
        """
        self.file_path = Path(file_path)
        self.encoding = encoding

        if not self.file_path.is_file():
            raise InvalidConfigurationError(f"Calendar file not found: {self.file_path}")

    def read_records(self) -> Iterator[BusyRecord]:
        """Yield every well-formed busy record in file order."""
        try:
            # Lines are decoded one by one so a bad byte only costs its own line
            with open(self.file_path, "rb") as file_handle:
                for line_number, raw_line in enumerate(file_handle, start=1):
                    try:
                        record = parse_record_line(self._decode(raw_line))
                    except InvalidRecordError as exc:
                        logger.warning(
                            "Skipping line %d of %s: %s",
                            line_number,
                            self.file_path,
                            exc,
                        )
                        continue

                    if record is not None:
                        yield record
        except OSError as exc:
            raise InvalidConfigurationError(
                f"Could not read calendar file {self.file_path}: {exc}"
            ) from exc

    def _decode(self, raw_line: bytes) -> str:
        try:
            return raw_line.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise InvalidRecordError(f"Undecodable bytes: {exc}") from exc

    def __repr__(self) -> str:
        return f"CsvRecordSource({str(self.file_path)!r})"
