"""
Application services for finding shared meeting windows.

The scheduler is a thin facade over the domain-level ``AvailabilityFinder``:
it normalises the requested duration and hands back plain ``(start, end)``
tuples so callers never deal with domain types. ``build_scheduler`` wires
the record sources and engine from an ``AppConfig``.
"""

from __future__ import annotations

import logging
from datetime import time, timedelta
from typing import Dict, Iterable, List, Tuple

import pendulum

from ..adapters.caching_record_source import CachingRecordSource
from ..adapters.csv_record_source import CsvRecordSource
from ..config import AppConfig
from ..domain.availability import AvailabilityFinder, RecordSourceProtocol
from ..domain.exceptions import InvalidDurationError
from ..domain.models import TimeWindow

logger = logging.getLogger(__name__)


def to_duration(value: timedelta | int) -> timedelta:
    """
    Normalise a meeting duration.

    Integers are taken as minutes; timedeltas (including pendulum durations)
    pass through unchanged.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDurationError(f"Unsupported duration value: {value!r}")
    return pendulum.duration(minutes=value)


class CalendarScheduler:
    """
    Entry point for callers that want plain time tuples.
    """

    def __init__(
        self,
        availability_finder: AvailabilityFinder,
        record_source: RecordSourceProtocol | None = None,
    ) -> None:
        self._availability_finder = availability_finder
        self._record_source = record_source

    @property
    def working_hours(self):
        return self._availability_finder.working_hours

    def find_available_windows(
        self,
        attendees: Iterable[str],
        duration: timedelta | int,
    ) -> List[TimeWindow]:
        """Return candidate start windows as domain objects."""
        if isinstance(attendees, str):
            attendees = [attendees]

        return self._availability_finder.find_available_slots(
            list(attendees),
            to_duration(duration),
        )

    def find_available_slots(
        self,
        attendees: Iterable[str],
        duration: timedelta | int,
    ) -> List[Tuple[time, time]]:
        """
        Find the windows in which a meeting with all attendees can start.

        Args:
            attendees: Names of the people who must attend
            duration: Meeting length as a timedelta or in minutes

        Returns:
            ``(earliest_start, latest_start)`` tuples ordered by start time
        """
        return [window.as_tuple() for window in self.find_available_windows(attendees, duration)]

    def list_attendees(self) -> Dict[str, int]:
        """
        Count busy records per attendee in the record source.

        Names are grouped case-insensitively; the first spelling seen wins.
        """
        if self._record_source is None:
            return {}

        counts: Dict[str, int] = {}
        display_names: Dict[str, str] = {}

        for record in self._record_source.read_records():
            key = record.attendee_name.casefold()
            name = display_names.setdefault(key, record.attendee_name)
            counts[name] = counts.get(name, 0) + 1

        return counts


def build_record_source(config: AppConfig) -> RecordSourceProtocol:
    """Create the CSV source, wrapped in a cache when caching is enabled."""
    source: RecordSourceProtocol = CsvRecordSource(config.calendar_file)

    if config.enable_caching:
        logger.debug("Caching enabled for %s", config.calendar_file)
        source = CachingRecordSource(source)

    return source


def build_scheduler(config: AppConfig) -> CalendarScheduler:
    """
    Validate the configuration and assemble a ready-to-use scheduler.

    Raises:
        InvalidConfigurationError: If the calendar file cannot be found
    """
    config.validate_sources()

    record_source = build_record_source(config)
    finder = AvailabilityFinder(
        record_source=record_source,
        working_hours=config.get_working_hours(),
    )

    return CalendarScheduler(availability_finder=finder, record_source=record_source)
