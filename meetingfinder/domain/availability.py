"""
Core business logic for finding windows where a meeting can start.

This is the heart of the application - pure domain logic without any
external dependencies (no file access, no caching, no presentation).
"""

import logging
from datetime import timedelta
from typing import Iterable, List, Protocol

from .exceptions import InvalidDurationError
from .models import BusyRecord, TimeWindow, WorkingHours, shift_time

logger = logging.getLogger(__name__)


class RecordSourceProtocol(Protocol):
    """Anything that can produce the full set of busy records."""

    def read_records(self) -> Iterable[BusyRecord]:
        """Return every busy record available."""


class AvailabilityFinder:
    """
    Calculates the windows in which a meeting can start.

    Algorithm:
    1. Collect busy windows of the requested attendees, clipped to working hours
    2. Merge overlapping or touching busy windows
    3. Invert the merged busy windows into free windows
    4. Shrink each free window by the meeting duration

    The result for a free window ``[09:40, 13:00]`` and a 60 minute meeting is
    ``[09:40, 12:00]``: any start in that range still ends by 13:00. A free
    window exactly as long as the meeting yields a zero-length window, which
    is one valid start instant.
    """

    def __init__(self, record_source: RecordSourceProtocol, working_hours: WorkingHours):
        self._record_source = record_source
        self.working_hours = working_hours

    def find_available_slots(
        self,
        attendee_names: Iterable[str],
        duration: timedelta,
    ) -> List[TimeWindow]:
        """
        Find all windows in which every attendee is free for ``duration``.

        Args:
            attendee_names: Attendees who must all be free (case-insensitive)
            duration: Length of the meeting, strictly positive

        Returns:
            Candidate start windows ordered by start time. An empty list
            means there is no common availability.

        Raises:
            InvalidDurationError: If duration is zero or negative
        """
        if isinstance(attendee_names, str):
            attendee_names = [attendee_names]

        attendees = {name.strip().casefold() for name in attendee_names if name.strip()}

        if not attendees:
            return []

        if duration <= timedelta(0):
            raise InvalidDurationError(f"Meeting duration must be positive, got {duration}")

        if duration > self.working_hours.span:
            logger.debug(
                "Duration %s exceeds working hours %s; no slot possible",
                duration,
                self.working_hours,
            )
            return []

        busy_windows = self._collect_busy_windows(attendees)
        merged_busy = self._merge_windows(busy_windows)
        free_windows = self._invert_busy_to_free(merged_busy)
        start_windows = self._adjust_for_duration(free_windows, duration)

        logger.debug(
            "Attendees %s: %d busy, %d merged, %d free, %d candidate window(s)",
            sorted(attendees),
            len(busy_windows),
            len(merged_busy),
            len(free_windows),
            len(start_windows),
        )

        return start_windows

    def _collect_busy_windows(self, attendees: set[str]) -> List[TimeWindow]:
        """
        Gather the busy windows of the requested attendees.

        Records are clipped to working hours; those lying entirely outside
        are dropped. Attendees without records simply contribute nothing.
        """
        busy_windows: List[TimeWindow] = []

        for record in self._record_source.read_records():
            if record.attendee_name.casefold() not in attendees:
                continue

            clipped = self.working_hours.clip(record.start, record.end)
            if clipped:
                busy_windows.append(clipped)

        return busy_windows

    def _merge_windows(self, windows: List[TimeWindow]) -> List[TimeWindow]:
        """
        Merge overlapping or touching windows.

        Example: [08:00-09:30, 09:00-09:40, 09:40-10:00] -> [08:00-10:00]
        """
        if not windows:
            return []

        # Sort by start time
        sorted_windows = sorted(windows, key=lambda w: w.start)
        merged: List[TimeWindow] = [sorted_windows[0]]

        for current in sorted_windows[1:]:
            last = merged[-1]

            if last.can_merge_with(current):
                merged[-1] = last.merge_with(current)
            else:
                merged.append(current)

        return merged

    def _invert_busy_to_free(self, busy_windows: List[TimeWindow]) -> List[TimeWindow]:
        """
        Convert merged busy windows to free windows within working hours.

        Example:
        Working: 07:00 - 19:00
        Busy: [08:00-09:40, 13:00-14:00]
        Result: [07:00-08:00, 09:40-13:00, 14:00-19:00]
        """
        free_windows: List[TimeWindow] = []
        cursor = self.working_hours.start_time

        for busy in sorted(busy_windows, key=lambda w: w.start):
            # Free time before this busy period
            if cursor < busy.start:
                free_windows.append(TimeWindow(start=cursor, end=busy.start))

            cursor = max(cursor, busy.end)

        # Remaining free time after the last busy period
        if cursor < self.working_hours.end_time:
            free_windows.append(TimeWindow(start=cursor, end=self.working_hours.end_time))

        return free_windows

    def _adjust_for_duration(
        self,
        free_windows: List[TimeWindow],
        duration: timedelta,
    ) -> List[TimeWindow]:
        """
        Turn free windows into the ranges in which the meeting can start.

        Free windows shorter than the meeting are dropped.
        """
        start_windows: List[TimeWindow] = []

        for free in free_windows:
            if free.length < duration:
                continue

            latest_start = shift_time(free.end, -duration)
            start_windows.append(TimeWindow(start=free.start, end=latest_start))

        return start_windows
