"""
Domain models for time windows, busy records and working hours.

All values are times of day within a single working day; there is no date
or timezone component anywhere in the domain.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .exceptions import (
    CannotMergeError,
    InvalidConfigurationError,
    InvalidRecordError,
    InvalidWindowError,
)

# Only the time component is ever read back from datetimes built on this day.
_ANCHOR_DAY = date(2000, 1, 1)


_CLOCK_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


def parse_time_of_day(value: str) -> time:
    """
    Parse a zero-padded 24-hour ``HH:MM`` string.

    Raises:
        ValueError: If the string is not in that exact format or out of range.
    """
    match = _CLOCK_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    hour, minute = (int(part) for part in match.groups())
    # time() rejects 24:00, 12:60 and friends
    return time(hour=hour, minute=minute)


def time_difference(start: time, end: time) -> timedelta:
    """Return ``end - start`` as a timedelta (negative if end is earlier)."""
    return datetime.combine(_ANCHOR_DAY, end) - datetime.combine(_ANCHOR_DAY, start)


def shift_time(value: time, delta: timedelta) -> time:
    """
    Move a time of day by ``delta``.

    Raises:
        ValueError: If the result would leave the day the value lives in.
    """
    shifted = datetime.combine(_ANCHOR_DAY, value) + delta
    if shifted.date() != _ANCHOR_DAY:
        raise ValueError(f"Shifting {value} by {delta} leaves the day")
    return shifted.time()


@dataclass(frozen=True, order=True)
class TimeWindow:
    """
    Represents an immutable window between two times of day.

    Invariant: end must not be before start. A zero-length window denotes a
    single instant.
    """
    start: time
    end: time

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidWindowError(
                f"End time {self.end:%H:%M} must not be before start time {self.start:%H:%M}"
            )

    @property
    def length(self) -> timedelta:
        """Return the length of the window."""
        return time_difference(self.start, self.end)

    def duration_minutes(self) -> int:
        """Return the length in whole minutes."""
        return int(self.length.total_seconds() // 60)

    def is_instant(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check if this window shares time with another. Touching does not count."""
        return self.start < other.end and self.end > other.start

    def can_merge_with(self, other: "TimeWindow") -> bool:
        """Check if the windows overlap or touch at an endpoint."""
        return self.start <= other.end and self.end >= other.start

    def merge_with(self, other: "TimeWindow") -> "TimeWindow":
        """
        Return the window spanning both windows.

        Raises:
            CannotMergeError: If the windows neither overlap nor touch.
        """
        if not self.can_merge_with(other):
            raise CannotMergeError(f"Cannot merge disjoint windows {self} and {other}")

        return TimeWindow(
            start=min(self.start, other.start),
            end=max(self.end, other.end),
        )

    def as_tuple(self) -> tuple[time, time]:
        return (self.start, self.end)

    def __str__(self) -> str:
        return f"{self.start:%H:%M} - {self.end:%H:%M}"


@dataclass(frozen=True)
class BusyRecord:
    """
    One occupied period for one attendee, as read from a record source.
    """
    attendee_name: str
    label: str
    start: time
    end: time

    def __post_init__(self):
        name = (self.attendee_name or "").strip()
        if not name:
            raise InvalidRecordError("Attendee name cannot be empty")
        if self.end <= self.start:
            raise InvalidRecordError(
                f"End time {self.end:%H:%M} must be after start time {self.start:%H:%M}"
            )

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "attendee_name", name)
        object.__setattr__(self, "label", (self.label or "").strip())

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start, end=self.end)

    def __str__(self) -> str:
        return f"{self.attendee_name}: {self.label} ({self.start:%H:%M} - {self.end:%H:%M})"


@dataclass(frozen=True)
class WorkingHours:
    """
    The daily window outside of which no meeting may be scheduled.
    """
    start_time: time = time(7, 0)
    end_time: time = time(19, 0)

    def __post_init__(self):
        if self.end_time <= self.start_time:
            raise InvalidConfigurationError(
                f"Working hours end {self.end_time:%H:%M} must be after "
                f"start {self.start_time:%H:%M}"
            )

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start_time, end=self.end_time)

    @property
    def span(self) -> timedelta:
        return time_difference(self.start_time, self.end_time)

    def clip(self, start: time, end: time) -> TimeWindow | None:
        """
        Clip a period to fit within working hours.
        Returns None if nothing of positive length remains.
        """
        clipped_start = max(start, self.start_time)
        clipped_end = min(end, self.end_time)

        if clipped_end <= clipped_start:
            return None

        return TimeWindow(start=clipped_start, end=clipped_end)

    def __str__(self) -> str:
        return f"{self.start_time:%H:%M} - {self.end_time:%H:%M}"
