"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityFinder, RecordSourceProtocol
from .exceptions import (
    CannotMergeError,
    InvalidConfigurationError,
    InvalidDurationError,
    InvalidRecordError,
    InvalidWindowError,
    SchedulingError,
)
from .models import BusyRecord, TimeWindow, WorkingHours

__all__ = [
    "AvailabilityFinder",
    "RecordSourceProtocol",
    "BusyRecord",
    "TimeWindow",
    "WorkingHours",
    "SchedulingError",
    "InvalidWindowError",
    "CannotMergeError",
    "InvalidDurationError",
    "InvalidConfigurationError",
    "InvalidRecordError",
]
