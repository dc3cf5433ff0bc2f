"""
Domain-specific exception hierarchy for the meeting finder application.
"""


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class InvalidWindowError(SchedulingError, ValueError):
    """Raised when a time window would end before it starts."""


class CannotMergeError(SchedulingError):
    """Raised when merging two windows that neither overlap nor touch."""


class InvalidDurationError(SchedulingError, ValueError):
    """Raised when a requested meeting duration is zero or negative."""


class InvalidConfigurationError(SchedulingError):
    """Raised when configuration or the backing data source is unusable."""


class InvalidRecordError(SchedulingError, ValueError):
    """Raised when a single busy record cannot be built or parsed."""
