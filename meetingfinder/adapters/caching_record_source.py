"""
Memoizing wrapper around another record source.
"""

from __future__ import annotations

import logging
import threading
from typing import Tuple

from ..domain.availability import RecordSourceProtocol
from ..domain.models import BusyRecord

logger = logging.getLogger(__name__)


class CachingRecordSource:
    """
    Loads the wrapped source once and serves the materialized records after.

    The check-and-load sequence runs under a lock, so concurrent first reads
    trigger a single underlying load and all callers get the same tuple.
    """

    def __init__(self, inner: RecordSourceProtocol):
        self._inner = inner
        self._records: Tuple[BusyRecord, ...] | None = None
        self._lock = threading.Lock()

    def read_records(self) -> Tuple[BusyRecord, ...]:
        """Return the cached records, loading them on first access."""
        with self._lock:
            if self._records is None:
                self._records = tuple(self._inner.read_records())
                logger.debug("Cached %d record(s) from %r", len(self._records), self._inner)
            return self._records

    def clear_cache(self) -> None:
        """Drop the cached records; the next read reloads from the inner source."""
        with self._lock:
            self._records = None
        logger.debug("Record cache cleared")

    @property
    def is_cached(self) -> bool:
        return self._records is not None

    @property
    def cached_record_count(self) -> int:
        records = self._records
        return len(records) if records is not None else 0
