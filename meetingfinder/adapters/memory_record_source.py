"""
In-memory record source for tests and demos.
"""

from typing import Iterable, List

from ..domain.models import BusyRecord


class InMemoryRecordSource:
    """
    Serves a fixed collection of busy records.

    Counts ``read_records`` calls so callers can verify how often the source
    was consulted.
    """

    def __init__(self, records: Iterable[BusyRecord] = ()):
        self._records: List[BusyRecord] = list(records)
        self.read_count = 0

    def read_records(self) -> List[BusyRecord]:
        self.read_count += 1
        return list(self._records)

    def __repr__(self) -> str:
        return f"InMemoryRecordSource({len(self._records)} records)"
