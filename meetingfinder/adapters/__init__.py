"""
Adapters layer - Record sources feeding the availability engine.
"""

from .caching_record_source import CachingRecordSource
from .csv_record_source import CsvRecordSource, parse_record_line, split_csv_line
from .memory_record_source import InMemoryRecordSource

__all__ = [
    "CachingRecordSource",
    "CsvRecordSource",
    "InMemoryRecordSource",
    "parse_record_line",
    "split_csv_line",
]
