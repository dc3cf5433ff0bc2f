"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .scheduler import CalendarScheduler, build_record_source, build_scheduler, to_duration

__all__ = ["CalendarScheduler", "build_record_source", "build_scheduler", "to_duration"]
