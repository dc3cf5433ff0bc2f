"""
Tests for domain models.
"""

import pytest
from datetime import time, timedelta

from meetingfinder.domain.exceptions import (
    CannotMergeError,
    InvalidConfigurationError,
    InvalidRecordError,
    InvalidWindowError,
)
from meetingfinder.domain.models import (
    BusyRecord,
    TimeWindow,
    WorkingHours,
    parse_time_of_day,
    shift_time,
)


class TestTimeWindow:
    """Tests for TimeWindow model."""

    def test_create_valid_window(self):
        """Test creating a valid window."""
        window = TimeWindow(start=time(9, 0), end=time(17, 0))

        assert window.start == time(9, 0)
        assert window.end == time(17, 0)
        assert window.duration_minutes() == 480  # 8 hours
        assert window.length == timedelta(hours=8)

    def test_zero_length_window_is_allowed(self):
        """A window whose start equals its end is a single instant."""
        window = TimeWindow(start=time(7, 0), end=time(7, 0))

        assert window.is_instant()
        assert window.duration_minutes() == 0

    def test_invalid_window_raises_error(self):
        """Test that an end before start raises InvalidWindowError."""
        with pytest.raises(InvalidWindowError, match="must not be before start"):
            TimeWindow(start=time(17, 0), end=time(9, 0))

    def test_structural_equality(self):
        """Windows with the same bounds are equal and hash alike."""
        a = TimeWindow(start=time(9, 0), end=time(10, 0))
        b = TimeWindow(start=time(9, 0), end=time(10, 0))

        assert a == b
        assert len({a, b}) == 1
        assert a != TimeWindow(start=time(9, 0), end=time(10, 30))

    def test_overlaps(self):
        """Test overlap detection."""
        w1 = TimeWindow(start=time(9, 0), end=time(12, 0))
        w2 = TimeWindow(start=time(11, 0), end=time(14, 0))
        w3 = TimeWindow(start=time(14, 0), end=time(17, 0))

        assert w1.overlaps(w2)
        assert w2.overlaps(w1)
        assert not w1.overlaps(w3)

    def test_touching_windows_do_not_overlap_but_can_merge(self):
        """Sharing only an endpoint is adjacency, not overlap."""
        w1 = TimeWindow(start=time(8, 0), end=time(9, 0))
        w2 = TimeWindow(start=time(9, 0), end=time(10, 0))

        assert not w1.overlaps(w2)
        assert w1.can_merge_with(w2)
        assert w2.can_merge_with(w1)

    def test_merge_overlapping(self):
        """Merging spans the earliest start to the latest end."""
        w1 = TimeWindow(start=time(8, 0), end=time(9, 30))
        w2 = TimeWindow(start=time(9, 0), end=time(9, 40))

        assert w1.merge_with(w2) == TimeWindow(start=time(8, 0), end=time(9, 40))
        assert w2.merge_with(w1) == TimeWindow(start=time(8, 0), end=time(9, 40))

    def test_merge_adjacent(self):
        """Adjacent windows merge into one."""
        w1 = TimeWindow(start=time(8, 0), end=time(9, 0))
        w2 = TimeWindow(start=time(9, 0), end=time(10, 0))

        assert w1.merge_with(w2) == TimeWindow(start=time(8, 0), end=time(10, 0))

    def test_merge_absorbs_contained_window(self):
        """Merging with a window already inside changes nothing."""
        outer = TimeWindow(start=time(8, 0), end=time(12, 0))
        inner = TimeWindow(start=time(9, 0), end=time(10, 0))

        merged = outer.merge_with(inner)

        assert merged == outer
        assert merged.merge_with(inner) == merged

    def test_merge_disjoint_raises_error(self):
        """Test that merging separated windows raises CannotMergeError."""
        w1 = TimeWindow(start=time(8, 0), end=time(9, 0))
        w2 = TimeWindow(start=time(10, 0), end=time(11, 0))

        assert not w1.can_merge_with(w2)
        with pytest.raises(CannotMergeError):
            w1.merge_with(w2)

    def test_ordering_by_start(self):
        """Windows sort by start time."""
        windows = [
            TimeWindow(start=time(14, 0), end=time(15, 0)),
            TimeWindow(start=time(7, 0), end=time(8, 0)),
            TimeWindow(start=time(9, 40), end=time(12, 0)),
        ]

        assert [w.start for w in sorted(windows)] == [time(7, 0), time(9, 40), time(14, 0)]

    def test_str(self):
        assert str(TimeWindow(start=time(9, 40), end=time(12, 0))) == "09:40 - 12:00"


class TestBusyRecord:
    """Tests for BusyRecord model."""

    def test_fields_are_trimmed(self):
        """Name and label are stored without surrounding whitespace."""
        record = BusyRecord(attendee_name="  Alice ", label=" Standup ", start=time(9, 0), end=time(9, 15))

        assert record.attendee_name == "Alice"
        assert record.label == "Standup"
        assert record.window == TimeWindow(start=time(9, 0), end=time(9, 15))

    def test_empty_label_is_allowed(self):
        record = BusyRecord(attendee_name="Bob", label="", start=time(9, 0), end=time(10, 0))

        assert record.label == ""

    def test_empty_name_raises_error(self):
        with pytest.raises(InvalidRecordError, match="name cannot be empty"):
            BusyRecord(attendee_name="   ", label="x", start=time(9, 0), end=time(10, 0))

    @pytest.mark.parametrize("end", [time(9, 0), time(8, 0)])
    def test_end_not_after_start_raises_error(self, end):
        with pytest.raises(InvalidRecordError, match="must be after start"):
            BusyRecord(attendee_name="Bob", label="x", start=time(9, 0), end=end)


class TestWorkingHours:
    """Tests for WorkingHours model."""

    def test_defaults(self):
        working_hours = WorkingHours()

        assert working_hours.window == TimeWindow(start=time(7, 0), end=time(19, 0))
        assert working_hours.span == timedelta(hours=12)

    @pytest.mark.parametrize("end", [time(9, 0), time(8, 0)])
    def test_end_not_after_start_raises_error(self, end):
        with pytest.raises(InvalidConfigurationError):
            WorkingHours(start_time=time(9, 0), end_time=end)

    def test_clip_inside(self):
        working_hours = WorkingHours()

        assert working_hours.clip(time(8, 0), time(9, 0)) == TimeWindow(start=time(8, 0), end=time(9, 0))

    def test_clip_overhanging(self):
        """Periods reaching past working hours are cut at the bounds."""
        working_hours = WorkingHours()

        assert working_hours.clip(time(6, 0), time(8, 0)) == TimeWindow(start=time(7, 0), end=time(8, 0))
        assert working_hours.clip(time(18, 0), time(20, 0)) == TimeWindow(start=time(18, 0), end=time(19, 0))

    def test_clip_outside_returns_none(self):
        working_hours = WorkingHours()

        assert working_hours.clip(time(5, 0), time(7, 0)) is None
        assert working_hours.clip(time(19, 0), time(21, 0)) is None


class TestTimeHelpers:
    """Tests for time-of-day parsing and arithmetic."""

    def test_parse_time_of_day(self):
        assert parse_time_of_day("08:05") == time(8, 5)
        assert parse_time_of_day(" 23:59 ") == time(23, 59)

    @pytest.mark.parametrize("value", ["8:00", "8:00am", "08:00:00", "24:00", "12:60", "", "ab:cd"])
    def test_parse_time_of_day_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            parse_time_of_day(value)

    def test_shift_time(self):
        assert shift_time(time(13, 0), -timedelta(minutes=60)) == time(12, 0)
        assert shift_time(time(9, 40), timedelta(minutes=20)) == time(10, 0)

    def test_shift_time_past_midnight_raises_error(self):
        with pytest.raises(ValueError):
            shift_time(time(0, 30), -timedelta(hours=1))
