"""Unit tests for time range primitives and shift validation."""

import pytest
from datetime import date, datetime, time


class TestTimeRange:
    """Tests for TimeRange overlap and containment."""

    def test_overlap_is_symmetric(self):
        """Test overlaps(a, b) == overlaps(b, a) across placements."""
        from bookly_core.scheduling.intervals import TimeRange, overlaps

        base = datetime(2025, 9, 1, 9, 0)
        ranges = [
            TimeRange(base.replace(hour=h1), base.replace(hour=h2))
            for h1 in range(8, 12)
            for h2 in range(h1 + 1, 13)
        ]

        for a in ranges:
            for b in ranges:
                assert overlaps(a, b) == overlaps(b, a)

    def test_partial_overlap(self):
        """Test 09:00-10:00 overlaps 09:30-10:30."""
        from bookly_core.scheduling.intervals import TimeRange

        a = TimeRange(datetime(2025, 9, 1, 9, 0), datetime(2025, 9, 1, 10, 0))
        b = TimeRange(datetime(2025, 9, 1, 9, 30), datetime(2025, 9, 1, 10, 30))

        assert a.overlaps(b) is True

    def test_back_to_back_ranges_do_not_overlap(self):
        """Test half-open ranges touching at one instant."""
        from bookly_core.scheduling.intervals import TimeRange

        a = TimeRange(datetime(2025, 9, 1, 9, 0), datetime(2025, 9, 1, 10, 0))
        b = TimeRange(datetime(2025, 9, 1, 10, 0), datetime(2025, 9, 1, 11, 0))

        assert a.overlaps(b) is False
        assert b.overlaps(a) is False

    def test_time_of_day_ranges(self):
        """Test ranges over time-of-day values."""
        from bookly_core.scheduling.intervals import TimeRange

        morning = TimeRange(time(9, 0), time(12, 0))
        lunch = TimeRange(time(11, 30), time(13, 0))

        assert morning.overlaps(lunch) is True
        assert morning.duration_minutes == 180

    def test_contains(self):
        """Test containment, including shared endpoints."""
        from bookly_core.scheduling.intervals import TimeRange, contains

        shift = TimeRange(time(9, 0), time(17, 0))

        assert contains(shift, TimeRange(time(9, 0), time(17, 0))) is True
        assert contains(shift, TimeRange(time(10, 0), time(11, 0))) is True
        assert contains(shift, TimeRange(time(8, 30), time(9, 30))) is False
        assert contains(shift, TimeRange(time(16, 30), time(17, 30))) is False

    def test_duration_minutes(self):
        """Test duration of a datetime range."""
        from bookly_core.scheduling.intervals import TimeRange, duration_minutes

        r = TimeRange(datetime(2025, 9, 1, 9, 0), datetime(2025, 9, 1, 10, 45))

        assert duration_minutes(r) == 105

    def test_is_valid(self):
        """Test end must be strictly after start."""
        from bookly_core.scheduling.intervals import TimeRange

        assert TimeRange(time(9, 0), time(10, 0)).is_valid is True
        assert TimeRange(time(9, 0), time(9, 0)).is_valid is False
        assert TimeRange(time(22, 0), time(2, 0)).is_valid is False

    def test_on_anchors_to_date(self):
        """Test anchoring a time-of-day range onto a date."""
        from bookly_core.scheduling.intervals import TimeRange

        r = TimeRange(time(9, 0), time(10, 0)).on(date(2025, 9, 1))

        assert r.start == datetime(2025, 9, 1, 9, 0)
        assert r.end == datetime(2025, 9, 1, 10, 0)

    def test_for_day(self):
        """Test the whole-day range."""
        from bookly_core.scheduling.intervals import TimeRange

        r = TimeRange.for_day(date(2025, 9, 29))

        assert r.start == datetime(2025, 9, 29, 0, 0)
        assert r.end == datetime(2025, 9, 30, 0, 0)

    def test_dict_keeps_value_kind(self):
        """Test datetimes and times survive serialization as their own kind."""
        from bookly_core.scheduling.intervals import TimeRange

        instants = TimeRange(datetime(2025, 9, 1, 9, 0), datetime(2025, 9, 1, 10, 0))
        times = TimeRange(time(9, 0), time(10, 0))

        assert TimeRange.from_dict(instants.to_dict()) == instants
        assert TimeRange.from_dict(times.to_dict()) == times


class TestTimeHelpers:
    """Tests for time-of-day helpers."""

    def test_parse_and_format(self):
        """Test HH:MM parsing and formatting."""
        from bookly_core.scheduling.intervals import format_time, minutes_of_day, parse_time

        t = parse_time("09:30")

        assert t == time(9, 30)
        assert format_time(t) == "09:30"
        assert minutes_of_day(t) == 570

    def test_parse_passes_times_through(self):
        """Test parse_time accepts a time value."""
        from bookly_core.scheduling.intervals import parse_time

        assert parse_time(time(8, 0)) == time(8, 0)

    def test_iter_dates_is_inclusive(self):
        """Test date iteration includes both ends."""
        from bookly_core.scheduling.intervals import iter_dates

        days = list(iter_dates(date(2025, 9, 1), date(2025, 9, 3)))

        assert days == [date(2025, 9, 1), date(2025, 9, 2), date(2025, 9, 3)]
        assert list(iter_dates(date(2025, 9, 3), date(2025, 9, 1))) == []


class TestValidateShifts:
    """Tests for shift list validation."""

    def test_valid_shifts(self):
        """Test non-overlapping shifts with inner breaks."""
        from bookly_core.scheduling import BreakRange, Shift, validate_shifts

        shifts = [
            Shift(start="09:00", end="13:00", breaks=[BreakRange(start="11:00", end="11:15")]),
            Shift(start="14:00", end="18:00"),
        ]

        assert validate_shifts(shifts) == []

    def test_reversed_shift(self):
        """Test end before start is an error, never a wraparound."""
        from bookly_core.scheduling import Shift, validate_shifts

        errors = validate_shifts([Shift(start="22:00", end="02:00")])

        assert errors == ["Shift 1: End time must be after start time"]

    def test_empty_shift(self):
        """Test a zero-length shift is rejected."""
        from bookly_core.scheduling import Shift, validate_shifts

        errors = validate_shifts([Shift(start="09:00", end="09:00")])

        assert errors == ["Shift 1: End time must be after start time"]

    def test_overlapping_shifts(self):
        """Test pairwise overlap is reported."""
        from bookly_core.scheduling import Shift, validate_shifts

        shifts = [
            Shift(start="09:00", end="12:00"),
            Shift(start="13:00", end="15:00"),
            Shift(start="11:00", end="14:00"),
        ]

        errors = validate_shifts(shifts)

        assert "Shift 1 and Shift 3 have overlapping times" in errors
        assert "Shift 2 and Shift 3 have overlapping times" in errors
        assert len(errors) == 2

    def test_adjacent_shifts_are_valid(self):
        """Test back-to-back shifts."""
        from bookly_core.scheduling import Shift, validate_shifts

        shifts = [Shift(start="09:00", end="12:00"), Shift(start="12:00", end="15:00")]

        assert validate_shifts(shifts) == []

    def test_break_outside_shift(self):
        """Test breaks must lie inside their shift."""
        from bookly_core.scheduling import BreakRange, Shift, validate_shifts

        shift = Shift(start="09:00", end="12:00", breaks=[BreakRange(start="11:30", end="12:30")])

        errors = validate_shifts([shift])

        assert errors == ["Shift 1, break 1: Break must fall within the shift"]

    def test_overlapping_breaks(self):
        """Test breaks in one shift must not overlap."""
        from bookly_core.scheduling import BreakRange, Shift, validate_shifts

        shift = Shift(
            start="09:00",
            end="17:00",
            breaks=[
                BreakRange(start="12:00", end="13:00"),
                BreakRange(start="12:30", end="13:30"),
            ],
        )

        errors = validate_shifts([shift])

        assert errors == ["Shift 1: Break 1 and break 2 have overlapping times"]


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("09:00", "10:00", True),
        ("10:00", "11:00", False),
        ("08:00", "09:00", False),
        ("08:00", "12:00", True),
    ],
)
def test_overlap_against_fixed_range(start, end, expected):
    """Test overlap decisions around 09:00-10:00."""
    from bookly_core.scheduling.intervals import TimeRange, parse_time

    fixed = TimeRange(time(9, 0), time(10, 0))
    other = TimeRange(parse_time(start), parse_time(end))

    assert fixed.overlaps(other) is expected
