"""
Time and Overlap Primitives

Half-open ``[start, end)`` interval math shared by every scheduling
component. Ranges hold either naive business-local ``datetime`` values
(instants on the calendar) or ``time`` values (time of day within a shift).
Both ends of a range must be the same kind.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, Iterator, List, Union


TimeValue = Union[datetime, time]


# =============================================================================
# Time-of-day helpers
# =============================================================================


def minutes_of_day(t: time) -> int:
    """Minutes elapsed since midnight."""
    return t.hour * 60 + t.minute


def parse_time(value: Union[str, time]) -> time:
    """Parse ``HH:MM`` (or ``HH:MM:SS``) into a ``time``."""
    if isinstance(value, time):
        return value
    return time.fromisoformat(value)


def format_time(t: time) -> str:
    """Format a time of day as ``HH:MM``."""
    return t.strftime("%H:%M")


def at(d: date, t: time) -> datetime:
    """Combine a calendar date and a time of day."""
    return datetime.combine(d, t)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date in ``[start, end]`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


# =============================================================================
# Time Range
# =============================================================================


@dataclass(frozen=True)
class TimeRange:
    """A half-open ``[start, end)`` range."""

    start: Any
    end: Any

    @property
    def is_valid(self) -> bool:
        """True when ``end`` is strictly after ``start``."""
        return self.end > self.start

    @property
    def duration_minutes(self) -> int:
        """Get duration in minutes."""
        if isinstance(self.start, datetime):
            return int((self.end - self.start).total_seconds() // 60)
        return minutes_of_day(self.end) - minutes_of_day(self.start)

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if ranges overlap. Back-to-back ranges do not."""
        return self.start < other.end and self.end > other.start

    def contains(self, other: "TimeRange") -> bool:
        """Check if ``other`` lies entirely within this range."""
        return other.start >= self.start and other.end <= self.end

    def on(self, d: date) -> "TimeRange":
        """Anchor a time-of-day range onto a calendar date."""
        return TimeRange(at(d, self.start), at(d, self.end))

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary."""
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "TimeRange":
        """Create from dictionary."""
        return cls(start=_parse_value(data["start"]), end=_parse_value(data["end"]))

    @classmethod
    def for_day(cls, d: date) -> "TimeRange":
        """The whole calendar day ``[00:00, next 00:00)``."""
        start = at(d, time.min)
        return cls(start, start + timedelta(days=1))


def _parse_value(value: str) -> TimeValue:
    if "T" in value or len(value) > 8:
        return datetime.fromisoformat(value)
    return time.fromisoformat(value)


# =============================================================================
# Module-level primitives
# =============================================================================


def overlaps(a: TimeRange, b: TimeRange) -> bool:
    """Strict half-open overlap: ``a.start < b.end and a.end > b.start``."""
    return a.overlaps(b)


def contains(outer: TimeRange, inner: TimeRange) -> bool:
    """``inner.start >= outer.start and inner.end <= outer.end``."""
    return outer.contains(inner)


def duration_minutes(r: TimeRange) -> int:
    """Duration of a range in whole minutes."""
    return r.duration_minutes


# =============================================================================
# Shift list consistency
# =============================================================================


def validate_shifts(shifts: Iterable[Any]) -> List[str]:
    """
    Validate the shifts of a single entity and day.

    Each shift needs ``start`` and ``end`` times and may carry ``breaks``.
    Cross-midnight shifts are rejected rather than wrapped around.

    Returns:
        Human-readable error messages; empty when the list is consistent.
    """
    errors: List[str] = []
    shifts = list(shifts)

    for i, shift in enumerate(shifts, start=1):
        shift_range = TimeRange(shift.start, shift.end)
        if not shift_range.is_valid:
            errors.append(f"Shift {i}: End time must be after start time")
            continue

        breaks = list(getattr(shift, "breaks", None) or [])
        for j, brk in enumerate(breaks, start=1):
            break_range = TimeRange(brk.start, brk.end)
            if not break_range.is_valid:
                errors.append(f"Shift {i}, break {j}: End time must be after start time")
            elif not shift_range.contains(break_range):
                errors.append(f"Shift {i}, break {j}: Break must fall within the shift")

        for j in range(len(breaks)):
            for k in range(j + 1, len(breaks)):
                a = TimeRange(breaks[j].start, breaks[j].end)
                b = TimeRange(breaks[k].start, breaks[k].end)
                if a.is_valid and b.is_valid and a.overlaps(b):
                    errors.append(
                        f"Shift {i}: Break {j + 1} and break {k + 1} have overlapping times"
                    )

    for i in range(len(shifts)):
        for j in range(i + 1, len(shifts)):
            a = TimeRange(shifts[i].start, shifts[i].end)
            b = TimeRange(shifts[j].start, shifts[j].end)
            if a.is_valid and b.is_valid and a.overlaps(b):
                errors.append(f"Shift {i + 1} and Shift {j + 1} have overlapping times")

    return errors


__all__ = [
    "TimeValue",
    "TimeRange",
    "minutes_of_day",
    "parse_time",
    "format_time",
    "at",
    "iter_dates",
    "overlaps",
    "contains",
    "duration_minutes",
    "validate_shifts",
]
