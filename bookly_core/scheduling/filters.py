"""
Calendar Filters Module

Set-membership filters applied to calendar events for display: a visible
date window, branch/staff/room inclusion sets, and highlight predicates.
Filtering never mutates the events it is given.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from .base import AppointmentStatus, CalendarEvent, PaymentStatus, SelectionMethod


@dataclass
class HighlightFilters:
    """Highlight predicates. An empty set does not filter."""

    payments: Set[PaymentStatus] = field(default_factory=set)
    statuses: Set[AppointmentStatus] = field(default_factory=set)
    selection_methods: Set[SelectionMethod] = field(default_factory=set)
    starred: Optional[bool] = None  # True: starred only, False: unstarred only

    def __post_init__(self):
        self.payments = {PaymentStatus(p) for p in self.payments}
        self.statuses = {AppointmentStatus(s) for s in self.statuses}
        self.selection_methods = {SelectionMethod(m) for m in self.selection_methods}

    @property
    def is_empty(self) -> bool:
        return not (self.payments or self.statuses or self.selection_methods) and self.starred is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "payments": sorted(p.value for p in self.payments),
            "statuses": sorted(s.value for s in self.statuses),
            "selection_methods": sorted(m.value for m in self.selection_methods),
            "starred": self.starred,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HighlightFilters":
        """Create from dictionary."""
        return cls(
            payments=set(data.get("payments", [])),
            statuses=set(data.get("statuses", [])),
            selection_methods=set(data.get("selection_methods", [])),
            starred=data.get("starred"),
        )


@dataclass
class CalendarFilters:
    """Visible window and inclusion sets. Empty sets include everything."""

    visible_start: Optional[date] = None
    visible_end: Optional[date] = None
    branch_ids: Set[str] = field(default_factory=set)
    staff_ids: Set[str] = field(default_factory=set)
    room_ids: Set[str] = field(default_factory=set)


def _in_window(event: CalendarEvent, filters: CalendarFilters) -> bool:
    day = event.start.date()
    if filters.visible_start is not None and day < filters.visible_start:
        return False
    if filters.visible_end is not None and day > filters.visible_end:
        return False
    return True


def _branch_of(
    event: CalendarEvent,
    staff_branches: Mapping[str, str],
    room_branches: Mapping[str, str],
) -> Optional[str]:
    if event.branch_id:
        return event.branch_id
    if event.staff_id and event.staff_id in staff_branches:
        return staff_branches[event.staff_id]
    if event.room_id:
        return room_branches.get(event.room_id)
    return None


def _highlighted(event: CalendarEvent, highlights: HighlightFilters, starred_ids: Set[str]) -> bool:
    if highlights.payments and event.payment_status not in highlights.payments:
        return False
    if highlights.statuses and event.status not in highlights.statuses:
        return False
    if highlights.selection_methods and event.selection_method not in highlights.selection_methods:
        return False
    if highlights.starred is not None:
        is_starred = event.starred or event.id in starred_ids
        if is_starred != highlights.starred:
            return False
    return True


def filter_events(
    events: Iterable[CalendarEvent],
    filters: CalendarFilters,
    highlights: Optional[HighlightFilters] = None,
    starred_ids: Optional[Set[str]] = None,
    staff_branches: Optional[Mapping[str, str]] = None,
    room_branches: Optional[Mapping[str, str]] = None,
) -> List[CalendarEvent]:
    """
    Apply the date window, inclusion sets and highlights to events.

    Args:
        events: Calendar events
        filters: Date window and branch/staff/room inclusion sets
        highlights: Payment, status, selection method and starred predicates
        starred_ids: IDs of starred events
        staff_branches: Branch of each staff member, for events without a branch
        room_branches: Branch of each room, for events without a branch or staff

    Returns:
        Matching events in their original order
    """
    highlights = highlights or HighlightFilters()
    starred_ids = starred_ids or set()
    staff_branches = staff_branches or {}
    room_branches = room_branches or {}

    result = []
    for event in events:
        if not _in_window(event, filters):
            continue
        if filters.branch_ids and _branch_of(event, staff_branches, room_branches) not in filters.branch_ids:
            continue
        if filters.staff_ids and event.staff_id not in filters.staff_ids:
            continue
        if filters.room_ids and event.room_id not in filters.room_ids:
            continue
        if not _highlighted(event, highlights, starred_ids):
            continue
        result.append(event)
    return result


__all__ = [
    "HighlightFilters",
    "CalendarFilters",
    "filter_events",
]
