"""
Scheduling Base Types Module

This module defines core types for the booking engine: staff and room
resources, shifts and working hours, time off and ad-hoc reservations,
recurring slot templates, dated static slots, and calendar events.

All times are naive business-local values. Conversion from a client's
timezone happens before records reach this package.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from .intervals import TimeRange, at, format_time, parse_time


# =============================================================================
# Enums
# =============================================================================


class AppointmentStatus(str, Enum):
    """Status of an appointment."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NEED_CONFIRM = "need_confirm"
    NO_SHOW = "no_show"


class PaymentStatus(str, Enum):
    """Payment state of an appointment."""

    PAID = "paid"
    UNPAID = "unpaid"


class SelectionMethod(str, Enum):
    """How the staff member was picked for a booking."""

    BY_CLIENT = "by_client"
    AUTOMATICALLY = "automatically"


class SchedulingMode(str, Enum):
    """Scheduling philosophy of a staff member, room or branch."""

    DYNAMIC = "dynamic"  # Per-appointment, bounded by shifts and concurrency
    STATIC = "static"  # Fixed-capacity slots generated from templates


class DayOfWeek(str, Enum):
    """Days of the week."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, d: date) -> "DayOfWeek":
        """Get the weekday of a calendar date."""
        return list(cls)[d.weekday()]


class CalendarView(str, Enum):
    """Calendar grid views."""

    MONTH = "dayGridMonth"
    WEEK = "timeGridWeek"
    DAY = "timeGridDay"
    LIST = "listMonth"


class DisplayMode(str, Enum):
    """Calendar density."""

    FULL = "full"
    FIT = "fit"


class ColorScheme(str, Enum):
    """Event color palettes."""

    VIVID = "vivid"
    PASTEL = "pastel"


class SpecialDayType(str, Enum):
    """Kinds of special-day rules."""

    CLOSED = "closed"
    HOLIDAY = "holiday"
    CUSTOM = "custom"  # Custom hours replace the day's shifts


class TimeOffReason(str, Enum):
    """Reason groups for staff time off."""

    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    TRAINING = "training"
    NO_SHOW = "no_show"
    LATE = "late"
    OTHER = "other"


class ConflictCheck(str, Enum):
    """Conflict checks run by the validator after input sanity."""

    TIME_OFF = "time_off"  # Time off, reservations, working hours
    CAPACITY = "capacity"  # Static slot capacity
    CONCURRENCY = "concurrency"  # Dynamic staff/room concurrency


ALL_CHECKS = frozenset(ConflictCheck)


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class ValidationResult:
    """Accept or reject, with a human-readable reason on rejection."""

    ok: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        if self.ok:
            return {"ok": True}
        return {"ok": False, "reason": self.reason}


@dataclass(frozen=True)
class SlotAvailability:
    """Remaining capacity of a static slot."""

    available: bool
    remaining_capacity: int
    total: int


@dataclass(frozen=True)
class StaffAvailability:
    """Concurrent booking load of a staff member over a range."""

    available: bool
    current_count: int
    max_allowed: int


@dataclass(frozen=True)
class UnavailableWindow:
    """A blocked window on a staff member's day."""

    start: datetime
    end: datetime
    reason: str
    kind: str  # "time_off" or "reservation"


# =============================================================================
# Shift Types
# =============================================================================


@dataclass
class BreakRange:
    """A break inside a shift."""

    start: time
    end: time
    id: str = ""

    def __post_init__(self):
        self.start = parse_time(self.start)
        self.end = parse_time(self.end)
        if not self.id:
            self.id = f"brk_{uuid.uuid4().hex[:12]}"

    @property
    def range(self) -> TimeRange:
        return TimeRange(self.start, self.end)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, "start": format_time(self.start), "end": format_time(self.end)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BreakRange":
        """Create from dictionary."""
        return cls(start=data["start"], end=data["end"], id=data.get("id", ""))


@dataclass
class Shift:
    """A working interval within a single day."""

    start: time
    end: time
    breaks: List[BreakRange] = field(default_factory=list)
    capacity: Optional[int] = None
    id: str = ""

    def __post_init__(self):
        self.start = parse_time(self.start)
        self.end = parse_time(self.end)
        if not self.id:
            self.id = f"shift_{uuid.uuid4().hex[:12]}"

    @property
    def range(self) -> TimeRange:
        return TimeRange(self.start, self.end)

    @property
    def duration_minutes(self) -> int:
        """Working minutes, excluding breaks."""
        return self.range.duration_minutes - sum(b.range.duration_minutes for b in self.breaks)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "start": format_time(self.start),
            "end": format_time(self.end),
            "breaks": [b.to_dict() for b in self.breaks],
            "capacity": self.capacity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Shift":
        """Create from dictionary."""
        return cls(
            start=data["start"],
            end=data["end"],
            breaks=[BreakRange.from_dict(b) for b in data.get("breaks") or []],
            capacity=data.get("capacity"),
            id=data.get("id", ""),
        )


@dataclass
class DaySchedule:
    """Open/closed state and shifts for one weekday."""

    day: DayOfWeek
    is_open: bool = True
    shifts: List[Shift] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "day": self.day.value,
            "is_open": self.is_open,
            "shifts": [s.to_dict() for s in self.shifts],
        }


@dataclass
class ShiftOverride:
    """Date-specific replacement of an entity's shifts."""

    entity_id: str
    date: date
    is_open: bool = True
    shifts: List[Shift] = field(default_factory=list)
    reason: str = ""


@dataclass
class EffectiveShifts:
    """Resolved working shifts of an entity on a date."""

    is_available: bool
    shifts: List[Shift] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "is_available": self.is_available,
            "shifts": [s.to_dict() for s in self.shifts],
        }


@dataclass
class SpecialDayRule:
    """Holiday, closure or custom hours over a date range."""

    id: str
    name: str
    start_date: date
    end_date: date
    rule_type: SpecialDayType = SpecialDayType.CLOSED
    shifts: List[Shift] = field(default_factory=list)
    branch_id: Optional[str] = None  # None applies to every branch
    is_active: bool = True

    def __post_init__(self):
        if not self.id:
            self.id = f"rule_{uuid.uuid4().hex[:12]}"
        self.rule_type = SpecialDayType(self.rule_type)

    @property
    def closes(self) -> bool:
        return self.rule_type in (SpecialDayType.CLOSED, SpecialDayType.HOLIDAY)

    def applies_to(self, d: date, branch_id: Optional[str]) -> bool:
        """Check if the rule is in force for a date and branch."""
        if not self.is_active:
            return False
        if self.branch_id is not None and self.branch_id != branch_id:
            return False
        return self.start_date <= d <= self.end_date


# =============================================================================
# Resource Types
# =============================================================================


@dataclass
class Staff:
    """A staff member who can be booked."""

    id: str
    name: str
    branch_id: str
    max_concurrent_bookings: int = 1
    scheduling_mode: SchedulingMode = SchedulingMode.DYNAMIC
    weekly_schedule: Dict[DayOfWeek, DaySchedule] = field(default_factory=dict)
    title: str = ""
    color: str = "#1976d2"
    is_active: bool = True

    def __post_init__(self):
        if not self.id:
            self.id = f"staff_{uuid.uuid4().hex[:12]}"
        self.scheduling_mode = SchedulingMode(self.scheduling_mode)
        if self.max_concurrent_bookings is None:
            self.max_concurrent_bookings = 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "branch_id": self.branch_id,
            "max_concurrent_bookings": self.max_concurrent_bookings,
            "scheduling_mode": self.scheduling_mode.value,
            "weekly_schedule": {
                day.value: ds.to_dict() for day, ds in self.weekly_schedule.items()
            },
            "title": self.title,
            "color": self.color,
            "is_active": self.is_active,
        }


@dataclass
class Room:
    """A physical resource: studio, station, pod."""

    id: str
    name: str
    branch_id: str
    capacity: int = 1
    scheduling_mode: SchedulingMode = SchedulingMode.DYNAMIC
    weekly_schedule: Dict[DayOfWeek, DaySchedule] = field(default_factory=dict)
    color: str = "#4ECDC4"

    def __post_init__(self):
        if not self.id:
            self.id = f"room_{uuid.uuid4().hex[:12]}"
        self.scheduling_mode = SchedulingMode(self.scheduling_mode)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "branch_id": self.branch_id,
            "capacity": self.capacity,
            "scheduling_mode": self.scheduling_mode.value,
            "weekly_schedule": {
                day.value: ds.to_dict() for day, ds in self.weekly_schedule.items()
            },
            "color": self.color,
        }


# =============================================================================
# Unavailability Types
# =============================================================================


@dataclass
class TimeOff:
    """Staff unavailability. Overlapping a booking is a hard conflict."""

    id: str
    staff_id: str
    range: TimeRange
    all_day: bool = False
    repeat_until: Optional[date] = None
    reason: TimeOffReason = TimeOffReason.OTHER
    approved: bool = False
    note: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = f"off_{uuid.uuid4().hex[:12]}"
        self.reason = TimeOffReason(self.reason)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "staff_id": self.staff_id,
            "range": self.range.to_dict(),
            "all_day": self.all_day,
            "repeat_until": self.repeat_until.isoformat() if self.repeat_until else None,
            "reason": self.reason.value,
            "approved": self.approved,
            "note": self.note,
        }


@dataclass
class TimeReservation:
    """Ad-hoc block of staff and/or rooms: meetings, training."""

    id: str
    start: datetime
    end: datetime
    staff_ids: List[str] = field(default_factory=list)
    room_ids: List[str] = field(default_factory=list)
    reason: str = ""
    note: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = f"res_{uuid.uuid4().hex[:12]}"

    @property
    def range(self) -> TimeRange:
        return TimeRange(self.start, self.end)

    def involves(self, staff_id: Optional[str] = None, room_id: Optional[str] = None) -> bool:
        """Check if the reservation blocks the given staff member or room."""
        return bool(
            (staff_id and staff_id in self.staff_ids)
            or (room_id and room_id in self.room_ids)
        )

    def shares_resource(self, other: "TimeReservation") -> bool:
        return bool(
            set(self.staff_ids) & set(other.staff_ids)
            or set(self.room_ids) & set(other.room_ids)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "staff_ids": list(self.staff_ids),
            "room_ids": list(self.room_ids),
            "reason": self.reason,
            "note": self.note,
        }


# =============================================================================
# Template and Slot Types
# =============================================================================


@dataclass
class WeeklySlotPattern:
    """One recurring class or service slot in a weekly template."""

    id: str
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    room_id: str
    service_id: str = ""
    service_name: str = ""
    capacity: int = 1
    instructor_staff_id: Optional[str] = None
    price: float = 0.0

    def __post_init__(self):
        if not self.id:
            self.id = f"pattern_{uuid.uuid4().hex[:12]}"
        self.day_of_week = DayOfWeek(self.day_of_week)
        self.start_time = parse_time(self.start_time)
        self.end_time = parse_time(self.end_time)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "day_of_week": self.day_of_week.value,
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "room_id": self.room_id,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "capacity": self.capacity,
            "instructor_staff_id": self.instructor_staff_id,
            "price": self.price,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeeklySlotPattern":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            day_of_week=data["day_of_week"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            room_id=data["room_id"],
            service_id=data.get("service_id", ""),
            service_name=data.get("service_name", ""),
            capacity=data.get("capacity", 1),
            instructor_staff_id=data.get("instructor_staff_id"),
            price=data.get("price", 0.0),
        )


@dataclass
class ScheduleTemplate:
    """A weekly recurring definition that generates static slots."""

    id: str
    name: str
    branch_id: str
    active_from: date
    weekly_pattern: List[WeeklySlotPattern] = field(default_factory=list)
    active_until: Optional[date] = None
    is_active: bool = False

    # Metadata
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        if not self.id:
            self.id = f"template_{uuid.uuid4().hex[:12]}"

    def get_pattern(self, pattern_id: str) -> Optional[WeeklySlotPattern]:
        """Get a pattern entry by ID."""
        for pattern in self.weekly_pattern:
            if pattern.id == pattern_id:
                return pattern
        return None

    def patterns_for(self, day: DayOfWeek) -> List[WeeklySlotPattern]:
        """Pattern entries that recur on a weekday."""
        return [p for p in self.weekly_pattern if p.day_of_week == day]

    def covers(self, d: date) -> bool:
        """Check if a date lies within the template's active window."""
        if d < self.active_from:
            return False
        return self.active_until is None or d <= self.active_until

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "branch_id": self.branch_id,
            "active_from": self.active_from.isoformat(),
            "active_until": self.active_until.isoformat() if self.active_until else None,
            "is_active": self.is_active,
            "weekly_pattern": [p.to_dict() for p in self.weekly_pattern],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleTemplate":
        """Create from dictionary, rehydrating ISO date strings."""
        active_until = data.get("active_until")
        template = cls(
            id=data["id"],
            name=data.get("name", ""),
            branch_id=data["branch_id"],
            active_from=date.fromisoformat(data["active_from"][:10]),
            weekly_pattern=[WeeklySlotPattern.from_dict(p) for p in data.get("weekly_pattern", [])],
            active_until=date.fromisoformat(active_until[:10]) if active_until else None,
            is_active=bool(data.get("is_active", False)),
        )
        if data.get("created_at"):
            template.created_at = datetime.fromisoformat(data["created_at"])
        if data.get("updated_at"):
            template.updated_at = datetime.fromisoformat(data["updated_at"])
        return template


_SLOT_NAMESPACE = uuid.UUID("5b1f3c1e-8d5a-4c7e-9a43-2f6d9e0c7b21")


class SlotKey(NamedTuple):
    """Natural identity of a dated slot occurrence."""

    template_id: str
    pattern_id: str
    date: date

    @property
    def slot_id(self) -> str:
        """Stable string ID derived from the three natural keys."""
        name = json.dumps([self.template_id, self.pattern_id, self.date.isoformat()])
        return f"slot_{uuid.uuid5(_SLOT_NAMESPACE, name).hex[:18]}"


@dataclass
class StaticServiceSlot:
    """A materialized, dated occurrence of a weekly slot pattern."""

    template_id: str
    pattern_id: str
    date: date
    start_time: time
    end_time: time
    room_id: str
    capacity: int
    service_id: str = ""
    service_name: str = ""
    instructor_staff_id: Optional[str] = None
    price: float = 0.0
    branch_id: Optional[str] = None

    # Customization
    is_override: bool = False
    override_date: Optional[date] = None
    is_cancelled: bool = False

    def __post_init__(self):
        self.start_time = parse_time(self.start_time)
        self.end_time = parse_time(self.end_time)

    @property
    def key(self) -> SlotKey:
        return SlotKey(self.template_id, self.pattern_id, self.date)

    @property
    def id(self) -> str:
        return self.key.slot_id

    @property
    def day_of_week(self) -> DayOfWeek:
        return DayOfWeek.from_date(self.date)

    @property
    def time_range(self) -> TimeRange:
        """The occurrence as a datetime range."""
        return TimeRange(at(self.date, self.start_time), at(self.date, self.end_time))

    @classmethod
    def from_pattern(
        cls,
        template: ScheduleTemplate,
        pattern: WeeklySlotPattern,
        d: date,
    ) -> "StaticServiceSlot":
        """Synthesize an occurrence from a template pattern."""
        return cls(
            template_id=template.id,
            pattern_id=pattern.id,
            date=d,
            start_time=pattern.start_time,
            end_time=pattern.end_time,
            room_id=pattern.room_id,
            capacity=pattern.capacity,
            service_id=pattern.service_id,
            service_name=pattern.service_name,
            instructor_staff_id=pattern.instructor_staff_id,
            price=pattern.price,
            branch_id=template.branch_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "template_id": self.template_id,
            "pattern_id": self.pattern_id,
            "date": self.date.isoformat(),
            "day_of_week": self.day_of_week.value,
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "room_id": self.room_id,
            "capacity": self.capacity,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "instructor_staff_id": self.instructor_staff_id,
            "price": self.price,
            "branch_id": self.branch_id,
            "is_override": self.is_override,
            "override_date": self.override_date.isoformat() if self.override_date else None,
            "is_cancelled": self.is_cancelled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaticServiceSlot":
        """Create from dictionary, rehydrating ISO date strings."""
        override_date = data.get("override_date")
        return cls(
            template_id=data["template_id"],
            pattern_id=data["pattern_id"],
            date=date.fromisoformat(data["date"][:10]),
            start_time=data["start_time"],
            end_time=data["end_time"],
            room_id=data["room_id"],
            capacity=int(data["capacity"]),
            service_id=data.get("service_id", ""),
            service_name=data.get("service_name", ""),
            instructor_staff_id=data.get("instructor_staff_id"),
            price=data.get("price", 0.0),
            branch_id=data.get("branch_id"),
            is_override=bool(data.get("is_override", False)),
            override_date=date.fromisoformat(override_date[:10]) if override_date else None,
            is_cancelled=bool(data.get("is_cancelled", False)),
        )


# =============================================================================
# Calendar Event Types
# =============================================================================


@dataclass
class CalendarEvent:
    """A booking on the calendar."""

    id: str
    start: datetime
    end: datetime
    title: str = ""

    # Assignment
    staff_id: Optional[str] = None
    room_id: Optional[str] = None
    slot_id: Optional[str] = None
    branch_id: Optional[str] = None
    party_size: Optional[int] = 1

    # Status
    status: AppointmentStatus = AppointmentStatus.CONFIRMED
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    selection_method: SelectionMethod = SelectionMethod.BY_CLIENT
    starred: bool = False

    # Details
    service_name: str = ""
    customer_name: str = ""
    price: float = 0.0
    notes: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = f"evt_{uuid.uuid4().hex[:18]}"
        if self.party_size is None:
            self.party_size = 1
        self.status = AppointmentStatus(self.status)
        self.payment_status = PaymentStatus(self.payment_status)
        self.selection_method = SelectionMethod(self.selection_method)

    @property
    def range(self) -> TimeRange:
        return TimeRange(self.start, self.end)

    @property
    def is_cancelled(self) -> bool:
        """Check if the booking is cancelled."""
        return self.status == AppointmentStatus.CANCELLED

    @property
    def duration_minutes(self) -> int:
        """Get booking duration in minutes."""
        return self.range.duration_minutes

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "staff_id": self.staff_id,
            "room_id": self.room_id,
            "slot_id": self.slot_id,
            "branch_id": self.branch_id,
            "party_size": self.party_size,
            "status": self.status.value,
            "payment_status": self.payment_status.value,
            "selection_method": self.selection_method.value,
            "starred": self.starred,
            "service_name": self.service_name,
            "customer_name": self.customer_name,
            "price": self.price,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarEvent":
        """Create from dictionary."""
        fields = dict(data)
        fields["start"] = datetime.fromisoformat(fields["start"])
        fields["end"] = datetime.fromisoformat(fields["end"])
        return cls(**fields)


@dataclass(frozen=True)
class BookingProposal:
    """A booking the validator is asked to accept or reject."""

    start: datetime
    end: datetime
    staff_id: Optional[str] = None
    room_id: Optional[str] = None
    slot_id: Optional[str] = None
    party_size: int = 1

    @property
    def range(self) -> TimeRange:
        return TimeRange(self.start, self.end)

    @classmethod
    def from_event(cls, event: CalendarEvent) -> "BookingProposal":
        """Build a proposal from a calendar event."""
        return cls(
            start=event.start,
            end=event.end,
            staff_id=event.staff_id,
            room_id=event.room_id,
            slot_id=event.slot_id,
            party_size=event.party_size if event.party_size is not None else 1,
        )


# =============================================================================
# Exceptions
# =============================================================================


class SchedulingError(Exception):
    """Base exception for scheduling errors."""
    pass


class TemplateNotFoundError(SchedulingError):
    """Schedule template not found."""
    pass


class PatternNotFoundError(SchedulingError):
    """Weekly pattern entry not found in template."""
    pass


class SlotNotFoundError(SchedulingError):
    """Static slot occurrence not found."""
    pass


class InvalidSlotUpdateError(SchedulingError):
    """Slot override carries an unknown field or an invalid value."""
    pass


class PersistenceError(SchedulingError):
    """Saving a state blob failed."""
    pass


# =============================================================================
# Exports
# =============================================================================


__all__ = [
    # Enums
    "AppointmentStatus",
    "PaymentStatus",
    "SelectionMethod",
    "SchedulingMode",
    "DayOfWeek",
    "CalendarView",
    "DisplayMode",
    "ColorScheme",
    "SpecialDayType",
    "TimeOffReason",
    "ConflictCheck",
    "ALL_CHECKS",
    # Results
    "ValidationResult",
    "SlotAvailability",
    "StaffAvailability",
    "UnavailableWindow",
    # Shift types
    "BreakRange",
    "Shift",
    "DaySchedule",
    "ShiftOverride",
    "EffectiveShifts",
    "SpecialDayRule",
    # Resource types
    "Staff",
    "Room",
    # Unavailability types
    "TimeOff",
    "TimeReservation",
    # Template and slot types
    "WeeklySlotPattern",
    "ScheduleTemplate",
    "SlotKey",
    "StaticServiceSlot",
    # Calendar types
    "CalendarEvent",
    "BookingProposal",
    # Exceptions
    "SchedulingError",
    "TemplateNotFoundError",
    "PatternNotFoundError",
    "SlotNotFoundError",
    "InvalidSlotUpdateError",
    "PersistenceError",
]
