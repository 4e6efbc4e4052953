"""
Scheduling Module

This module provides the appointment scheduling and conflict-resolution
engine for salon and service-business bookings.

Features:
- Availability: Branch hours, weekly shift patterns, date overrides, special days
- Conflict Validation: Time off, reservations, slot capacity, staff concurrency
- Static Slots: Weekly templates expanded into dated, fixed-capacity slots
- Calendar Store: The single mutation surface, with persisted preferences

Example usage:

    from bookly_core.scheduling import (
        CalendarEvent,
        CalendarStore,
        DayOfWeek,
        DaySchedule,
        Shift,
        Staff,
        StaffManager,
    )
    from datetime import datetime, time

    # Register staff with a weekly pattern
    staff = StaffManager()
    staff.add_staff(Staff(
        id="stylist-1",
        name="Emma Johnson",
        branch_id="branch-1",
        max_concurrent_bookings=1,
    ))
    staff.set_weekly_schedule(
        "stylist-1",
        DaySchedule(
            day=DayOfWeek.MONDAY,
            shifts=[Shift(start=time(9, 0), end=time(17, 0))],
        ),
    )

    store = CalendarStore(staff)

    # Book an appointment
    result = store.create_event(CalendarEvent(
        id="",
        start=datetime(2025, 9, 1, 9, 0),
        end=datetime(2025, 9, 1, 10, 0),
        staff_id="stylist-1",
    ))

    # An overlapping booking is rejected with a reason
    result = store.create_event(CalendarEvent(
        id="",
        start=datetime(2025, 9, 1, 9, 30),
        end=datetime(2025, 9, 1, 10, 30),
        staff_id="stylist-1",
    ))
    assert not result
    print(store.last_action_error)
"""

from .availability import (
    AvailabilityResolver,
    StaffAvailabilityProvider,
    StaffManager,
    default_business_hours,
    expand_time_off,
)
from .base import (
    # Enums
    ALL_CHECKS,
    AppointmentStatus,
    CalendarView,
    ColorScheme,
    ConflictCheck,
    DayOfWeek,
    DisplayMode,
    PaymentStatus,
    SchedulingMode,
    SelectionMethod,
    SpecialDayType,
    TimeOffReason,
    # Results
    EffectiveShifts,
    SlotAvailability,
    StaffAvailability,
    UnavailableWindow,
    ValidationResult,
    # Types
    BookingProposal,
    BreakRange,
    CalendarEvent,
    DaySchedule,
    Room,
    ScheduleTemplate,
    Shift,
    ShiftOverride,
    SlotKey,
    SpecialDayRule,
    Staff,
    StaticServiceSlot,
    TimeOff,
    TimeReservation,
    WeeklySlotPattern,
    # Exceptions
    InvalidSlotUpdateError,
    PatternNotFoundError,
    PersistenceError,
    SchedulingError,
    SlotNotFoundError,
    TemplateNotFoundError,
)
from .filters import CalendarFilters, HighlightFilters, filter_events
from .intervals import (
    TimeRange,
    contains,
    duration_minutes,
    overlaps,
    validate_shifts,
)
from .persistence import InMemoryPersistence, JsonFilePersistence, PersistencePort
from .slots import SlotGenerator, validate_template
from .store import CalendarStore
from .validator import ConflictValidator


__all__ = [
    # Enums
    "ALL_CHECKS",
    "AppointmentStatus",
    "CalendarView",
    "ColorScheme",
    "ConflictCheck",
    "DayOfWeek",
    "DisplayMode",
    "PaymentStatus",
    "SchedulingMode",
    "SelectionMethod",
    "SpecialDayType",
    "TimeOffReason",
    # Results
    "EffectiveShifts",
    "SlotAvailability",
    "StaffAvailability",
    "UnavailableWindow",
    "ValidationResult",
    # Types
    "BookingProposal",
    "BreakRange",
    "CalendarEvent",
    "DaySchedule",
    "Room",
    "ScheduleTemplate",
    "Shift",
    "ShiftOverride",
    "SlotKey",
    "SpecialDayRule",
    "Staff",
    "StaticServiceSlot",
    "TimeOff",
    "TimeRange",
    "TimeReservation",
    "WeeklySlotPattern",
    # Exceptions
    "InvalidSlotUpdateError",
    "PatternNotFoundError",
    "PersistenceError",
    "SchedulingError",
    "SlotNotFoundError",
    "TemplateNotFoundError",
    # Primitives
    "overlaps",
    "contains",
    "duration_minutes",
    "validate_shifts",
    # Components
    "AvailabilityResolver",
    "StaffAvailabilityProvider",
    "StaffManager",
    "default_business_hours",
    "expand_time_off",
    "ConflictValidator",
    "SlotGenerator",
    "validate_template",
    "CalendarFilters",
    "HighlightFilters",
    "filter_events",
    "PersistencePort",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "CalendarStore",
]
