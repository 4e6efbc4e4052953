"""
Bundled sample dataset.

Used when no persisted state exists, and for demos. Event and template dates
are placed relative to the date passed in so the calendar is never empty.
"""

from datetime import date, time, timedelta
from typing import Dict, List, Optional, Tuple

from .availability import BusinessHours, StaffManager
from .base import (
    AppointmentStatus,
    CalendarEvent,
    DayOfWeek,
    DaySchedule,
    PaymentStatus,
    Room,
    SchedulingMode,
    ScheduleTemplate,
    SelectionMethod,
    Shift,
    Staff,
    WeeklySlotPattern,
)
from .intervals import at


DEFAULT_BRANCH_ID = "1-1"

# (open, close) per weekday; None is closed
_BRANCH_HOURS: Dict[DayOfWeek, Optional[Tuple[str, str]]] = {
    DayOfWeek.SUNDAY: ("10:00", "17:00"),
    DayOfWeek.MONDAY: ("09:00", "19:00"),
    DayOfWeek.TUESDAY: ("09:00", "19:00"),
    DayOfWeek.WEDNESDAY: None,
    DayOfWeek.THURSDAY: ("09:00", "20:00"),
    DayOfWeek.FRIDAY: ("09:00", "20:00"),
    DayOfWeek.SATURDAY: ("08:00", "18:00"),
}


def default_branch_hours() -> BusinessHours:
    """Weekly business hours of the sample branch."""
    hours = {}
    for day, span in _BRANCH_HOURS.items():
        if span is None:
            hours[day] = DaySchedule(day=day, is_open=False)
        else:
            hours[day] = DaySchedule(day=day, shifts=[Shift(start=span[0], end=span[1])])
    return hours


def _working_week(*days: DayOfWeek) -> Dict[DayOfWeek, DaySchedule]:
    # Open days inherit the branch hours; the rest are off
    return {
        day: DaySchedule(day=day, is_open=day in days)
        for day in DayOfWeek
    }


def default_staff_manager() -> StaffManager:
    """Staff, rooms and hours of the sample branch."""
    manager = StaffManager()
    manager.set_business_hours(DEFAULT_BRANCH_ID, default_branch_hours())

    weekdays = (
        DayOfWeek.MONDAY,
        DayOfWeek.TUESDAY,
        DayOfWeek.THURSDAY,
        DayOfWeek.FRIDAY,
        DayOfWeek.SATURDAY,
    )
    manager.add_staff(Staff(
        id="1",
        name="Emma Johnson",
        branch_id=DEFAULT_BRANCH_ID,
        title="Senior Stylist",
        max_concurrent_bookings=2,
        weekly_schedule=_working_week(*weekdays),
        color="#1976d2",
    ))
    manager.add_staff(Staff(
        id="2",
        name="Michael Chen",
        branch_id=DEFAULT_BRANCH_ID,
        title="Fitness Instructor",
        weekly_schedule=_working_week(*weekdays, DayOfWeek.SUNDAY),
        color="#388e3c",
    ))
    manager.add_staff(Staff(
        id="3",
        name="Sarah Williams",
        branch_id=DEFAULT_BRANCH_ID,
        title="Massage Therapist",
        weekly_schedule=_working_week(DayOfWeek.MONDAY, DayOfWeek.TUESDAY, DayOfWeek.FRIDAY),
        color="#f57c00",
    ))

    manager.add_room(Room(
        id="room-1-1-1",
        name="Studio A",
        branch_id=DEFAULT_BRANCH_ID,
        capacity=1,
        weekly_schedule=_working_week(*weekdays),
    ))
    manager.add_room(Room(
        id="room-1-1-2",
        name="Studio B",
        branch_id=DEFAULT_BRANCH_ID,
        capacity=15,
        scheduling_mode=SchedulingMode.STATIC,
        weekly_schedule=_working_week(*weekdays, DayOfWeek.SUNDAY),
        color="#FF6B6B",
    ))
    return manager


def default_templates(today: date) -> List[ScheduleTemplate]:
    """A fitness class template for the static room, inactive until enabled."""
    season_start = today - timedelta(days=today.weekday())
    return [
        ScheduleTemplate(
            id="template-1",
            name="Winter Fitness Schedule",
            branch_id=DEFAULT_BRANCH_ID,
            active_from=season_start,
            active_until=season_start + timedelta(weeks=12) - timedelta(days=1),
            is_active=False,
            weekly_pattern=[
                WeeklySlotPattern(
                    id="pattern-mon-1",
                    day_of_week=DayOfWeek.MONDAY,
                    start_time="09:00",
                    end_time="10:00",
                    room_id="room-1-1-2",
                    service_id="service-yoga",
                    service_name="Morning Yoga Class",
                    capacity=12,
                    instructor_staff_id="2",
                    price=25.0,
                ),
                WeeklySlotPattern(
                    id="pattern-tue-1",
                    day_of_week=DayOfWeek.TUESDAY,
                    start_time="18:00",
                    end_time="19:00",
                    room_id="room-1-1-2",
                    service_id="service-hiit",
                    service_name="HIIT Training",
                    capacity=15,
                    instructor_staff_id="2",
                    price=30.0,
                ),
                WeeklySlotPattern(
                    id="pattern-sat-1",
                    day_of_week=DayOfWeek.SATURDAY,
                    start_time="10:00",
                    end_time="11:00",
                    room_id="room-1-1-2",
                    service_id="service-pilates",
                    service_name="Weekend Pilates",
                    capacity=10,
                    instructor_staff_id="2",
                    price=28.0,
                ),
            ],
        ),
    ]


def _next(today: date, day: DayOfWeek) -> date:
    target = list(DayOfWeek).index(day)
    return today + timedelta(days=(target - today.weekday()) % 7)


def _event(event_id: str, d: date, start: str, end: str, **fields) -> CalendarEvent:
    return CalendarEvent(
        id=event_id,
        start=at(d, time.fromisoformat(start)),
        end=at(d, time.fromisoformat(end)),
        **fields,
    )


def default_events(today: date) -> List[CalendarEvent]:
    """Sample bookings on the coming Monday and Tuesday."""
    monday = _next(today, DayOfWeek.MONDAY)
    tuesday = _next(today, DayOfWeek.TUESDAY)
    return [
        _event(
            "event-1", monday, "10:00", "11:00",
            title="Haircut",
            staff_id="1",
            service_name="Haircut & Style",
            customer_name="Olivia Brown",
            price=45.0,
            payment_status=PaymentStatus.PAID,
        ),
        _event(
            "event-2", monday, "10:30", "11:30",
            title="Color Treatment",
            staff_id="1",
            service_name="Color Treatment",
            customer_name="Liam Davis",
            price=120.0,
            status=AppointmentStatus.PENDING,
            selection_method=SelectionMethod.AUTOMATICALLY,
        ),
        _event(
            "event-3", tuesday, "14:00", "15:00",
            title="Deep Tissue Massage",
            staff_id="3",
            room_id="room-1-1-1",
            service_name="Deep Tissue Massage",
            customer_name="Ava Wilson",
            price=80.0,
            status=AppointmentStatus.NEED_CONFIRM,
        ),
        _event(
            "event-4", tuesday, "16:00", "17:00",
            title="Personal Training",
            staff_id="2",
            service_name="Personal Training",
            customer_name="Noah Martinez",
            price=60.0,
            starred=True,
        ),
    ]


__all__ = [
    "DEFAULT_BRANCH_ID",
    "default_branch_hours",
    "default_staff_manager",
    "default_templates",
    "default_events",
]
