"""Shared pytest fixtures for testing."""

from datetime import date, datetime

import pytest

from bookly_core.config import SchedulingSettings
from bookly_core.scheduling import (
    CalendarStore,
    DayOfWeek,
    DaySchedule,
    InMemoryPersistence,
    Room,
    SchedulingMode,
    ScheduleTemplate,
    Staff,
    StaffManager,
    WeeklySlotPattern,
    default_business_hours,
)


# Monday
NOW = datetime(2025, 9, 1, 8, 0)
MONDAY = date(2025, 9, 1)
TUESDAY = date(2025, 9, 2)
SATURDAY = date(2025, 9, 6)


def weekdays_open():
    """Weekly pattern open Monday to Friday, working the branch hours."""
    return {
        day: DaySchedule(day=day, is_open=day not in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY))
        for day in DayOfWeek
    }


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings() -> SchedulingSettings:
    """Test settings with a short generation horizon."""
    return SchedulingSettings(
        storage_namespace="test",
        generation_horizon_days=30,
        log_level="debug",
    )


@pytest.fixture
def clock():
    """Fixed clock at 08:00 on Monday 2025-09-01."""
    return lambda: NOW


# =============================================================================
# Staff Fixtures
# =============================================================================


@pytest.fixture
def staff_manager() -> StaffManager:
    """Branch b1 with two staff members and two rooms."""
    manager = StaffManager()
    manager.set_business_hours("b1", default_business_hours())

    manager.add_staff(Staff(
        id="s1",
        name="Ana Ruiz",
        branch_id="b1",
        max_concurrent_bookings=1,
        weekly_schedule=weekdays_open(),
    ))
    manager.add_staff(Staff(
        id="s2",
        name="Ben Okafor",
        branch_id="b1",
        max_concurrent_bookings=2,
        weekly_schedule=weekdays_open(),
    ))

    manager.add_room(Room(
        id="r1",
        name="Studio",
        branch_id="b1",
        capacity=10,
        scheduling_mode=SchedulingMode.STATIC,
    ))
    manager.add_room(Room(
        id="r2",
        name="Chair",
        branch_id="b1",
        capacity=1,
    ))
    return manager


# =============================================================================
# Template Fixtures
# =============================================================================


@pytest.fixture
def template() -> ScheduleTemplate:
    """Inactive template with a Monday 09:00-10:00 class of five places."""
    return ScheduleTemplate(
        id="tpl-1",
        name="Fitness",
        branch_id="b1",
        active_from=MONDAY,
        weekly_pattern=[
            WeeklySlotPattern(
                id="p-mon",
                day_of_week=DayOfWeek.MONDAY,
                start_time="09:00",
                end_time="10:00",
                room_id="r1",
                service_name="Yoga",
                capacity=5,
            ),
        ],
    )


@pytest.fixture
def class_template() -> ScheduleTemplate:
    """Inactive template with a Tuesday 10:00-11:00 class of ten places."""
    return ScheduleTemplate(
        id="tpl-2",
        name="Pilates",
        branch_id="b1",
        active_from=MONDAY,
        weekly_pattern=[
            WeeklySlotPattern(
                id="p-tue",
                day_of_week=DayOfWeek.TUESDAY,
                start_time="10:00",
                end_time="11:00",
                room_id="r1",
                service_name="Pilates",
                capacity=10,
            ),
        ],
    )


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def persistence() -> InMemoryPersistence:
    return InMemoryPersistence()


@pytest.fixture
def store(staff_manager, persistence, settings, clock) -> CalendarStore:
    """Empty calendar store over the test staff."""
    return CalendarStore(staff_manager, persistence, settings, clock)
