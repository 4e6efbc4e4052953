"""Unit tests for the conflict validator."""

import pytest
from datetime import date, datetime


MONDAY = date(2025, 9, 1)


def at_hour(hour, minute=0, day=1):
    return datetime(2025, 9, day, hour, minute)


def make_slot(capacity=5, d=MONDAY, is_cancelled=False):
    from bookly_core.scheduling import StaticServiceSlot

    return StaticServiceSlot(
        template_id="tpl-1",
        pattern_id="p-mon",
        date=d,
        start_time="09:00",
        end_time="10:00",
        room_id="r1",
        capacity=capacity,
        is_cancelled=is_cancelled,
    )


def make_event(start, end, **fields):
    from bookly_core.scheduling import CalendarEvent

    return CalendarEvent(id=fields.pop("id", ""), start=start, end=end, **fields)


@pytest.fixture
def validator(staff_manager):
    from bookly_core.scheduling import ConflictValidator

    return ConflictValidator(staff_manager)


class TestInputChecks:
    """Tests for input validation, run before any conflict check."""

    def test_reversed_range(self, validator):
        """Test end must be after start."""
        from bookly_core.scheduling import BookingProposal

        result = validator.validate_booking(
            BookingProposal(start=at_hour(10), end=at_hour(9), staff_id="s1"),
            events=[],
            slots={},
        )

        assert result.ok is False
        assert result.reason == "End time must be after start time"

    def test_time_checked_before_selection(self, validator):
        """Test the time range is the first check."""
        from bookly_core.scheduling import BookingProposal

        result = validator.validate_booking(
            BookingProposal(start=at_hour(10), end=at_hour(10)),
            events=[],
            slots={},
        )

        assert result.reason == "End time must be after start time"

    def test_missing_selection(self, validator):
        """Test a proposal needs staff, room, or slot."""
        from bookly_core.scheduling import BookingProposal

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10)),
            events=[],
            slots={},
        )

        assert result.reason == "Select a staff member, room, or slot"

    def test_unknown_staff(self, validator):
        """Test referenced staff must exist."""
        from bookly_core.scheduling import BookingProposal

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), staff_id="ghost"),
            events=[],
            slots={},
        )

        assert result.reason == "Staff member ghost not found"

    def test_unknown_slot(self, validator):
        """Test referenced slot must exist."""
        from bookly_core.scheduling import BookingProposal

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id="slot_missing"),
            events=[],
            slots={},
        )

        assert result.reason == "Slot slot_missing not found"

    def test_slot_date_mismatch(self, validator):
        """Test a booking must fall on its slot's date."""
        from bookly_core.scheduling import BookingProposal

        slot = make_slot()
        result = validator.validate_booking(
            BookingProposal(start=at_hour(9, day=2), end=at_hour(10, day=2), slot_id=slot.id),
            events=[],
            slots={slot.id: slot},
        )

        assert result.reason == "Booking date does not match the slot date"

    def test_party_size(self, validator):
        """Test party size must be positive."""
        from bookly_core.scheduling import BookingProposal

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), staff_id="s1", party_size=0),
            events=[],
            slots={},
        )

        assert result.reason == "Party size must be at least 1"


class TestTimeOffChecks:
    """Tests for time off and reservation conflicts."""

    def test_time_off_overlap(self, staff_manager, validator):
        """Test time off blocks bookings of that staff member."""
        from bookly_core.scheduling import BookingProposal, TimeOff, TimeOffReason, TimeRange

        staff_manager.create_time_off(TimeOff(
            id="off-1",
            staff_id="s1",
            range=TimeRange(at_hour(9), at_hour(12)),
            reason=TimeOffReason.VACATION,
        ))

        result = validator.validate_booking(
            BookingProposal(start=at_hour(11), end=at_hour(13), staff_id="s1"),
            events=[],
            slots={},
        )

        assert result.ok is False
        assert result.reason == "Staff member has time off (Vacation) during this time"

    def test_time_off_of_other_staff(self, staff_manager, validator):
        """Test time off only blocks its own staff member."""
        from bookly_core.scheduling import BookingProposal, TimeOff, TimeRange

        staff_manager.create_time_off(TimeOff(
            id="off-1",
            staff_id="s2",
            range=TimeRange(at_hour(9), at_hour(12)),
        ))

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), staff_id="s1"),
            events=[],
            slots={},
        )

        assert result.ok is True

    def test_unapproved_time_off_when_approval_required(self, staff_manager):
        """Test only approved time off blocks when approval is required."""
        from bookly_core.scheduling import BookingProposal, ConflictValidator, TimeOff, TimeRange

        staff_manager.create_time_off(TimeOff(
            id="off-1",
            staff_id="s1",
            range=TimeRange(at_hour(9), at_hour(12)),
        ))
        validator = ConflictValidator(staff_manager, time_off_requires_approval=True)
        proposal = BookingProposal(start=at_hour(9), end=at_hour(10), staff_id="s1")

        assert validator.validate_booking(proposal, [], {}).ok is True

        staff_manager.toggle_approval("off-1")

        assert validator.validate_booking(proposal, [], {}).ok is False

    def test_staff_reservation(self, staff_manager, validator):
        """Test reservations listing the staff member block bookings."""
        from bookly_core.scheduling import BookingProposal, TimeReservation

        staff_manager.create_time_reservation(TimeReservation(
            id="",
            start=at_hour(13),
            end=at_hour(14),
            staff_ids=["s1", "s2"],
            reason="Training",
        ))

        result = validator.validate_booking(
            BookingProposal(start=at_hour(13, 30), end=at_hour(14, 30), staff_id="s2"),
            events=[],
            slots={},
        )

        assert result.reason == "Time is reserved for: Training"

    def test_room_reservation_blocks_slot(self, staff_manager, validator):
        """Test a room reservation blocks slot bookings in that room."""
        from bookly_core.scheduling import BookingProposal, TimeReservation

        staff_manager.create_time_reservation(TimeReservation(
            id="",
            start=at_hour(9),
            end=at_hour(10),
            room_ids=["r1"],
            reason="Deep clean",
        ))
        slot = make_slot()

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id),
            events=[],
            slots={slot.id: slot},
        )

        assert result.reason == "Room is reserved for: Deep clean"

    def test_time_off_checked_before_capacity(self, staff_manager, validator):
        """Test time off rejects even when the slot is full."""
        from bookly_core.scheduling import BookingProposal, TimeOff, TimeRange

        staff_manager.create_time_off(TimeOff(
            id="off-1",
            staff_id="s1",
            range=TimeRange(at_hour(0), at_hour(0, day=2)),
        ))
        slot = make_slot(capacity=1)
        events = [make_event(at_hour(9), at_hour(10), slot_id=slot.id)]

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id, staff_id="s1"),
            events=events,
            slots={slot.id: slot},
        )

        assert result.reason.startswith("Staff member has time off")


class TestWorkingHours:
    """Tests for the optional working-hours bound."""

    @pytest.fixture
    def strict(self, staff_manager):
        from bookly_core.scheduling import ConflictValidator

        return ConflictValidator(staff_manager, enforce_working_hours=True)

    def test_inside_shift(self, strict):
        """Test a booking inside the shift."""
        from bookly_core.scheduling import BookingProposal

        result = strict.validate_booking(
            BookingProposal(start=at_hour(10), end=at_hour(11), staff_id="s1"), [], {}
        )

        assert result.ok is True

    def test_outside_shift(self, strict):
        """Test a booking starting before the shift."""
        from bookly_core.scheduling import BookingProposal

        result = strict.validate_booking(
            BookingProposal(start=at_hour(8), end=at_hour(9, 30), staff_id="s1"), [], {}
        )

        assert result.reason == "Outside of working hours"

    def test_day_off(self, strict):
        """Test a booking on a closed day."""
        from bookly_core.scheduling import BookingProposal

        result = strict.validate_booking(
            BookingProposal(start=at_hour(10, day=6), end=at_hour(11, day=6), staff_id="s1"), [], {}
        )

        assert result.reason == "Staff member is not working on this day"

    def test_break(self, staff_manager, strict):
        """Test a booking overlapping a break."""
        from bookly_core.scheduling import BookingProposal, BreakRange, DayOfWeek, DaySchedule, Shift

        staff_manager.set_weekly_schedule("s1", DaySchedule(
            day=DayOfWeek.MONDAY,
            shifts=[Shift(start="09:00", end="17:00", breaks=[BreakRange(start="12:00", end="13:00")])],
        ))

        result = strict.validate_booking(
            BookingProposal(start=at_hour(12, 30), end=at_hour(13, 30), staff_id="s1"), [], {}
        )

        assert result.reason == "Overlaps a scheduled break"


class TestCapacity:
    """Tests for static slot capacity."""

    def test_capacity_counts_party_sizes(self, validator):
        """Test occupied capacity sums party sizes."""
        from bookly_core.scheduling import BookingProposal

        slot = make_slot(capacity=5)
        events = [
            make_event(at_hour(9), at_hour(10), slot_id=slot.id, party_size=2),
            make_event(at_hour(9), at_hour(10), slot_id=slot.id, party_size=2),
        ]

        ok = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id, party_size=1),
            events,
            {slot.id: slot},
        )
        full = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id, party_size=2),
            events,
            {slot.id: slot},
        )

        assert ok.ok is True
        assert full.reason == "Not enough capacity: 1 of 5 places remaining"

    def test_cancelled_bookings_free_capacity(self, validator):
        """Test cancelled bookings do not occupy places."""
        from bookly_core.scheduling import AppointmentStatus, BookingProposal

        slot = make_slot(capacity=1)
        events = [
            make_event(at_hour(9), at_hour(10), slot_id=slot.id, status=AppointmentStatus.CANCELLED),
        ]

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id),
            events,
            {slot.id: slot},
        )

        assert result.ok is True

    def test_exclude_event(self, validator):
        """Test the edited event does not count against itself."""
        from bookly_core.scheduling import BookingProposal

        slot = make_slot(capacity=3)
        events = [make_event(at_hour(9), at_hour(10), id="e1", slot_id=slot.id, party_size=3)]
        proposal = BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id, party_size=3)

        assert validator.validate_booking(proposal, events, {slot.id: slot}).ok is False
        assert validator.validate_booking(
            proposal, events, {slot.id: slot}, exclude_event_id="e1"
        ).ok is True

    def test_cancelled_slot(self, validator):
        """Test cancelled slots cannot be booked."""
        from bookly_core.scheduling import BookingProposal

        slot = make_slot(is_cancelled=True)

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id),
            [],
            {slot.id: slot},
        )

        assert result.reason == "This slot has been cancelled"

    def test_slot_booking_skips_concurrency(self, validator):
        """Test slot bookings with an instructor are bounded by capacity only."""
        from bookly_core.scheduling import BookingProposal

        slot = make_slot(capacity=5)
        events = [make_event(at_hour(9), at_hour(10), slot_id=slot.id, staff_id="s1")]

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), slot_id=slot.id, staff_id="s1"),
            events,
            {slot.id: slot},
        )

        assert result.ok is True


class TestConcurrency:
    """Tests for dynamic staff and room concurrency."""

    def test_concurrency_limit(self, validator):
        """Test a single-booking staff member rejects an overlap."""
        from bookly_core.scheduling import BookingProposal

        events = [make_event(at_hour(9), at_hour(10), staff_id="s1")]

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9, 30), end=at_hour(10, 30), staff_id="s1"),
            events,
            {},
        )

        assert result.reason == "Staff member already has 1 of 1 concurrent bookings at this time"

    def test_back_to_back_bookings(self, validator):
        """Test adjacent bookings do not conflict."""
        from bookly_core.scheduling import BookingProposal

        events = [make_event(at_hour(9), at_hour(10), staff_id="s1")]

        result = validator.validate_booking(
            BookingProposal(start=at_hour(10), end=at_hour(11), staff_id="s1"), events, {}
        )

        assert result.ok is True

    def test_higher_limit(self, validator):
        """Test a staff member with two concurrent places."""
        from bookly_core.scheduling import BookingProposal

        events = [make_event(at_hour(9), at_hour(10), staff_id="s2")]
        proposal = BookingProposal(start=at_hour(9), end=at_hour(10), staff_id="s2")

        assert validator.validate_booking(proposal, events, {}).ok is True

        events.append(make_event(at_hour(9), at_hour(10), staff_id="s2"))
        assert validator.validate_booking(proposal, events, {}).reason == (
            "Staff member already has 2 of 2 concurrent bookings at this time"
        )

    def test_room_capacity(self, validator):
        """Test room-only bookings are bounded by room capacity."""
        from bookly_core.scheduling import BookingProposal

        events = [make_event(at_hour(9), at_hour(10), room_id="r2")]

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), room_id="r2"), events, {}
        )

        assert result.reason == "Room already has 1 of 1 concurrent bookings at this time"

    def test_checks_subset(self, validator):
        """Test skipped checks do not run."""
        from bookly_core.scheduling import BookingProposal, ConflictCheck

        events = [make_event(at_hour(9), at_hour(10), staff_id="s1")]

        result = validator.validate_booking(
            BookingProposal(start=at_hour(9), end=at_hour(10), staff_id="s1"),
            events,
            {},
            checks=frozenset({ConflictCheck.CAPACITY}),
        )

        assert result.ok is True


class TestAvailabilityQueries:
    """Tests for slot and staff availability queries."""

    def test_slot_availability(self, validator):
        """Test remaining capacity report."""
        slot = make_slot(capacity=5)
        events = [make_event(at_hour(9), at_hour(10), slot_id=slot.id, party_size=3)]

        availability = validator.slot_availability(slot, events)

        assert availability.available is True
        assert availability.remaining_capacity == 2
        assert availability.total == 5

    def test_staff_availability(self, validator):
        """Test concurrency report."""
        events = [make_event(at_hour(9), at_hour(10), staff_id="s2")]

        availability = validator.staff_availability("s2", at_hour(9), at_hour(10), events)

        assert availability.available is True
        assert availability.current_count == 1
        assert availability.max_allowed == 2
