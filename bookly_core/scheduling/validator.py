"""
Conflict Validator Module

Decides whether a proposed booking may coexist with everything already on
the calendar. Checks short-circuit on the first failure, cheapest first:

1. Input: time range, selection, references, party size
2. Time off and reservations (plus working hours when enforced)
3. Static slot capacity
4. Dynamic staff and room concurrency

Validation is a pure read. Committing an accepted booking is the caller's job.
"""

from datetime import datetime
from typing import AbstractSet, Iterable, Mapping, Optional

import structlog

from .availability import StaffAvailabilityProvider, time_off_label
from .base import (
    ALL_CHECKS,
    BookingProposal,
    CalendarEvent,
    ConflictCheck,
    SlotAvailability,
    StaffAvailability,
    StaticServiceSlot,
    ValidationResult,
)
from .intervals import TimeRange


logger = structlog.get_logger(__name__)


# =============================================================================
# Occupancy Helpers
# =============================================================================


def _active(events: Iterable[CalendarEvent], exclude_event_id: Optional[str]):
    for event in events:
        if event.is_cancelled or event.id == exclude_event_id:
            continue
        yield event


def slot_occupancy(
    slot: StaticServiceSlot,
    events: Iterable[CalendarEvent],
    exclude_event_id: Optional[str] = None,
) -> int:
    """Sum of party sizes of live bookings on a slot's date."""
    return sum(
        event.party_size or 1
        for event in _active(events, exclude_event_id)
        if event.slot_id == slot.id and event.start.date() == slot.date
    )


def staff_concurrency(
    staff_id: str,
    rng: TimeRange,
    events: Iterable[CalendarEvent],
    exclude_event_id: Optional[str] = None,
) -> int:
    """Number of live bookings of a staff member overlapping a range."""
    return sum(
        1
        for event in _active(events, exclude_event_id)
        if event.staff_id == staff_id and event.range.overlaps(rng)
    )


def room_concurrency(
    room_id: str,
    rng: TimeRange,
    events: Iterable[CalendarEvent],
    exclude_event_id: Optional[str] = None,
) -> int:
    """Number of live room bookings (outside slots) overlapping a range."""
    return sum(
        1
        for event in _active(events, exclude_event_id)
        if event.room_id == room_id and event.slot_id is None and event.range.overlaps(rng)
    )


# =============================================================================
# Validator
# =============================================================================


class ConflictValidator:
    """Accepts or rejects booking proposals."""

    def __init__(
        self,
        provider: StaffAvailabilityProvider,
        time_off_requires_approval: bool = False,
        enforce_working_hours: bool = False,
    ):
        self.provider = provider
        self.time_off_requires_approval = time_off_requires_approval
        self.enforce_working_hours = enforce_working_hours

    def validate_booking(
        self,
        proposal: BookingProposal,
        events: Iterable[CalendarEvent],
        slots: Mapping[str, StaticServiceSlot],
        exclude_event_id: Optional[str] = None,
        checks: AbstractSet[ConflictCheck] = ALL_CHECKS,
    ) -> ValidationResult:
        """
        Validate a booking proposal.

        Args:
            proposal: The booking to check
            events: Current calendar events
            slots: Static slots by ID
            exclude_event_id: Event being edited, left out of its own counts
            checks: Conflict checks to run after the input checks

        Returns:
            Accept, or reject with a human-readable reason
        """
        events = list(events)
        slot = slots.get(proposal.slot_id) if proposal.slot_id else None

        result = self._check_input(proposal, slots)
        if result and ConflictCheck.TIME_OFF in checks:
            result = self._check_time_off(proposal, slot)
        if result and ConflictCheck.CAPACITY in checks and slot is not None:
            result = self._check_capacity(proposal, slot, events, exclude_event_id)
        if result and ConflictCheck.CONCURRENCY in checks and slot is None:
            result = self._check_concurrency(proposal, events, exclude_event_id)

        if not result:
            logger.debug(
                "booking_rejected",
                staff_id=proposal.staff_id,
                room_id=proposal.room_id,
                slot_id=proposal.slot_id,
                reason=result.reason,
            )
        return result

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def _check_input(
        self,
        proposal: BookingProposal,
        slots: Mapping[str, StaticServiceSlot],
    ) -> ValidationResult:
        if not proposal.range.is_valid:
            return ValidationResult.reject("End time must be after start time")

        if not (proposal.staff_id or proposal.room_id or proposal.slot_id):
            return ValidationResult.reject("Select a staff member, room, or slot")

        if proposal.staff_id and self.provider.get_staff(proposal.staff_id) is None:
            return ValidationResult.reject(f"Staff member {proposal.staff_id} not found")

        if proposal.room_id and self.provider.get_room(proposal.room_id) is None:
            return ValidationResult.reject(f"Room {proposal.room_id} not found")

        if proposal.slot_id:
            slot = slots.get(proposal.slot_id)
            if slot is None:
                return ValidationResult.reject(f"Slot {proposal.slot_id} not found")
            if slot.date != proposal.start.date():
                return ValidationResult.reject("Booking date does not match the slot date")

        if proposal.party_size is None or proposal.party_size < 1:
            return ValidationResult.reject("Party size must be at least 1")

        return ValidationResult.accept()

    def _check_time_off(
        self,
        proposal: BookingProposal,
        slot: Optional[StaticServiceSlot],
    ) -> ValidationResult:
        rng = proposal.range
        staff_id = proposal.staff_id
        room_id = proposal.room_id or (slot.room_id if slot else None)

        if staff_id:
            for record in self.provider.get_time_off(staff_id):
                if self.time_off_requires_approval and not record.approved:
                    continue
                if record.range.overlaps(rng):
                    return ValidationResult.reject(
                        f"Staff member has time off ({time_off_label(record)}) during this time"
                    )

            for reservation in self.provider.get_reservations(staff_id=staff_id):
                if reservation.range.overlaps(rng):
                    return ValidationResult.reject(f"Time is reserved for: {reservation.reason}")

        if room_id:
            for reservation in self.provider.get_reservations(room_id=room_id):
                if reservation.range.overlaps(rng):
                    return ValidationResult.reject(f"Room is reserved for: {reservation.reason}")

        if self.enforce_working_hours and staff_id and slot is None:
            return self._check_working_hours(staff_id, rng)

        return ValidationResult.accept()

    def _check_working_hours(self, staff_id: str, rng: TimeRange) -> ValidationResult:
        day = rng.start.date()
        effective = self.provider.get_shifts_for_date(staff_id, day)
        if not effective.is_available:
            return ValidationResult.reject("Staff member is not working on this day")

        for shift in effective.shifts:
            if not shift.range.on(day).contains(rng):
                continue
            for brk in shift.breaks:
                if brk.range.on(day).overlaps(rng):
                    return ValidationResult.reject("Overlaps a scheduled break")
            return ValidationResult.accept()

        return ValidationResult.reject("Outside of working hours")

    def _check_capacity(
        self,
        proposal: BookingProposal,
        slot: StaticServiceSlot,
        events: Iterable[CalendarEvent],
        exclude_event_id: Optional[str],
    ) -> ValidationResult:
        if slot.is_cancelled:
            return ValidationResult.reject("This slot has been cancelled")

        occupied = slot_occupancy(slot, events, exclude_event_id)
        if occupied + proposal.party_size > slot.capacity:
            remaining = max(slot.capacity - occupied, 0)
            return ValidationResult.reject(
                f"Not enough capacity: {remaining} of {slot.capacity} places remaining"
            )
        return ValidationResult.accept()

    def _check_concurrency(
        self,
        proposal: BookingProposal,
        events: Iterable[CalendarEvent],
        exclude_event_id: Optional[str],
    ) -> ValidationResult:
        rng = proposal.range

        if proposal.staff_id:
            staff = self.provider.get_staff(proposal.staff_id)
            count = staff_concurrency(proposal.staff_id, rng, events, exclude_event_id)
            if count >= staff.max_concurrent_bookings:
                return ValidationResult.reject(
                    f"Staff member already has {count} of {staff.max_concurrent_bookings} "
                    f"concurrent bookings at this time"
                )

        if proposal.room_id:
            room = self.provider.get_room(proposal.room_id)
            count = room_concurrency(proposal.room_id, rng, events, exclude_event_id)
            if count >= room.capacity:
                return ValidationResult.reject(
                    f"Room already has {count} of {room.capacity} concurrent bookings at this time"
                )

        return ValidationResult.accept()

    # -------------------------------------------------------------------------
    # Availability queries
    # -------------------------------------------------------------------------

    def slot_availability(
        self,
        slot: StaticServiceSlot,
        events: Iterable[CalendarEvent],
    ) -> SlotAvailability:
        """Remaining capacity of a slot."""
        if slot.is_cancelled:
            return SlotAvailability(available=False, remaining_capacity=0, total=slot.capacity)
        remaining = max(slot.capacity - slot_occupancy(slot, events), 0)
        return SlotAvailability(
            available=remaining > 0,
            remaining_capacity=remaining,
            total=slot.capacity,
        )

    def staff_availability(
        self,
        staff_id: str,
        start: datetime,
        end: datetime,
        events: Iterable[CalendarEvent],
        exclude_event_id: Optional[str] = None,
    ) -> StaffAvailability:
        """Concurrent booking load of a staff member over a range."""
        staff = self.provider.get_staff(staff_id)
        if staff is None:
            return StaffAvailability(available=False, current_count=0, max_allowed=0)
        count = staff_concurrency(staff_id, TimeRange(start, end), events, exclude_event_id)
        return StaffAvailability(
            available=count < staff.max_concurrent_bookings,
            current_count=count,
            max_allowed=staff.max_concurrent_bookings,
        )


__all__ = [
    "ConflictValidator",
    "slot_occupancy",
    "staff_concurrency",
    "room_concurrency",
]
