"""
Availability Module

Resolves the effective working shifts of staff members, rooms and branches
for a calendar date, and keeps the staff-management state the conflict
validator reads: staff, rooms, branch business hours, weekly patterns,
shift overrides, special-day rules, time off and time reservations.
"""

import dataclasses
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date, time, timedelta
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

import structlog

from .base import (
    DayOfWeek,
    DaySchedule,
    EffectiveShifts,
    Room,
    Shift,
    ShiftOverride,
    SpecialDayRule,
    SpecialDayType,
    Staff,
    TimeOff,
    TimeReservation,
    UnavailableWindow,
    ValidationResult,
)
from .intervals import TimeRange, at, iter_dates, validate_shifts


logger = structlog.get_logger(__name__)


Entity = Union[Staff, Room]
BusinessHours = Dict[DayOfWeek, DaySchedule]


# =============================================================================
# Provider Interface
# =============================================================================


class StaffAvailabilityProvider(ABC):
    """Read-only view of staff-management state consumed by the validator."""

    @abstractmethod
    def get_staff(self, staff_id: str) -> Optional[Staff]:
        """Get staff member by ID."""
        pass

    @abstractmethod
    def get_room(self, room_id: str) -> Optional[Room]:
        """Get room by ID."""
        pass

    @abstractmethod
    def get_time_off(self, staff_id: str) -> List[TimeOff]:
        """Get all time off records of a staff member."""
        pass

    @abstractmethod
    def get_reservations(
        self,
        staff_id: Optional[str] = None,
        room_id: Optional[str] = None,
    ) -> List[TimeReservation]:
        """Get reservations that block a staff member or a room."""
        pass

    @abstractmethod
    def get_shifts_for_date(self, entity_id: str, d: date) -> EffectiveShifts:
        """Get the effective shifts of an entity on a date."""
        pass


# =============================================================================
# Resolver
# =============================================================================


def default_business_hours() -> BusinessHours:
    """Monday to Friday 09:00-17:00, closed on weekends."""
    hours = {}
    for day in DayOfWeek:
        if day in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY):
            hours[day] = DaySchedule(day=day, is_open=False)
        else:
            hours[day] = DaySchedule(day=day, shifts=[Shift(start=time(9, 0), end=time(17, 0))])
    return hours


class AvailabilityResolver:
    """
    Merges the layers that decide where an entity can work on a date.

    Layers are applied in order, the later replacing the earlier:

    1. Branch business hours for the weekday
    2. The entity's weekly pattern for the weekday
    3. A date-specific shift override
    4. Active special-day rules covering the date and branch

    An entity with neither a weekly pattern entry nor an override for the
    date is unavailable. A weekly pattern entry that is open but lists no
    shifts of its own works the branch hours.
    """

    def __init__(
        self,
        lookup: Callable[[str], Optional[Entity]],
        business_hours: Dict[str, BusinessHours],
        overrides: Dict[Tuple[str, date], ShiftOverride],
        special_days: Dict[str, SpecialDayRule],
    ):
        self._lookup = lookup
        self._business_hours = business_hours
        self._overrides = overrides
        self._special_days = special_days

    def get_effective_shifts(self, entity_id: str, d: date) -> EffectiveShifts:
        """Resolve the shifts of a staff member, room or branch on a date."""
        day = DayOfWeek.from_date(d)
        entity = self._lookup(entity_id)

        if entity is None:
            if entity_id not in self._business_hours:
                return EffectiveShifts(is_available=False)
            branch_id = entity_id
            pattern = None
        else:
            branch_id = entity.branch_id
            pattern = entity.weekly_schedule.get(day)

        # 1. Branch baseline
        baseline = self._business_hours.get(branch_id, {}).get(day)
        is_open = bool(baseline and baseline.is_open)
        shifts = list(baseline.shifts) if is_open else []
        has_source = entity is None and baseline is not None

        # 2. Weekly pattern
        if pattern is not None:
            has_source = True
            is_open = pattern.is_open
            if not is_open:
                shifts = []
            elif pattern.shifts:
                shifts = list(pattern.shifts)

        # 3. Date override
        override = self._overrides.get((entity_id, d))
        if override is not None:
            has_source = True
            is_open = override.is_open
            shifts = list(override.shifts) if is_open else []

        if not has_source:
            return EffectiveShifts(is_available=False)

        # 4. Special days
        rules = sorted(
            (r for r in self._special_days.values() if r.applies_to(d, branch_id)),
            key=lambda r: r.start_date,
        )
        if any(r.closes for r in rules):
            return EffectiveShifts(is_available=False)
        for rule in rules:
            if rule.rule_type == SpecialDayType.CUSTOM:
                is_open = True
                shifts = list(rule.shifts)

        return EffectiveShifts(is_available=is_open and bool(shifts), shifts=shifts)


# =============================================================================
# Time Off Helpers
# =============================================================================


def normalize_all_day(rng: TimeRange) -> TimeRange:
    """Stretch a range to cover whole calendar days."""
    start = at(rng.start.date(), time.min)
    last = rng.end.date()
    if rng.end.time() == time.min and rng.end > rng.start:
        last = (rng.end - timedelta(microseconds=1)).date()
    return TimeRange(start, at(last, time.min) + timedelta(days=1))


def expand_time_off(time_off: TimeOff) -> List[TimeOff]:
    """
    Normalize and expand a time off request into stored records.

    ``all_day`` requests cover whole days. A ``repeat_until`` date expands
    the request into one record per day through that date, inclusive.
    """
    rng = normalize_all_day(time_off.range) if time_off.all_day else time_off.range
    first = dataclasses.replace(time_off, range=rng, repeat_until=None)
    records = [first]

    if time_off.repeat_until is None:
        return records

    start_day = rng.start.date()
    for d in iter_dates(start_day + timedelta(days=1), time_off.repeat_until):
        offset = d - start_day
        records.append(
            dataclasses.replace(
                first,
                id=f"{time_off.id}-{d.isoformat()}",
                range=TimeRange(rng.start + offset, rng.end + offset),
            )
        )
    return records


def time_off_label(time_off: TimeOff) -> str:
    """Human-readable reason of a time off record."""
    return time_off.reason.value.replace("_", " ").capitalize()


# =============================================================================
# Staff Manager
# =============================================================================


class StaffManager(StaffAvailabilityProvider):
    """In-memory staff-management state."""

    def __init__(self):
        self._staff: Dict[str, Staff] = {}
        self._rooms: Dict[str, Room] = {}
        self._business_hours: Dict[str, BusinessHours] = {}
        self._overrides: Dict[Tuple[str, date], ShiftOverride] = {}
        self._special_days: Dict[str, SpecialDayRule] = {}
        self._time_off: Dict[str, TimeOff] = {}
        self._time_off_by_staff: Dict[str, Set[str]] = defaultdict(set)
        self._reservations: Dict[str, TimeReservation] = {}

        self.resolver = AvailabilityResolver(
            lookup=self._get_entity,
            business_hours=self._business_hours,
            overrides=self._overrides,
            special_days=self._special_days,
        )

    def _get_entity(self, entity_id: str) -> Optional[Entity]:
        return self._staff.get(entity_id) or self._rooms.get(entity_id)

    # -------------------------------------------------------------------------
    # Staff and rooms
    # -------------------------------------------------------------------------

    def add_staff(self, staff: Staff) -> Staff:
        """Register a staff member."""
        self._staff[staff.id] = staff
        logger.debug("staff_added", staff_id=staff.id, branch_id=staff.branch_id)
        return staff

    def get_staff(self, staff_id: str) -> Optional[Staff]:
        return self._staff.get(staff_id)

    def list_staff(
        self,
        branch_id: Optional[str] = None,
        active_only: bool = True,
    ) -> List[Staff]:
        """List staff, optionally for one branch."""
        staff = [
            s for s in self._staff.values()
            if (branch_id is None or s.branch_id == branch_id)
            and (s.is_active or not active_only)
        ]
        return sorted(staff, key=lambda s: s.name)

    def add_room(self, room: Room) -> Room:
        """Register a room."""
        self._rooms[room.id] = room
        logger.debug("room_added", room_id=room.id, branch_id=room.branch_id)
        return room

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def list_rooms(self, branch_id: Optional[str] = None) -> List[Room]:
        """List rooms, optionally for one branch."""
        rooms = [r for r in self._rooms.values() if branch_id is None or r.branch_id == branch_id]
        return sorted(rooms, key=lambda r: r.name)

    # -------------------------------------------------------------------------
    # Hours and shifts
    # -------------------------------------------------------------------------

    def set_business_hours(self, branch_id: str, hours: BusinessHours) -> ValidationResult:
        """Replace a branch's weekly business hours."""
        for day_schedule in hours.values():
            errors = validate_shifts(day_schedule.shifts)
            if errors:
                return ValidationResult.reject(errors[0])

        self._business_hours[branch_id] = dict(hours)
        logger.info("business_hours_set", branch_id=branch_id)
        return ValidationResult.accept()

    def get_business_hours(self, branch_id: str) -> BusinessHours:
        """Get a branch's weekly business hours."""
        return dict(self._business_hours.get(branch_id, {}))

    def set_weekly_schedule(self, entity_id: str, schedule: DaySchedule) -> ValidationResult:
        """Replace one weekday of an entity's recurring shift pattern."""
        entity = self._get_entity(entity_id)
        if entity is None:
            return ValidationResult.reject(f"Staff member or room {entity_id} not found")

        errors = validate_shifts(schedule.shifts)
        if errors:
            return ValidationResult.reject(errors[0])

        entity.weekly_schedule[schedule.day] = schedule
        return ValidationResult.accept()

    def set_shift_override(self, override: ShiftOverride) -> ValidationResult:
        """Replace an entity's shifts on one date."""
        if self._get_entity(override.entity_id) is None:
            return ValidationResult.reject(f"Staff member or room {override.entity_id} not found")

        errors = validate_shifts(override.shifts)
        if errors:
            return ValidationResult.reject(errors[0])

        self._overrides[(override.entity_id, override.date)] = override
        logger.debug(
            "shift_override_set",
            entity_id=override.entity_id,
            date=override.date.isoformat(),
            shifts=len(override.shifts),
        )
        return ValidationResult.accept()

    def get_shift_override(self, entity_id: str, d: date) -> Optional[ShiftOverride]:
        return self._overrides.get((entity_id, d))

    def clear_shift_override(self, entity_id: str, d: date) -> bool:
        """Drop a date override, reverting to the weekly pattern."""
        return self._overrides.pop((entity_id, d), None) is not None

    def copy_shifts(
        self,
        entity_id: str,
        from_date: date,
        start: date,
        end: date,
    ) -> ValidationResult:
        """Copy the effective shifts of one date onto every date in a range."""
        if end < start:
            return ValidationResult.reject("End date must not be before start date")

        source = self.get_shifts_for_date(entity_id, from_date)
        targets = [d for d in iter_dates(start, end) if d != from_date]

        for d in targets:
            shifts = [
                dataclasses.replace(
                    s,
                    id="",
                    breaks=[dataclasses.replace(b, id="") for b in s.breaks],
                )
                for s in source.shifts
            ]
            result = self.set_shift_override(
                ShiftOverride(
                    entity_id=entity_id,
                    date=d,
                    is_open=source.is_available,
                    shifts=shifts,
                    reason="copy",
                )
            )
            if not result:
                return result

        logger.info(
            "shifts_copied",
            entity_id=entity_id,
            from_date=from_date.isoformat(),
            days=len(targets),
        )
        return ValidationResult.accept()

    def get_shifts_for_date(self, entity_id: str, d: date) -> EffectiveShifts:
        return self.resolver.get_effective_shifts(entity_id, d)

    # -------------------------------------------------------------------------
    # Special days
    # -------------------------------------------------------------------------

    def add_special_day(self, rule: SpecialDayRule) -> ValidationResult:
        """Add or replace a special-day rule."""
        if rule.end_date < rule.start_date:
            return ValidationResult.reject("End date must not be before start date")
        if rule.rule_type == SpecialDayType.CUSTOM:
            if not rule.shifts:
                return ValidationResult.reject("Custom hours need at least one shift")
            errors = validate_shifts(rule.shifts)
            if errors:
                return ValidationResult.reject(errors[0])

        self._special_days[rule.id] = rule
        logger.info(
            "special_day_set",
            rule_id=rule.id,
            rule_type=rule.rule_type.value,
            start_date=rule.start_date.isoformat(),
            end_date=rule.end_date.isoformat(),
        )
        return ValidationResult.accept()

    def remove_special_day(self, rule_id: str) -> bool:
        """Remove a special-day rule."""
        return self._special_days.pop(rule_id, None) is not None

    def list_special_days(self, branch_id: Optional[str] = None) -> List[SpecialDayRule]:
        """List special-day rules that apply to a branch."""
        rules = [
            r for r in self._special_days.values()
            if branch_id is None or r.branch_id in (None, branch_id)
        ]
        return sorted(rules, key=lambda r: r.start_date)

    # -------------------------------------------------------------------------
    # Time off
    # -------------------------------------------------------------------------

    def check_time_off(self, time_off: TimeOff) -> ValidationResult:
        """Input checks for a time off request."""
        if time_off.staff_id not in self._staff:
            return ValidationResult.reject(f"Staff member {time_off.staff_id} not found")
        rng = normalize_all_day(time_off.range) if time_off.all_day else time_off.range
        if not rng.is_valid:
            return ValidationResult.reject("End time must be after start time")
        if time_off.repeat_until is not None and time_off.repeat_until < time_off.range.start.date():
            return ValidationResult.reject("Repeat end must not be before the start date")
        return ValidationResult.accept()

    def create_time_off(self, time_off: TimeOff) -> ValidationResult:
        """Store a time off request, expanded into one record per day."""
        result = self.check_time_off(time_off)
        if not result:
            return result

        records = expand_time_off(time_off)
        for record in records:
            self._time_off[record.id] = record
            self._time_off_by_staff[record.staff_id].add(record.id)

        logger.info(
            "time_off_created",
            time_off_id=time_off.id,
            staff_id=time_off.staff_id,
            records=len(records),
        )
        return ValidationResult.accept()

    def update_time_off(self, time_off: TimeOff) -> ValidationResult:
        """Replace a single stored time off record."""
        prior = self._time_off.get(time_off.id)
        if prior is None:
            return ValidationResult.reject(f"Time off {time_off.id} not found")

        result = self.check_time_off(time_off)
        if not result:
            return result

        rng = normalize_all_day(time_off.range) if time_off.all_day else time_off.range
        record = dataclasses.replace(time_off, range=rng, repeat_until=None)
        self._time_off_by_staff[prior.staff_id].discard(prior.id)
        self._time_off[record.id] = record
        self._time_off_by_staff[record.staff_id].add(record.id)
        return ValidationResult.accept()

    def delete_time_off(self, time_off_id: str) -> bool:
        """Delete a time off record."""
        record = self._time_off.pop(time_off_id, None)
        if record is None:
            return False
        self._time_off_by_staff[record.staff_id].discard(time_off_id)
        logger.info("time_off_deleted", time_off_id=time_off_id, staff_id=record.staff_id)
        return True

    def toggle_approval(self, time_off_id: str) -> Optional[TimeOff]:
        """Flip the approval flag of a time off record."""
        record = self._time_off.get(time_off_id)
        if record is None:
            return None
        record.approved = not record.approved
        logger.info("time_off_approval_toggled", time_off_id=time_off_id, approved=record.approved)
        return record

    def get_time_off(self, staff_id: str) -> List[TimeOff]:
        records = [self._time_off[i] for i in self._time_off_by_staff.get(staff_id, set())]
        return sorted(records, key=lambda r: r.range.start)

    def list_time_off(self) -> List[TimeOff]:
        """List every time off record."""
        return sorted(self._time_off.values(), key=lambda r: r.range.start)

    # -------------------------------------------------------------------------
    # Reservations
    # -------------------------------------------------------------------------

    def check_reservation(self, reservation: TimeReservation) -> ValidationResult:
        """Input and reservation-vs-reservation checks."""
        if not reservation.range.is_valid:
            return ValidationResult.reject("End time must be after start time")
        if not reservation.staff_ids and not reservation.room_ids:
            return ValidationResult.reject("Select at least one staff member or room")

        for staff_id in reservation.staff_ids:
            if staff_id not in self._staff:
                return ValidationResult.reject(f"Staff member {staff_id} not found")
        for room_id in reservation.room_ids:
            if room_id not in self._rooms:
                return ValidationResult.reject(f"Room {room_id} not found")

        for other in self._reservations.values():
            if other.id == reservation.id:
                continue
            if other.shares_resource(reservation) and other.range.overlaps(reservation.range):
                return ValidationResult.reject(
                    f"Overlaps another reservation: {other.reason or other.id}"
                )
        return ValidationResult.accept()

    def create_time_reservation(self, reservation: TimeReservation) -> ValidationResult:
        """Store an ad-hoc reservation."""
        result = self.check_reservation(reservation)
        if not result:
            return result

        self._reservations[reservation.id] = reservation
        logger.info(
            "reservation_created",
            reservation_id=reservation.id,
            staff=len(reservation.staff_ids),
            rooms=len(reservation.room_ids),
        )
        return ValidationResult.accept()

    def update_time_reservation(self, reservation: TimeReservation) -> ValidationResult:
        """Replace an existing reservation."""
        if reservation.id not in self._reservations:
            return ValidationResult.reject(f"Reservation {reservation.id} not found")
        result = self.check_reservation(reservation)
        if not result:
            return result
        self._reservations[reservation.id] = reservation
        return ValidationResult.accept()

    def delete_time_reservation(self, reservation_id: str) -> bool:
        """Delete a reservation."""
        removed = self._reservations.pop(reservation_id, None) is not None
        if removed:
            logger.info("reservation_deleted", reservation_id=reservation_id)
        return removed

    def get_reservations(
        self,
        staff_id: Optional[str] = None,
        room_id: Optional[str] = None,
    ) -> List[TimeReservation]:
        if staff_id is None and room_id is None:
            reservations = list(self._reservations.values())
        else:
            reservations = [
                r for r in self._reservations.values()
                if r.involves(staff_id=staff_id, room_id=room_id)
            ]
        return sorted(reservations, key=lambda r: r.start)

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def get_staff_unavailability(self, staff_id: str, d: date) -> List[UnavailableWindow]:
        """Time off and reservation windows of a staff member, clipped to a day."""
        day = TimeRange.for_day(d)
        windows = []

        for record in self.get_time_off(staff_id):
            if record.range.overlaps(day):
                label = time_off_label(record)
                windows.append(
                    UnavailableWindow(
                        start=max(record.range.start, day.start),
                        end=min(record.range.end, day.end),
                        reason=f"{label}: {record.note}" if record.note else label,
                        kind="time_off",
                    )
                )

        for reservation in self.get_reservations(staff_id=staff_id):
            if reservation.range.overlaps(day):
                windows.append(
                    UnavailableWindow(
                        start=max(reservation.start, day.start),
                        end=min(reservation.end, day.end),
                        reason=reservation.reason,
                        kind="reservation",
                    )
                )

        return sorted(windows, key=lambda w: w.start)


__all__ = [
    "StaffAvailabilityProvider",
    "AvailabilityResolver",
    "StaffManager",
    "BusinessHours",
    "default_business_hours",
    "normalize_all_day",
    "expand_time_off",
    "time_off_label",
]
