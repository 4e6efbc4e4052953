"""
Calendar Store Module

The single mutation surface of the booking engine. Every change to events,
templates, slots, time off and reservations routes through the conflict
validator first; a rejection records ``last_action_error`` and leaves state
untouched. Durable preferences are written through a persistence port
after each accepted change.
"""

import dataclasses
import json
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

import structlog

from ..config import SchedulingSettings, get_settings
from .availability import StaffManager, expand_time_off
from .base import (
    ALL_CHECKS,
    BookingProposal,
    CalendarEvent,
    CalendarView,
    ColorScheme,
    ConflictCheck,
    DisplayMode,
    EffectiveShifts,
    PersistenceError,
    ScheduleTemplate,
    SchedulingError,
    SchedulingMode,
    SlotAvailability,
    StaffAvailability,
    StaticServiceSlot,
    TemplateNotFoundError,
    TimeOff,
    TimeReservation,
    ValidationResult,
)
from .filters import CalendarFilters, HighlightFilters, filter_events
from .persistence import InMemoryPersistence, JsonFilePersistence, PersistencePort
from .slots import SlotGenerator, validate_template
from .validator import ConflictValidator, slot_occupancy


logger = structlog.get_logger(__name__)


# Persisted preference names, stored under "{namespace}.calendar.{name}"
VIEW = "view"
DISPLAY_MODE = "display_mode"
COLOR_SCHEME = "color_scheme"
BRANCH_FILTERS = "branch_filters"
STAFF_FILTERS = "staff_filters"
HIGHLIGHTS = "highlights"
STARRED = "starred"
SCHEDULING_MODE = "scheduling_mode"
TEMPLATES = "templates"
SLOTS = "slots"


class CalendarStore:
    """
    Aggregate holding events, slots, templates and calendar preferences.

    Usage:
        store = CalendarStore(staff_manager)
        result = store.create_event(event)
        if not result:
            print(store.last_action_error)
    """

    def __init__(
        self,
        staff: StaffManager,
        persistence: Optional[PersistencePort] = None,
        settings: Optional[SchedulingSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings or get_settings()
        self.staff = staff
        self.persistence = persistence or self._default_persistence(self.settings)
        self.clock = clock

        self.validator = ConflictValidator(
            staff,
            time_off_requires_approval=self.settings.time_off_requires_approval,
            enforce_working_hours=self.settings.enforce_working_hours,
        )
        self.generator = SlotGenerator()

        self._events: List[CalendarEvent] = []
        self._slots: Dict[str, StaticServiceSlot] = {}
        self._templates: Dict[str, ScheduleTemplate] = {}
        self._starred: Set[str] = set()
        self._previous_staff_filters: Optional[Set[str]] = None

        self.view = CalendarView(self.settings.default_view)
        self.display_mode = DisplayMode.FULL
        self.color_scheme = ColorScheme.VIVID
        self.filters = CalendarFilters()
        self.highlights = HighlightFilters()
        self.scheduling_mode = SchedulingMode.DYNAMIC
        self.selected_event_id: Optional[str] = None
        self.last_action_error: Optional[str] = None

    @staticmethod
    def _default_persistence(settings: SchedulingSettings) -> PersistencePort:
        if settings.state_dir is not None:
            return JsonFilePersistence(settings.state_dir)
        return InMemoryPersistence()

    @classmethod
    def from_defaults(
        cls,
        persistence: Optional[PersistencePort] = None,
        settings: Optional[SchedulingSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "CalendarStore":
        """Build a store over the bundled sample dataset."""
        from .defaults import default_events, default_staff_manager

        store = cls(default_staff_manager(), persistence, settings, clock)
        store.load()
        for event in default_events(clock().date()):
            store.create_event(event)
        store.clear_error()
        return store

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def events(self) -> List[CalendarEvent]:
        """Current event list. Replaced, never mutated, on commit."""
        return self._events

    @property
    def slots(self) -> Dict[str, StaticServiceSlot]:
        return dict(self._slots)

    @property
    def starred_ids(self) -> Set[str]:
        return set(self._starred)

    def get_event(self, event_id: str) -> Optional[CalendarEvent]:
        """Get event by ID."""
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def get_slot(self, slot_id: str) -> Optional[StaticServiceSlot]:
        """Get slot by ID."""
        return self._slots.get(slot_id)

    def get_slots(
        self,
        room_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        include_cancelled: bool = False,
        template_id: Optional[str] = None,
    ) -> List[StaticServiceSlot]:
        """List slots, ordered by date and start time."""
        slots = []
        for slot in self._slots.values():
            if room_id is not None and slot.room_id != room_id:
                continue
            if template_id is not None and slot.template_id != template_id:
                continue
            if start is not None and slot.date < start:
                continue
            if end is not None and slot.date > end:
                continue
            if slot.is_cancelled and not include_cancelled:
                continue
            slots.append(slot)
        return sorted(slots, key=lambda s: (s.date, s.start_time, s.room_id))

    def get_template(self, template_id: str) -> Optional[ScheduleTemplate]:
        """Get template by ID."""
        return self._templates.get(template_id)

    def list_templates(self, branch_id: Optional[str] = None) -> List[ScheduleTemplate]:
        """List templates, optionally for one branch."""
        templates = [
            t for t in self._templates.values()
            if branch_id is None or t.branch_id == branch_id
        ]
        return sorted(templates, key=lambda t: t.name)

    # =========================================================================
    # Validation queries
    # =========================================================================

    def validate_booking(
        self,
        proposal: BookingProposal,
        exclude_id: Optional[str] = None,
    ) -> ValidationResult:
        """Check a proposal against the current calendar without committing."""
        return self.validator.validate_booking(
            proposal,
            self._events,
            self._slots,
            exclude_event_id=exclude_id,
        )

    def is_slot_available(self, slot_id: str, d: date) -> SlotAvailability:
        """Remaining capacity of a slot on a date."""
        slot = self._slots.get(slot_id)
        if slot is None:
            return SlotAvailability(available=False, remaining_capacity=0, total=0)
        if slot.date != d:
            return SlotAvailability(available=False, remaining_capacity=0, total=slot.capacity)
        return self.validator.slot_availability(slot, self._events)

    def is_staff_available_for_booking(
        self,
        staff_id: str,
        start: datetime,
        end: datetime,
        exclude_id: Optional[str] = None,
    ) -> StaffAvailability:
        """Concurrent booking load of a staff member over a range."""
        return self.validator.staff_availability(staff_id, start, end, self._events, exclude_id)

    def get_effective_shifts(self, entity_id: str, d: date) -> EffectiveShifts:
        """Effective working shifts of a staff member, room or branch."""
        return self.staff.get_shifts_for_date(entity_id, d)

    # =========================================================================
    # Events
    # =========================================================================

    def create_event(self, event: CalendarEvent) -> ValidationResult:
        """Validate and append an event."""
        if self.get_event(event.id) is not None:
            return self._reject("create_event", f"Event {event.id} already exists", event.id)

        event = self._with_branch(dataclasses.replace(event))
        checks = frozenset() if event.is_cancelled else ALL_CHECKS
        result = self.validator.validate_booking(
            BookingProposal.from_event(event),
            self._events,
            self._slots,
            checks=checks,
        )
        if not result:
            return self._reject("create_event", result.reason, event.id)

        self._events = self._events + [event]
        if event.starred:
            self._starred.add(event.id)
            self._persist_starred()
        logger.info(
            "event_created",
            event_id=event.id,
            staff_id=event.staff_id,
            slot_id=event.slot_id,
            start=event.start.isoformat(),
        )
        return result

    def update_event(self, event: CalendarEvent) -> ValidationResult:
        """
        Validate and replace an event.

        Only the checks whose inputs changed are re-run: staff, room or time
        changes run the time off and concurrency checks, slot or party size
        changes run the capacity check, and reopening a cancelled event runs
        everything. Input checks always run.
        """
        prior = self.get_event(event.id)
        if prior is None:
            return self._reject("update_event", f"Event {event.id} not found", event.id)

        event = self._with_branch(dataclasses.replace(event))
        result = self.validator.validate_booking(
            BookingProposal.from_event(event),
            self._events,
            self._slots,
            exclude_event_id=event.id,
            checks=self._changed_checks(prior, event),
        )
        if not result:
            return self._reject("update_event", result.reason, event.id)

        self._events = [event if e.id == event.id else e for e in self._events]
        logger.info("event_updated", event_id=event.id, status=event.status.value)
        return result

    @staticmethod
    def _changed_checks(prior: CalendarEvent, event: CalendarEvent) -> frozenset:
        if event.is_cancelled:
            return frozenset()
        if prior.is_cancelled:
            return ALL_CHECKS

        checks = set()
        if (
            prior.staff_id != event.staff_id
            or prior.room_id != event.room_id
            or prior.start != event.start
            or prior.end != event.end
        ):
            checks.update((ConflictCheck.TIME_OFF, ConflictCheck.CONCURRENCY))
        if prior.slot_id != event.slot_id:
            checks.update(ALL_CHECKS)
        elif prior.party_size != event.party_size:
            checks.add(ConflictCheck.CAPACITY)
        return frozenset(checks)

    def delete_event(self, event_id: str) -> bool:
        """Remove an event. Also clears it from the starred set and selection."""
        if self.get_event(event_id) is None:
            return False

        self._events = [e for e in self._events if e.id != event_id]
        if event_id in self._starred:
            self._starred.discard(event_id)
            self._persist_starred()
        if self.selected_event_id == event_id:
            self.selected_event_id = None
        logger.info("event_deleted", event_id=event_id)
        return True

    def _with_branch(self, event: CalendarEvent) -> CalendarEvent:
        if event.branch_id:
            return event
        staff = self.staff.get_staff(event.staff_id) if event.staff_id else None
        room = self.staff.get_room(event.room_id) if event.room_id else None
        slot = self._slots.get(event.slot_id) if event.slot_id else None
        for source in (staff, room, slot):
            if source is not None and source.branch_id:
                event.branch_id = source.branch_id
                break
        return event

    # =========================================================================
    # Time off and reservations
    # =========================================================================

    def create_time_off(self, time_off: TimeOff) -> ValidationResult:
        """Add time off unless it overlaps one of the staff member's bookings."""
        result = self.staff.check_time_off(time_off)
        if result and self._time_off_blocks(time_off):
            result = self._bookings_clear(
                expand_time_off(time_off),
                lambda e, record: e.staff_id == record.staff_id,
                "Time off overlaps an existing booking",
            )
        if result:
            result = self.staff.create_time_off(time_off)
        if not result:
            return self._reject("create_time_off", result.reason, time_off.id)
        return result

    def update_time_off(self, time_off: TimeOff) -> ValidationResult:
        """Replace a time off record unless it overlaps a booking."""
        result = self.staff.check_time_off(time_off)
        if result and self._time_off_blocks(time_off):
            result = self._bookings_clear(
                expand_time_off(dataclasses.replace(time_off, repeat_until=None)),
                lambda e, record: e.staff_id == record.staff_id,
                "Time off overlaps an existing booking",
            )
        if result:
            result = self.staff.update_time_off(time_off)
        if not result:
            return self._reject("update_time_off", result.reason, time_off.id)
        return result

    def delete_time_off(self, time_off_id: str) -> bool:
        return self.staff.delete_time_off(time_off_id)

    def toggle_time_off_approval(self, time_off_id: str) -> ValidationResult:
        """Approve or unapprove time off. Approving must not hide a booking."""
        record = next((r for r in self.staff.list_time_off() if r.id == time_off_id), None)
        if record is None:
            return self._reject("toggle_time_off_approval", f"Time off {time_off_id} not found", time_off_id)

        if self.settings.time_off_requires_approval and not record.approved:
            result = self._bookings_clear(
                [record],
                lambda e, r: e.staff_id == r.staff_id,
                "Time off overlaps an existing booking",
            )
            if not result:
                return self._reject("toggle_time_off_approval", result.reason, time_off_id)

        self.staff.toggle_approval(time_off_id)
        return ValidationResult.accept()

    def _time_off_blocks(self, time_off: TimeOff) -> bool:
        return time_off.approved or not self.settings.time_off_requires_approval

    def create_time_reservation(self, reservation: TimeReservation) -> ValidationResult:
        """Add a reservation unless it overlaps a booking of its staff or rooms."""
        return self._save_reservation(reservation, self.staff.create_time_reservation, "create_time_reservation")

    def update_time_reservation(self, reservation: TimeReservation) -> ValidationResult:
        """Replace a reservation unless it overlaps a booking of its staff or rooms."""
        return self._save_reservation(reservation, self.staff.update_time_reservation, "update_time_reservation")

    def delete_time_reservation(self, reservation_id: str) -> bool:
        return self.staff.delete_time_reservation(reservation_id)

    def _save_reservation(
        self,
        reservation: TimeReservation,
        save: Callable[[TimeReservation], ValidationResult],
        action: str,
    ) -> ValidationResult:
        result = self.staff.check_reservation(reservation)
        if result:
            result = self._bookings_clear(
                [reservation],
                lambda e, r: bool(
                    (e.staff_id and e.staff_id in r.staff_ids)
                    or (self._event_room(e) and self._event_room(e) in r.room_ids)
                ),
                "Reservation overlaps an existing booking",
            )
        if result:
            result = save(reservation)
        if not result:
            return self._reject(action, result.reason, reservation.id)
        return result

    def _event_room(self, event: CalendarEvent) -> Optional[str]:
        if event.room_id:
            return event.room_id
        slot = self._slots.get(event.slot_id) if event.slot_id else None
        return slot.room_id if slot else None

    def _bookings_clear(
        self,
        records: Iterable[Any],
        involves: Callable[[CalendarEvent, Any], bool],
        message: str,
    ) -> ValidationResult:
        for record in records:
            for event in self._events:
                if event.is_cancelled or not involves(event, record):
                    continue
                if event.range.overlaps(record.range):
                    return ValidationResult.reject(f"{message} ({event.title or event.id})")
        return ValidationResult.accept()

    # =========================================================================
    # Templates and slots
    # =========================================================================

    def add_template(self, template: ScheduleTemplate) -> ValidationResult:
        """Add a template, generating its slots when it is active."""
        if template.id in self._templates:
            return self._reject("add_template", f"Template {template.id} already exists", template.id)
        errors = validate_template(template)
        if errors:
            return self._reject("add_template", errors[0], template.id)

        self._templates[template.id] = template
        if template.is_active:
            self._generate_horizon(template)
            self._persist_slots()
        self._persist_templates()
        logger.info("template_added", template_id=template.id, patterns=len(template.weekly_pattern))
        return ValidationResult.accept()

    def update_template(self, template: ScheduleTemplate) -> ValidationResult:
        """
        Replace a template.

        Uncustomized slots of the template are regenerated; overridden and
        cancelled occurrences are kept.
        """
        prior = self._templates.get(template.id)
        if prior is None:
            return self._reject("update_template", f"Template {template.id} not found", template.id)
        errors = validate_template(template)
        if errors:
            return self._reject("update_template", errors[0], template.id)

        template.created_at = prior.created_at
        template.updated_at = self.clock()
        self._templates[template.id] = template

        if template.is_active:
            self._slots = {
                slot_id: slot for slot_id, slot in self._slots.items()
                if slot.template_id != template.id or slot.is_override or slot.is_cancelled
            }
            self._generate_horizon(template)
        else:
            self._remove_template_slots(template.id)
        self._persist_templates()
        self._persist_slots()
        logger.info("template_updated", template_id=template.id)
        return ValidationResult.accept()

    def generate_slots_from_template(
        self,
        template_id: str,
        start: date,
        end: date,
    ) -> List[StaticServiceSlot]:
        """Materialize a template's slots over a date range. Returns new slots."""
        template = self._templates.get(template_id)
        if template is None:
            self._reject("generate_slots_from_template", f"Template {template_id} not found", template_id)
            return []

        created = self.generator.generate_slots(template, start, end, self._slots)
        if created:
            self._slots.update((slot.id, slot) for slot in created)
            self._persist_slots()
        return created

    def override_slot(
        self,
        template_id: str,
        d: date,
        pattern_id: str,
        updates: Dict[str, Any],
    ) -> ValidationResult:
        """Customize one dated occurrence of a pattern."""
        try:
            template = self._require_template(template_id)
            slot = self.generator.override_slot(template, d, pattern_id, updates, self._slots)
        except SchedulingError as e:
            return self._reject("override_slot", str(e), template_id)

        occupied = slot_occupancy(slot, self._events)
        if slot.capacity < occupied:
            return self._reject(
                "override_slot",
                f"Capacity cannot drop below {occupied} booked places",
                slot.id,
            )

        self._slots[slot.id] = slot
        self._persist_slots()
        return ValidationResult.accept()

    def cancel_slot_occurrence(self, template_id: str, d: date, pattern_id: str) -> ValidationResult:
        """Cancel one dated occurrence. The slot stays addressable."""
        try:
            template = self._require_template(template_id)
            slot = self.generator.cancel_slot_occurrence(template, d, pattern_id, self._slots)
        except SchedulingError as e:
            return self._reject("cancel_slot_occurrence", str(e), template_id)

        self._slots[slot.id] = slot
        self._persist_slots()
        return ValidationResult.accept()

    def restore_slot_occurrence(self, template_id: str, d: date, pattern_id: str) -> ValidationResult:
        """Un-cancel one dated occurrence."""
        try:
            template = self._require_template(template_id)
            slot = self.generator.restore_slot_occurrence(template, d, pattern_id, self._slots)
        except SchedulingError as e:
            return self._reject("restore_slot_occurrence", str(e), template_id)

        self._slots[slot.id] = slot
        self._persist_slots()
        return ValidationResult.accept()

    def toggle_template_active(self, template_id: str) -> ValidationResult:
        """
        Activate or deactivate a template.

        Activation generates slots from ``active_from`` through
        ``active_until``, or the generation horizon for open-ended templates.
        Deactivation deletes every slot of the template.
        """
        template = self._templates.get(template_id)
        if template is None:
            return self._reject("toggle_template_active", f"Template {template_id} not found", template_id)

        template.is_active = not template.is_active
        template.updated_at = self.clock()

        if template.is_active:
            self._generate_horizon(template)
        else:
            self._remove_template_slots(template_id)

        self._persist_templates()
        self._persist_slots()
        logger.info("template_toggled", template_id=template_id, is_active=template.is_active)
        return ValidationResult.accept()

    def delete_template(self, template_id: str) -> ValidationResult:
        """Delete a template and all of its slots."""
        if self._templates.pop(template_id, None) is None:
            return self._reject("delete_template", f"Template {template_id} not found", template_id)

        self._remove_template_slots(template_id)
        self._persist_templates()
        self._persist_slots()
        logger.info("template_deleted", template_id=template_id)
        return ValidationResult.accept()

    def _require_template(self, template_id: str) -> ScheduleTemplate:
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template {template_id} not found")
        return template

    def _generate_horizon(self, template: ScheduleTemplate) -> List[StaticServiceSlot]:
        horizon = self.clock().date() + timedelta(days=self.settings.generation_horizon_days)
        end = template.active_until or horizon
        created = self.generator.generate_slots(template, template.active_from, end, self._slots)
        self._slots.update((slot.id, slot) for slot in created)
        return created

    def _remove_template_slots(self, template_id: str) -> None:
        before = len(self._slots)
        self._slots = {
            slot_id: slot for slot_id, slot in self._slots.items()
            if slot.template_id != template_id
        }
        logger.info("slots_removed", template_id=template_id, removed=before - len(self._slots))

    # =========================================================================
    # View and filters
    # =========================================================================

    def set_view(self, view: CalendarView) -> None:
        self.view = CalendarView(view)
        self._persist(VIEW, self.view.value)

    def set_display_mode(self, mode: DisplayMode) -> None:
        self.display_mode = DisplayMode(mode)
        self._persist(DISPLAY_MODE, self.display_mode.value)

    def set_color_scheme(self, scheme: ColorScheme) -> None:
        self.color_scheme = ColorScheme(scheme)
        self._persist(COLOR_SCHEME, self.color_scheme.value)

    def set_visible_date_range(self, start: Optional[date], end: Optional[date]) -> None:
        """Set the visible window. Not persisted."""
        self.filters.visible_start = start
        self.filters.visible_end = end

    def set_branch_filters(self, branch_ids: Iterable[str]) -> None:
        self.filters.branch_ids = set(branch_ids)
        self._persist(BRANCH_FILTERS, sorted(self.filters.branch_ids))

    def clear_branch_filters(self) -> None:
        self.set_branch_filters([])

    def set_staff_filters(self, staff_ids: Iterable[str]) -> None:
        self.filters.staff_ids = set(staff_ids)
        self._persist(STAFF_FILTERS, sorted(self.filters.staff_ids))

    def set_room_filters(self, room_ids: Iterable[str]) -> None:
        """Set the room inclusion set. Not persisted."""
        self.filters.room_ids = set(room_ids)

    def select_single_staff(self, staff_id: str) -> None:
        """Narrow the calendar to one staff member, remembering the prior filter."""
        if self._previous_staff_filters is None:
            self._previous_staff_filters = set(self.filters.staff_ids)
        self.set_staff_filters([staff_id])

    def go_back_to_all_staff(self) -> None:
        """Restore the staff filter saved by ``select_single_staff``."""
        previous = self._previous_staff_filters or set()
        self._previous_staff_filters = None
        self.set_staff_filters(previous)

    def set_highlights(self, highlights: HighlightFilters) -> None:
        self.highlights = highlights
        self._persist(HIGHLIGHTS, highlights.to_dict())

    def clear_highlights(self) -> None:
        self.set_highlights(HighlightFilters())

    def toggle_starred(self, event_id: str) -> bool:
        """Star or unstar an event. Returns the new starred state."""
        if event_id in self._starred:
            self._starred.discard(event_id)
            starred = False
        else:
            self._starred.add(event_id)
            starred = True
        self._persist_starred()
        return starred

    def select_event(self, event_id: Optional[str]) -> None:
        self.selected_event_id = event_id

    def set_scheduling_mode(self, mode: SchedulingMode) -> None:
        self.scheduling_mode = SchedulingMode(mode)
        self._persist(SCHEDULING_MODE, self.scheduling_mode.value)

    def clear_error(self) -> None:
        self.last_action_error = None

    def get_filtered_events(self) -> List[CalendarEvent]:
        """Events passing the visible window, inclusion sets and highlights."""
        return filter_events(
            self._events,
            self.filters,
            self.highlights,
            starred_ids=self._starred,
            staff_branches={s.id: s.branch_id for s in self.staff.list_staff(active_only=False)},
            room_branches={r.id: r.branch_id for r in self.staff.list_rooms()},
        )

    # =========================================================================
    # Persistence
    # =========================================================================

    def _key(self, name: str) -> str:
        return f"{self.settings.storage_namespace}.calendar.{name}"

    def _persist(self, name: str, value: Any) -> None:
        key = self._key(name)
        try:
            self.persistence.save(key, json.dumps(value))
        except (PersistenceError, TypeError, ValueError) as e:
            logger.warning("persist_failed", key=key, error=str(e))

    def _persist_starred(self) -> None:
        self._persist(STARRED, sorted(self._starred))

    def _persist_templates(self) -> None:
        self._persist(TEMPLATES, [t.to_dict() for t in self._templates.values()])

    def _persist_slots(self) -> None:
        self._persist(SLOTS, [s.to_dict() for s in self._slots.values()])

    def _restore(self, name: str, parse: Callable[[Any], Any], default: Callable[[], Any]) -> Any:
        key = self._key(name)
        try:
            raw = self.persistence.load(key)
        except PersistenceError as e:
            logger.warning("state_load_failed", key=key, error=str(e))
            return default()
        if raw is None:
            return default()
        try:
            return parse(json.loads(raw))
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("state_load_fallback", key=key, error=str(e))
            return default()

    def load(self) -> None:
        """
        Hydrate preferences, templates and slots from persistence.

        Every key falls back to its bundled default when missing or
        unparsable. Active templates are then extended to the generation
        horizon; stored overrides and cancellations win.
        """
        from .defaults import default_templates

        today = self.clock().date()

        self.view = self._restore(VIEW, CalendarView, lambda: CalendarView(self.settings.default_view))
        self.display_mode = self._restore(DISPLAY_MODE, DisplayMode, lambda: DisplayMode.FULL)
        self.color_scheme = self._restore(COLOR_SCHEME, ColorScheme, lambda: ColorScheme.VIVID)
        self.filters.branch_ids = self._restore(BRANCH_FILTERS, _string_set, set)
        self.filters.staff_ids = self._restore(STAFF_FILTERS, _string_set, set)
        self.highlights = self._restore(HIGHLIGHTS, HighlightFilters.from_dict, HighlightFilters)
        self._starred = self._restore(STARRED, _string_set, set)
        self.scheduling_mode = self._restore(SCHEDULING_MODE, SchedulingMode, lambda: SchedulingMode.DYNAMIC)

        templates = self._restore(
            TEMPLATES,
            lambda data: [ScheduleTemplate.from_dict(t) for t in data],
            lambda: default_templates(today),
        )
        self._templates = {t.id: t for t in templates}
        slots = self._restore(
            SLOTS,
            lambda data: [StaticServiceSlot.from_dict(s) for s in data],
            list,
        )
        self._slots = {s.id: s for s in slots if s.template_id in self._templates}

        for template in self._templates.values():
            if template.is_active:
                self._generate_horizon(template)

        logger.info(
            "calendar_loaded",
            namespace=self.settings.storage_namespace,
            templates=len(self._templates),
            slots=len(self._slots),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _reject(self, action: str, reason: str, target_id: Optional[str] = None) -> ValidationResult:
        self.last_action_error = reason
        logger.info("action_rejected", action=action, target_id=target_id, reason=reason)
        return ValidationResult.reject(reason)


def _string_set(data: Any) -> Set[str]:
    if not isinstance(data, list):
        raise TypeError(f"Expected a list, got {type(data).__name__}")
    return {str(v) for v in data}


__all__ = [
    "CalendarStore",
]
