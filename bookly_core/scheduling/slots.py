"""
Slot Generator Module

Expands weekly schedule templates into dated static slots, and records
per-date overrides and cancellations. A slot is identified by its
``SlotKey``; an existing slot under a key always wins over regeneration.

The generator never mutates the slot mapping it is given. It returns the
slots to store and leaves committing to the caller.
"""

import dataclasses
from datetime import date
from typing import Any, Dict, List, Mapping

import structlog

from .base import (
    DayOfWeek,
    InvalidSlotUpdateError,
    PatternNotFoundError,
    ScheduleTemplate,
    SlotKey,
    SlotNotFoundError,
    StaticServiceSlot,
    WeeklySlotPattern,
)
from .intervals import TimeRange, iter_dates


logger = structlog.get_logger(__name__)


OVERRIDABLE_FIELDS = frozenset({
    "start_time",
    "end_time",
    "room_id",
    "capacity",
    "service_id",
    "service_name",
    "instructor_staff_id",
    "price",
})


def validate_template(template: ScheduleTemplate) -> List[str]:
    """Check a template's active window and weekly pattern entries."""
    errors = []
    if template.active_until is not None and template.active_until < template.active_from:
        errors.append("Active until must not be before active from")

    seen = set()
    for i, pattern in enumerate(template.weekly_pattern, start=1):
        if pattern.id in seen:
            errors.append(f"Pattern {i}: Duplicate pattern id {pattern.id}")
        seen.add(pattern.id)
        if not TimeRange(pattern.start_time, pattern.end_time).is_valid:
            errors.append(f"Pattern {i}: End time must be after start time")
        if pattern.capacity < 1:
            errors.append(f"Pattern {i}: Capacity must be at least 1")
    return errors


class SlotGenerator:
    """Materializes and customizes static slot occurrences."""

    def generate_slots(
        self,
        template: ScheduleTemplate,
        range_start: date,
        range_end: date,
        existing: Mapping[str, StaticServiceSlot],
    ) -> List[StaticServiceSlot]:
        """
        Synthesize the slots of a template over an inclusive date range.

        The range is clamped to the template's active window. Keys that
        already have a slot are skipped, so repeated or overlapping calls
        are idempotent and never clobber overrides or cancellations.

        Returns:
            Newly synthesized slots only
        """
        start = max(range_start, template.active_from)
        end = range_end
        if template.active_until is not None:
            end = min(end, template.active_until)

        created = []
        for d in iter_dates(start, end):
            for pattern in template.patterns_for(DayOfWeek.from_date(d)):
                key = SlotKey(template.id, pattern.id, d)
                if key.slot_id in existing:
                    continue
                created.append(StaticServiceSlot.from_pattern(template, pattern, d))

        logger.info(
            "slots_generated",
            template_id=template.id,
            range_start=range_start.isoformat(),
            range_end=range_end.isoformat(),
            created=len(created),
        )
        return created

    def override_slot(
        self,
        template: ScheduleTemplate,
        d: date,
        pattern_id: str,
        updates: Dict[str, Any],
        existing: Mapping[str, StaticServiceSlot],
    ) -> StaticServiceSlot:
        """
        Merge updates into one dated occurrence.

        The occurrence is synthesized from its pattern when generation has
        not reached the date yet.

        Raises:
            PatternNotFoundError: The pattern is not part of the template
            InvalidSlotUpdateError: An update is unknown or invalid
        """
        unknown = set(updates) - OVERRIDABLE_FIELDS
        if unknown:
            raise InvalidSlotUpdateError(f"Cannot override slot fields: {', '.join(sorted(unknown))}")

        base = self._occurrence(template, d, pattern_id, existing)
        slot = dataclasses.replace(base, is_override=True, override_date=d, **updates)

        if not TimeRange(slot.start_time, slot.end_time).is_valid:
            raise InvalidSlotUpdateError("End time must be after start time")
        if slot.capacity < 1:
            raise InvalidSlotUpdateError("Capacity must be at least 1")

        logger.info(
            "slot_overridden",
            template_id=template.id,
            pattern_id=pattern_id,
            date=d.isoformat(),
            fields=sorted(updates),
        )
        return slot

    def cancel_slot_occurrence(
        self,
        template: ScheduleTemplate,
        d: date,
        pattern_id: str,
        existing: Mapping[str, StaticServiceSlot],
    ) -> StaticServiceSlot:
        """Flag one dated occurrence as cancelled, synthesizing it if needed."""
        base = self._occurrence(template, d, pattern_id, existing)
        logger.info(
            "slot_cancelled",
            template_id=template.id,
            pattern_id=pattern_id,
            date=d.isoformat(),
        )
        return dataclasses.replace(base, is_cancelled=True)

    def restore_slot_occurrence(
        self,
        template: ScheduleTemplate,
        d: date,
        pattern_id: str,
        existing: Mapping[str, StaticServiceSlot],
    ) -> StaticServiceSlot:
        """
        Clear the cancelled flag of a stored occurrence.

        Raises:
            SlotNotFoundError: No occurrence is stored under the key
        """
        key = SlotKey(template.id, pattern_id, d)
        slot = existing.get(key.slot_id)
        if slot is None:
            raise SlotNotFoundError(f"No slot for pattern {pattern_id} on {d.isoformat()}")
        logger.info(
            "slot_restored",
            template_id=template.id,
            pattern_id=pattern_id,
            date=d.isoformat(),
        )
        return dataclasses.replace(slot, is_cancelled=False)

    def _occurrence(
        self,
        template: ScheduleTemplate,
        d: date,
        pattern_id: str,
        existing: Mapping[str, StaticServiceSlot],
    ) -> StaticServiceSlot:
        slot = existing.get(SlotKey(template.id, pattern_id, d).slot_id)
        if slot is not None:
            return slot

        pattern = self._pattern(template, pattern_id)
        if pattern.day_of_week != DayOfWeek.from_date(d):
            raise InvalidSlotUpdateError(
                f"Pattern {pattern_id} does not recur on {DayOfWeek.from_date(d).value}"
            )
        return StaticServiceSlot.from_pattern(template, pattern, d)

    def _pattern(self, template: ScheduleTemplate, pattern_id: str) -> WeeklySlotPattern:
        pattern = template.get_pattern(pattern_id)
        if pattern is None:
            raise PatternNotFoundError(
                f"Pattern {pattern_id} not found in template {template.id}"
            )
        return pattern


__all__ = [
    "SlotGenerator",
    "OVERRIDABLE_FIELDS",
    "validate_template",
]
