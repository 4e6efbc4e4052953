"""
Bookly Core
===========

Appointment scheduling and conflict-resolution engine for salon and
service-business bookings.

This package provides:
- Availability resolution over business hours, shifts and special days
- Conflict validation for dynamic and static (slot-based) bookings
- Template-driven generation of fixed-capacity recurring slots
- A calendar store with persisted view and filter preferences
"""

__version__ = "1.0.0"
