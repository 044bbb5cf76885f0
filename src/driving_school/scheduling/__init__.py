"""
Lesson scheduling.

Usage:
    >>> from driving_school.scheduling import AvailabilityResolver
    >>> resolver = AvailabilityResolver(instructors)
    >>> resolver.list_available_slots("instructor_1", "2025-10-15", lessons)
"""

from .availability import (
    AvailabilityResolver,
    compatible_vehicles,
    is_within_working_hours,
    list_available_slots,
)
from .schedule_grid import ScheduleDay, TimeSlot, build_week_grid

__all__ = [
    "AvailabilityResolver",
    "compatible_vehicles",
    "is_within_working_hours",
    "list_available_slots",
    "ScheduleDay",
    "TimeSlot",
    "build_week_grid",
]
