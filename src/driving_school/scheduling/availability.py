"""
Lesson availability resolution.

Computes the bookable hour slots of an instructor on a given day and the
instructors/vehicles compatible with a student. Everything here is a pure
function of the snapshot passed in: nothing is cached, nothing is written.

The result is a hint for the booking form, not a guarantee. Two callers
working from the same snapshot can both pick the same free slot; the
lesson store enforces one scheduled lesson per (instructor, date, time).
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..models.lesson import LessonStatus
from .calendar import DateLike, format_slot, parse_hour, to_iso_date, weekday_name


logger = logging.getLogger(__name__)


def specialty_matches(specialty: str, category: str) -> bool:
    """
    Check if an instructor specialty label covers a license category.

    Labels are either the bare category ("B") or a prefixed label whose
    last word is the category ("Categoria B").

    Examples:
        >>> specialty_matches("Categoria B", "B")
        True
        >>> specialty_matches("Categoria B", "C")
        False
    """
    if not specialty or not category:
        return False
    label = specialty.strip()
    return label == category or label.split()[-1] == category


def occupies_slot(
    booking: Mapping[str, Any],
    instructor_id: str,
    iso_date: str,
    time: str,
    exclude_booking_id: Optional[str] = None
) -> bool:
    """Check if ``booking`` holds the instructor's slot at ``iso_date`` ``time``."""
    if booking.get("status") != LessonStatus.SCHEDULED.value:
        return False
    if exclude_booking_id is not None and booking.get("id") == exclude_booking_id:
        return False
    booking_date = booking.get("date")
    if booking_date is not None and not isinstance(booking_date, str):
        booking_date = to_iso_date(booking_date)
    return (
        booking.get("instructor_id") == instructor_id
        and booking_date == iso_date
        and booking.get("time") == time
    )


def works_on(instructor: Mapping[str, Any], day: DateLike) -> bool:
    """Check if the day's weekday is one of the instructor's working days."""
    working_hours = instructor.get("working_hours") or {}
    return weekday_name(day) in (working_hours.get("days") or [])


def is_within_working_hours(
    instructor: Mapping[str, Any],
    day: DateLike,
    time: str
) -> bool:
    """
    Check if ``time`` falls on a working day and inside ``[start, end)``.
    """
    if not works_on(instructor, day):
        return False
    working_hours = instructor["working_hours"]
    hour = parse_hour(time)
    return parse_hour(working_hours["start"]) <= hour < parse_hour(working_hours["end"])


class AvailabilityResolver:
    """
    Resolves bookable slots and compatible resources over a snapshot.

    Examples:
        >>> resolver = AvailabilityResolver(instructors)
        >>> resolver.list_available_slots("instructor_1", "2025-10-15", lessons)
        ['08:00', '10:00', '11:00']
        >>> # Editing lesson_7: its own slot is offered again
        >>> resolver.list_available_slots(
        ...     "instructor_1", "2025-10-15", lessons, exclude_booking_id="lesson_7"
        ... )
        ['08:00', '09:00', '10:00', '11:00']
    """

    def __init__(self, instructors: Iterable[Mapping[str, Any]]):
        self._instructors: Dict[str, Mapping[str, Any]] = {
            instructor["id"]: instructor for instructor in instructors
        }

    def find_instructor(self, instructor_id: Optional[str]) -> Optional[Mapping[str, Any]]:
        if not instructor_id:
            return None
        return self._instructors.get(instructor_id)

    def list_available_slots(
        self,
        instructor_id: str,
        date: DateLike,
        existing_bookings: Sequence[Mapping[str, Any]],
        exclude_booking_id: Optional[str] = None
    ) -> List[str]:
        """
        List the free hour slots of an instructor on a date.

        Args:
            instructor_id: Instructor to check
            date: Calendar day (time of day is ignored)
            existing_bookings: Lesson records to check for conflicts
            exclude_booking_id: Lesson being edited; its own slot stays free

        Returns:
            Slot labels ("HH:00") in ascending order; empty when the
            instructor is unknown or does not work that day
        """
        instructor = self.find_instructor(instructor_id)
        if instructor is None:
            logger.debug(f"Unknown instructor {instructor_id}, no slots")
            return []

        if not works_on(instructor, date):
            logger.debug(
                f"Instructor {instructor_id} does not work on {weekday_name(date)}"
            )
            return []

        iso_date = to_iso_date(date)
        start_hour = parse_hour(instructor["working_hours"]["start"])
        end_hour = parse_hour(instructor["working_hours"]["end"])

        slots = []
        for hour in range(start_hour, end_hour):
            slot = format_slot(hour)
            booked = any(
                occupies_slot(booking, instructor_id, iso_date, slot, exclude_booking_id)
                for booking in existing_bookings
            )
            if not booked:
                slots.append(slot)

        return slots

    def compatible_instructors(
        self,
        student: Optional[Mapping[str, Any]] = None
    ) -> List[Mapping[str, Any]]:
        """
        Active instructors whose specialties cover the student's category.

        Without a student every active instructor is offered.
        """
        active = [
            instructor for instructor in self._instructors.values()
            if instructor.get("status") == "active"
        ]
        if not student:
            return active

        category = student.get("category")
        return [
            instructor for instructor in active
            if any(specialty_matches(s, category) for s in instructor.get("specialties") or [])
        ]


def compatible_vehicles(
    student: Optional[Mapping[str, Any]],
    vehicles: Iterable[Mapping[str, Any]]
) -> List[Mapping[str, Any]]:
    """Available vehicles of the student's category; none without a student."""
    if not student:
        return []
    category = student.get("category")
    return [
        vehicle for vehicle in vehicles
        if vehicle.get("category") == category and vehicle.get("status") == "available"
    ]


def list_available_slots(
    instructor_id: str,
    date: DateLike,
    existing_bookings: Sequence[Mapping[str, Any]],
    instructors: Iterable[Mapping[str, Any]],
    exclude_booking_id: Optional[str] = None
) -> List[str]:
    """Functional form of :meth:`AvailabilityResolver.list_available_slots`."""
    return AvailabilityResolver(instructors).list_available_slots(
        instructor_id, date, existing_bookings, exclude_booking_id
    )
