"""
Lesson booking validator.

Checks a scheduling-form request against the known students,
instructors and vehicles. Every rule runs and every violation is
collected, keyed by the form field it belongs to.

Slot occupancy is deliberately not re-checked here: the form only offers
slots from the availability resolver, and the lesson store holds the
uniqueness constraint. Validating the same free slot twice, with nothing
persisted in between, passes both times.
"""

from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Dict, List, Mapping, Optional

from ..models.lesson import LESSON_DURATIONS
from ..scheduling.availability import works_on
from ..scheduling.calendar import parse_hour, to_date
from .validators import Validator, ValidationResult


LESSON_TYPES = ("theoretical", "practical")


@dataclass
class BookingContext:
    """
    Snapshot a booking request is validated against.

    Attributes:
        students: Known student records
        instructors: Known instructor records
        vehicles: Known vehicle records
        bookings: Existing lesson records
        editing_lesson_id: Id of the lesson being edited, if any
    """

    students: List[Mapping[str, Any]] = field(default_factory=list)
    instructors: List[Mapping[str, Any]] = field(default_factory=list)
    vehicles: List[Mapping[str, Any]] = field(default_factory=list)
    bookings: List[Mapping[str, Any]] = field(default_factory=list)
    editing_lesson_id: Optional[str] = None

    @staticmethod
    def _find(records: List[Mapping[str, Any]], record_id: Optional[str]) -> Optional[Mapping[str, Any]]:
        if not record_id:
            return None
        return next((r for r in records if r.get("id") == record_id), None)

    def find_student(self, student_id: Optional[str]) -> Optional[Mapping[str, Any]]:
        return self._find(self.students, student_id)

    def find_instructor(self, instructor_id: Optional[str]) -> Optional[Mapping[str, Any]]:
        return self._find(self.instructors, instructor_id)

    def find_vehicle(self, vehicle_id: Optional[str]) -> Optional[Mapping[str, Any]]:
        return self._find(self.vehicles, vehicle_id)


class BookingValidator(Validator):
    """
    Validator for lesson booking requests.

    Validates:
    - Student and instructor selected and known
    - Vehicle selected for practical lessons (ignored for theoretical ones)
    - Date, time and location filled in
    - Instructor works on the chosen weekday
    - Vehicle category equals the student's category

    Examples:
        >>> validator = BookingValidator(context)
        >>> result = validator.validate({
        ...     "student_id": "student_1",
        ...     "instructor_id": "instructor_1",
        ...     "vehicle_id": "vehicle_1",
        ...     "type": "practical",
        ...     "date": "2025-10-15",
        ...     "time": "09:00",
        ...     "location": "Centro de Treinamento",
        ... })
        >>> result.field_errors
        {}
    """

    def __init__(self, context: BookingContext):
        self.context = context

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """
        Validate a booking request.

        Args:
            data: Booking request fields

        Returns:
            ValidationResult whose field_errors maps field -> message
        """
        result = ValidationResult()
        context = self.context

        # Student
        student = None
        student_id = data.get("student_id")
        if self.is_blank(student_id):
            result.add_error("student_id", "Select a student")
        else:
            student = context.find_student(student_id)
            if student is None:
                result.add_error("student_id", "Student not found")
            elif student.get("status") != "active":
                result.add_warning(f"Student {student_id} is {student.get('status')}")

        # Instructor
        instructor = None
        instructor_id = data.get("instructor_id")
        if self.is_blank(instructor_id):
            result.add_error("instructor_id", "Select an instructor")
        else:
            instructor = context.find_instructor(instructor_id)
            if instructor is None:
                result.add_error("instructor_id", "Instructor not found")

        # Lesson type; the form starts on practical
        lesson_type = data.get("type") or "practical"
        error = self.validate_choice(lesson_type, "type", LESSON_TYPES)
        if error:
            result.add_error("type", error)

        # Vehicle, practical lessons only
        vehicle = None
        if lesson_type == "practical":
            vehicle_id = data.get("vehicle_id")
            if self.is_blank(vehicle_id):
                result.add_error("vehicle_id", "Select a vehicle for a practical lesson")
            else:
                vehicle = context.find_vehicle(vehicle_id)
                if vehicle is None:
                    result.add_error("vehicle_id", "Vehicle not found")
                elif vehicle.get("status") != "available":
                    result.add_warning(f"Vehicle {vehicle_id} is {vehicle.get('status')}")

        # Date and time
        date = data.get("date")
        if isinstance(date, date_type):
            date = date.isoformat()[:10]
        if self.is_blank(date):
            result.add_error("date", "Select a date")
            date = None
        else:
            error = self.validate_date_format(date, "date")
            if error:
                result.add_error("date", error)
                date = None
            else:
                # Well-formed but impossible dates such as 2025-02-30
                try:
                    to_date(date)
                except ValueError:
                    result.add_error("date", f"Invalid date: {date}")
                    date = None

        time = data.get("time")
        if self.is_blank(time):
            result.add_error("time", "Select a time")
        elif not isinstance(time, str) or len(time.split(":")) < 2 or not time.split(":")[0].isdigit():
            result.add_error("time", f"Invalid time format: {time} (expected HH:MM)")
        else:
            try:
                parse_hour(time)
            except ValueError:
                result.add_error("time", f"Invalid time: {time}")

        # Location
        if self.is_blank(data.get("location")):
            result.add_error("location", "Location is required")

        # Duration (optional, defaults to a single class)
        duration = data.get("duration")
        if duration is not None:
            error = self.validate_choice(duration, "duration", LESSON_DURATIONS)
            if error:
                result.add_error("duration", error)

        # Instructor working day
        if instructor is not None and date is not None:
            if not works_on(instructor, date):
                result.add_error("date", "Instructor does not work on this day")

        # Vehicle category must equal the student's category
        if student is not None and vehicle is not None:
            if student.get("category") != vehicle.get("category"):
                result.add_error(
                    "vehicle_id",
                    "Vehicle category does not match the student's category"
                )

        return result


def validate_booking(request: Mapping[str, Any], context: BookingContext) -> Dict[str, str]:
    """
    Validate a booking request and return its field violations.

    An empty mapping means the request is acceptable.
    """
    return BookingValidator(context).validate(request).field_errors
