"""
Lesson scheduling service.

Loads a snapshot of students, instructors, vehicles and lessons from the
injected repositories, runs the availability resolver and the booking
validator over it, and writes lessons back through the lesson
repository.

The availability check is only a hint for the form. The lesson
repository must carry the one-scheduled-lesson-per-slot constraint;
when two callers race for the same slot, the store rejects the second
write and the service reports a CONFLICT.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..models.booking import BookingOutcome
from ..models.lesson import DEFAULT_LESSON_DURATION, LessonStatus
from ..models.result import Result
from ..repository.interfaces import Repository, RepositoryError, UniqueConstraintError
from ..resilience.circuit_breaker import CircuitBreaker
from ..scheduling.availability import AvailabilityResolver, compatible_vehicles
from ..scheduling.calendar import DateLike, to_iso_date
from ..scheduling.schedule_grid import ResourceType, ScheduleDay, build_week_grid
from ..validation.booking_validator import BookingContext, BookingValidator


logger = logging.getLogger(__name__)


def filter_lessons(
    lessons: Iterable[Mapping[str, Any]],
    lesson_type: str = "all",
    status: str = "all"
) -> List[Mapping[str, Any]]:
    """
    Filter lessons by type and status; "all" disables a filter.

    Examples:
        >>> filter_lessons(lessons, lesson_type="practical", status="scheduled")
    """
    return [
        lesson for lesson in lessons
        if (lesson_type == "all" or lesson.get("type") == lesson_type)
        and (status == "all" or lesson.get("status") == status)
    ]


def describe_lesson(
    lesson: Mapping[str, Any],
    students: Iterable[Mapping[str, Any]],
    instructors: Iterable[Mapping[str, Any]],
    vehicles: Iterable[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Resolve the display names of a lesson's student, instructor and vehicle.

    Missing records are reported as "not found" rather than failing.
    """
    student = next((s for s in students if s.get("id") == lesson.get("student_id")), None)
    instructor = next((i for i in instructors if i.get("id") == lesson.get("instructor_id")), None)

    vehicle_info = None
    if lesson.get("vehicle_id"):
        vehicle = next((v for v in vehicles if v.get("id") == lesson.get("vehicle_id")), None)
        vehicle_info = (
            f"{vehicle['brand']} {vehicle['model']} - {vehicle['plate']}"
            if vehicle else "Vehicle not found"
        )

    return {
        **lesson,
        "student_name": student["name"] if student else "Student not found",
        "instructor_name": instructor["name"] if instructor else "Instructor not found",
        "vehicle_info": vehicle_info,
    }


class LessonService:
    """
    Schedules, edits and closes lessons.

    Examples:
        >>> service = LessonService(students, instructors, vehicles, lessons)
        >>> service.available_slots("instructor_1", "2025-10-15").value
        ['08:00', '09:00', '10:00', '11:00']
        >>> outcome = service.schedule_lesson(request)
        >>> outcome.is_booked
        True
    """

    def __init__(
        self,
        students: Repository,
        instructors: Repository,
        vehicles: Repository,
        lessons: Repository,
        breaker: Optional[CircuitBreaker] = None,
        default_duration: int = DEFAULT_LESSON_DURATION
    ):
        """
        Initialize the service.

        Args:
            students: Student repository
            instructors: Instructor repository
            vehicles: Vehicle repository
            lessons: Lesson repository (should enforce the slot constraint)
            breaker: Circuit breaker guarding store calls
            default_duration: Duration used when a request has none
        """
        self.students = students
        self.instructors = instructors
        self.vehicles = vehicles
        self.lessons = lessons
        self.breaker = breaker or CircuitBreaker()
        self.default_duration = default_duration

    def _call(self, operation: Callable[..., Result], *args, **kwargs) -> Result:
        """Run a store operation through the breaker, folding errors into a Result."""
        try:
            return self.breaker.call(operation, *args, **kwargs)
        except RepositoryError as e:
            logger.error(f"Store call failed: {e}")
            return Result.failure(str(e), e)

    def load_context(self, editing_lesson_id: Optional[str] = None) -> Result[BookingContext]:
        """
        Fetch the current snapshot of every record the resolver needs.
        """
        snapshot = {}
        for name, repository in (
            ("students", self.students),
            ("instructors", self.instructors),
            ("vehicles", self.vehicles),
            ("bookings", self.lessons),
        ):
            listed = self._call(repository.list)
            if listed.is_failure:
                return Result.failure(f"Failed to load {name}: {listed.message}", listed.error)
            snapshot[name] = listed.value

        return Result.success(BookingContext(editing_lesson_id=editing_lesson_id, **snapshot))

    def available_slots(
        self,
        instructor_id: str,
        date: DateLike,
        exclude_lesson_id: Optional[str] = None
    ) -> Result[List[str]]:
        """Free hour slots of an instructor on a date."""
        return self.load_context().map(
            lambda ctx: AvailabilityResolver(ctx.instructors).list_available_slots(
                instructor_id, date, ctx.bookings, exclude_lesson_id
            )
        )

    def compatible_instructors(self, student_id: Optional[str] = None) -> Result[List[Mapping[str, Any]]]:
        """Active instructors able to teach the student's category."""
        return self.load_context().map(
            lambda ctx: AvailabilityResolver(ctx.instructors).compatible_instructors(
                ctx.find_student(student_id)
            )
        )

    def compatible_vehicles(self, student_id: Optional[str]) -> Result[List[Mapping[str, Any]]]:
        """Available vehicles of the student's category."""
        return self.load_context().map(
            lambda ctx: compatible_vehicles(ctx.find_student(student_id), ctx.vehicles)
        )

    def week_schedule(
        self,
        resource_type: ResourceType,
        resource_id: str,
        date: DateLike
    ) -> Result[List[ScheduleDay]]:
        """Weekly grid of an instructor or a vehicle."""
        return self.load_context().map(
            lambda ctx: build_week_grid(
                resource_type, resource_id, date,
                ctx.instructors, ctx.vehicles, ctx.bookings
            )
        )

    def list_lessons(self, lesson_type: str = "all", status: str = "all") -> Result[List[Dict[str, Any]]]:
        """Lessons filtered by type and status, ordered by date and time."""
        return self._call(self.lessons.list).map(
            lambda rows: sorted(
                filter_lessons(rows, lesson_type, status),
                key=lambda lesson: (lesson.get("date") or "", lesson.get("time") or "")
            )
        )

    def _build_lesson(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        lesson_type = request.get("type") or "practical"
        lesson = {
            "student_id": request["student_id"],
            "instructor_id": request["instructor_id"],
            "vehicle_id": request.get("vehicle_id") if lesson_type == "practical" else None,
            "type": lesson_type,
            "date": to_iso_date(request["date"]),
            "time": request["time"],
            "duration": request.get("duration") or self.default_duration,
            "status": LessonStatus.SCHEDULED.value,
            "location": request["location"].strip(),
        }
        if request.get("notes"):
            lesson["notes"] = request["notes"]
        return lesson

    def _check_request(
        self,
        request: Mapping[str, Any],
        editing_lesson_id: Optional[str] = None
    ) -> Optional[BookingOutcome]:
        """Validate a request; returns the outcome to report when it cannot be written."""
        loaded = self.load_context(editing_lesson_id)
        if loaded.is_failure:
            return BookingOutcome.failed(loaded.message)
        context = loaded.value

        validation = BookingValidator(context).validate(request)
        for warning in validation.warnings:
            logger.warning(warning)
        if not validation.is_valid:
            logger.info(f"Booking rejected: {validation.get_summary()}")
            return BookingOutcome.rejected(validation.field_errors)

        slots = AvailabilityResolver(context.instructors).list_available_slots(
            request["instructor_id"], request["date"], context.bookings, editing_lesson_id
        )
        if request["time"] not in slots:
            logger.info(
                f"Slot {request['date']} {request['time']} not offered "
                f"for instructor {request['instructor_id']}"
            )
            return BookingOutcome.rejected({"time": "Time slot is not available"})

        return None

    def _write_outcome(self, written: Result[Dict[str, Any]]) -> BookingOutcome:
        if written.is_success:
            return BookingOutcome.booked(written.value)
        if isinstance(written.error, UniqueConstraintError):
            logger.warning(f"Slot taken concurrently: {written.message}")
            return BookingOutcome.conflict("Time slot was booked by someone else")
        return BookingOutcome.failed(written.message)

    def schedule_lesson(self, request: Mapping[str, Any]) -> BookingOutcome:
        """
        Validate and persist a new lesson in the scheduled state.

        Args:
            request: Booking request from the scheduling form

        Returns:
            BOOKED with the stored lesson, REJECTED with field errors,
            CONFLICT when the store refused a double booking, FAILED on
            store errors
        """
        rejection = self._check_request(request)
        if rejection is not None:
            return rejection

        outcome = self._write_outcome(self._call(self.lessons.insert, self._build_lesson(request)))
        if outcome.is_booked:
            logger.info(
                f"Lesson {outcome.lesson['id']} scheduled: "
                f"{outcome.lesson['date']} {outcome.lesson['time']} "
                f"instructor={outcome.lesson['instructor_id']}"
            )
        return outcome

    def update_lesson(self, lesson_id: str, request: Mapping[str, Any]) -> BookingOutcome:
        """
        Edit a scheduled lesson; its own slot stays bookable.
        """
        existing = self._call(self.lessons.get, lesson_id)
        if existing.is_failure:
            return BookingOutcome.failed(existing.message)

        parsed = self._stored_status(lesson_id, existing.value)
        if parsed.is_failure:
            return BookingOutcome.failed(parsed.message)

        status = parsed.value
        if status.is_terminal:
            return BookingOutcome.failed(
                f"Lesson {lesson_id} is {status.value} and can no longer be edited"
            )

        rejection = self._check_request(request, editing_lesson_id=lesson_id)
        if rejection is not None:
            return rejection

        outcome = self._write_outcome(
            self._call(self.lessons.update, lesson_id, self._build_lesson(request))
        )
        if outcome.is_booked:
            logger.info(f"Lesson {lesson_id} updated")
        return outcome

    @staticmethod
    def _stored_status(lesson_id: str, lesson: Mapping[str, Any]) -> Result[LessonStatus]:
        raw = lesson.get("status")
        try:
            return Result.success(LessonStatus(raw))
        except ValueError:
            logger.error(f"Lesson {lesson_id} has an unknown status: {raw!r}")
            return Result.failure(f"Lesson {lesson_id} has an unknown status: {raw!r}")

    def _transition(self, lesson_id: str, target: LessonStatus) -> Result[Dict[str, Any]]:
        existing = self._call(self.lessons.get, lesson_id)
        if existing.is_failure:
            return existing

        parsed = self._stored_status(lesson_id, existing.value)
        if parsed.is_failure:
            return parsed

        current = parsed.value
        if not current.can_transition_to(target):
            return Result.failure(
                f"Cannot move lesson {lesson_id} from {current.value} to {target.value}"
            )

        updated = self._call(self.lessons.update, lesson_id, {"status": target.value})
        if updated.is_success:
            logger.info(f"Lesson {lesson_id}: {current.value} -> {target.value}")
        return updated

    def complete_lesson(self, lesson_id: str) -> Result[Dict[str, Any]]:
        return self._transition(lesson_id, LessonStatus.COMPLETED)

    def cancel_lesson(self, lesson_id: str) -> Result[Dict[str, Any]]:
        return self._transition(lesson_id, LessonStatus.CANCELLED)

    def mark_no_show(self, lesson_id: str) -> Result[Dict[str, Any]]:
        return self._transition(lesson_id, LessonStatus.NO_SHOW)
