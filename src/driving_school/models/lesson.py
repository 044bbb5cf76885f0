"""
Lesson data models with type safety.

This module provides TypedDict definitions for lesson bookings and
the lesson status state machine.
"""

from enum import Enum
from typing import Dict, FrozenSet, Literal, Optional, TypedDict


LessonType = Literal["theoretical", "practical"]
LessonStatusValue = Literal["scheduled", "completed", "cancelled", "no-show"]

# Allowed lesson lengths in minutes (one or two back-to-back classes)
LESSON_DURATIONS = (50, 100)
DEFAULT_LESSON_DURATION = 50


class LessonStatus(Enum):
    """
    Lesson lifecycle states.

    A lesson is created as SCHEDULED and moves to exactly one of the
    terminal states. Only SCHEDULED lessons occupy their slot.
    """

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"

    @property
    def is_terminal(self) -> bool:
        """Check if no further transitions are allowed."""
        return self is not LessonStatus.SCHEDULED

    @property
    def occupies_slot(self) -> bool:
        """Check if a lesson in this state blocks its (instructor, date, time) slot."""
        return self is LessonStatus.SCHEDULED

    def can_transition_to(self, target: "LessonStatus") -> bool:
        """
        Check if a transition to ``target`` is allowed.

        Examples:
            >>> LessonStatus.SCHEDULED.can_transition_to(LessonStatus.CANCELLED)
            True
            >>> LessonStatus.COMPLETED.can_transition_to(LessonStatus.SCHEDULED)
            False
        """
        return target in _TRANSITIONS[self]


_TRANSITIONS: Dict[LessonStatus, FrozenSet[LessonStatus]] = {
    LessonStatus.SCHEDULED: frozenset({
        LessonStatus.COMPLETED,
        LessonStatus.CANCELLED,
        LessonStatus.NO_SHOW,
    }),
    LessonStatus.COMPLETED: frozenset(),
    LessonStatus.CANCELLED: frozenset(),
    LessonStatus.NO_SHOW: frozenset(),
}


class _LessonRequired(TypedDict):
    id: str
    student_id: str
    instructor_id: str
    type: LessonType
    date: str
    time: str
    duration: int
    status: LessonStatusValue


class LessonData(_LessonRequired, total=False):
    """
    Lesson booking as persisted by the store.

    Attributes:
        id: Unique lesson identifier
        student_id: Student identifier
        instructor_id: Instructor identifier
        vehicle_id: Vehicle identifier (practical lessons only)
        type: theoretical/practical
        date: Lesson date (YYYY-MM-DD format)
        time: Hour slot (HH:00 format)
        duration: Lesson duration in minutes (50 or 100)
        status: scheduled/completed/cancelled/no-show
        location: Where the lesson takes place
        notes: Free-text notes

    Examples:
        >>> lesson: LessonData = {
        ...     "id": "lesson_001",
        ...     "student_id": "student_1",
        ...     "instructor_id": "instructor_1",
        ...     "vehicle_id": "vehicle_1",
        ...     "type": "practical",
        ...     "date": "2025-10-15",
        ...     "time": "09:00",
        ...     "duration": 50,
        ...     "status": "scheduled",
        ...     "location": "Centro de Treinamento",
        ... }
    """

    vehicle_id: Optional[str]
    location: str
    notes: str


class BookingRequest(TypedDict, total=False):
    """
    A lesson as entered on the scheduling form, before it is persisted.

    Every key is optional here because the validator reports the
    missing ones.
    """

    student_id: str
    instructor_id: str
    vehicle_id: Optional[str]
    type: LessonType
    date: str
    time: str
    duration: int
    location: str
    notes: str
