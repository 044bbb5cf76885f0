"""
Weekly schedule grid for an instructor or a vehicle.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional

from ..models.lesson import LessonStatus
from .availability import is_within_working_hours
from .calendar import DateLike, format_slot, week_days


ResourceType = Literal["instructor", "vehicle"]

# Hours shown on the weekly grid: 07:00 .. 20:00
GRID_HOURS = range(7, 21)


@dataclass
class TimeSlot:
    """One cell of the grid."""

    time: str
    available: bool
    lesson_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"time": self.time, "available": self.available, "lesson_id": self.lesson_id}


@dataclass
class ScheduleDay:
    """All grid cells of one calendar day."""

    date: str
    time_slots: List[TimeSlot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "time_slots": [slot.to_dict() for slot in self.time_slots],
        }


def _lesson_at(
    lessons: Iterable[Mapping[str, Any]],
    resource_key: str,
    resource_id: str,
    iso_date: str,
    time: str
) -> Optional[Mapping[str, Any]]:
    for lesson in lessons:
        if (
            lesson.get("status") == LessonStatus.SCHEDULED.value
            and lesson.get(resource_key) == resource_id
            and lesson.get("date") == iso_date
            and lesson.get("time") == time
        ):
            return lesson
    return None


def build_week_grid(
    resource_type: ResourceType,
    resource_id: str,
    date: DateLike,
    instructors: Iterable[Mapping[str, Any]],
    vehicles: Iterable[Mapping[str, Any]],
    lessons: Iterable[Mapping[str, Any]]
) -> List[ScheduleDay]:
    """
    Build the Sunday-first week containing ``date`` for one resource.

    For an instructor a cell is available inside working hours; for a
    vehicle whenever the vehicle status is "available". ``lesson_id``
    marks the scheduled lesson holding the resource at that cell.

    Args:
        resource_type: "instructor" or "vehicle"
        resource_id: Instructor or vehicle id
        date: Any day of the target week
        instructors: Instructor records
        vehicles: Vehicle records
        lessons: Lesson records

    Returns:
        Seven ScheduleDay entries; every cell unavailable for an unknown resource

    Raises:
        ValueError: If resource_type is not recognized
    """
    if resource_type == "instructor":
        resource = next((i for i in instructors if i.get("id") == resource_id), None)
        resource_key = "instructor_id"
    elif resource_type == "vehicle":
        resource = next((v for v in vehicles if v.get("id") == resource_id), None)
        resource_key = "vehicle_id"
    else:
        raise ValueError(f"Unknown resource type: {resource_type}")

    lessons = list(lessons)
    days = []
    for day in week_days(date):
        iso_date = day.isoformat()
        schedule_day = ScheduleDay(date=iso_date)
        for hour in GRID_HOURS:
            time = format_slot(hour)
            if resource is None:
                available = False
            elif resource_type == "instructor":
                available = is_within_working_hours(resource, day, time)
            else:
                available = resource.get("status") == "available"

            lesson = _lesson_at(lessons, resource_key, resource_id, iso_date, time)
            schedule_day.time_slots.append(
                TimeSlot(
                    time=time,
                    available=available,
                    lesson_id=lesson.get("id") if lesson else None,
                )
            )
        days.append(schedule_day)

    return days
