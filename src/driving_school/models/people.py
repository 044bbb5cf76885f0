"""
Student and instructor records.

These are plain records persisted verbatim by the external store.
"""

from typing import List, Literal, Optional, TypedDict


# Driving-license classes shared by students, vehicles and instructor specialties
Category = Literal["A", "B", "C", "D", "E"]
CATEGORIES = ("A", "B", "C", "D", "E")

StudentStatus = Literal["active", "suspended", "graduated", "inactive"]
InstructorStatus = Literal["active", "inactive"]

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class StudentData(TypedDict, total=False):
    """
    Student record.

    Examples:
        >>> student: StudentData = {
        ...     "id": "student_1",
        ...     "name": "Maria Silva",
        ...     "email": "maria@example.com",
        ...     "phone": "(11) 98765-4321",
        ...     "cpf": "123.456.789-00",
        ...     "birth_date": "2000-05-10",
        ...     "address": "Rua A, 100",
        ...     "category": "B",
        ...     "status": "active",
        ...     "theoretical_hours": 0,
        ...     "practical_hours": 0,
        ... }
    """

    id: str
    name: str
    email: str
    phone: str
    cpf: str
    birth_date: str
    address: str
    category: Category
    status: StudentStatus
    theoretical_hours: int
    practical_hours: int
    avatar_url: Optional[str]


class WorkingHours(TypedDict):
    """
    Instructor availability.

    Attributes:
        start: First bookable time (HH:MM)
        end: End of the working day, exclusive (HH:MM)
        days: Lowercase English weekday names
    """

    start: str
    end: str
    days: List[str]


class InstructorData(TypedDict, total=False):
    """
    Instructor record.

    ``specialties`` holds category labels such as "Categoria B".
    """

    id: str
    name: str
    email: str
    phone: str
    cpf: str
    license: str
    specialties: List[str]
    status: InstructorStatus
    working_hours: WorkingHours
    avatar_url: Optional[str]
