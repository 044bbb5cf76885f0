"""
Shared fixtures: a small school snapshot.

2025-10-15 is a Wednesday, 2025-10-18 a Saturday.
"""

import pytest

from driving_school.repository.memory import InMemoryRepository, LESSON_SLOT_CONSTRAINT
from driving_school.resilience.circuit_breaker import CircuitBreaker
from driving_school.services.lesson_service import LessonService


WEDNESDAY = "2025-10-15"
SATURDAY = "2025-10-18"


@pytest.fixture
def students():
    return [
        {
            "id": "student_1",
            "name": "Maria Silva",
            "email": "maria@example.com",
            "cpf": "123.456.789-00",
            "category": "B",
            "status": "active",
        },
        {
            "id": "student_2",
            "name": "João Souza",
            "email": "joao@example.com",
            "cpf": "987.654.321-00",
            "category": "A",
            "status": "active",
        },
        {
            "id": "student_3",
            "name": "Ana Lima",
            "email": "ana@example.com",
            "cpf": "111.222.333-44",
            "category": "B",
            "status": "suspended",
        },
    ]


@pytest.fixture
def instructors():
    return [
        {
            "id": "instructor_1",
            "name": "Carlos Pereira",
            "specialties": ["Categoria B"],
            "status": "active",
            "working_hours": {
                "start": "08:00",
                "end": "12:00",
                "days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
            },
        },
        {
            "id": "instructor_2",
            "name": "Paula Costa",
            "specialties": ["Categoria A", "Categoria B"],
            "status": "active",
            "working_hours": {"start": "09:00", "end": "11:00", "days": ["saturday"]},
        },
        {
            "id": "instructor_3",
            "name": "Roberto Alves",
            "specialties": ["Categoria C"],
            "status": "inactive",
            "working_hours": {"start": "08:00", "end": "17:00", "days": ["monday"]},
        },
    ]


@pytest.fixture
def vehicles():
    return [
        {
            "id": "vehicle_1",
            "brand": "Volkswagen",
            "model": "Gol",
            "plate": "ABC-1234",
            "category": "B",
            "status": "available",
        },
        {
            "id": "vehicle_2",
            "brand": "Honda",
            "model": "CG 160",
            "plate": "MOT-0001",
            "category": "A",
            "status": "available",
        },
        {
            "id": "vehicle_3",
            "brand": "Fiat",
            "model": "Uno",
            "plate": "XYZ-9876",
            "category": "B",
            "status": "maintenance",
        },
    ]


@pytest.fixture
def lessons():
    return [
        {
            "id": "lesson_1",
            "student_id": "student_1",
            "instructor_id": "instructor_1",
            "vehicle_id": "vehicle_1",
            "type": "practical",
            "date": WEDNESDAY,
            "time": "09:00",
            "duration": 50,
            "status": "scheduled",
            "location": "Centro",
        },
        {
            "id": "lesson_2",
            "student_id": "student_1",
            "instructor_id": "instructor_1",
            "vehicle_id": "vehicle_1",
            "type": "practical",
            "date": WEDNESDAY,
            "time": "10:00",
            "duration": 50,
            "status": "cancelled",
            "location": "Centro",
        },
    ]


@pytest.fixture
def booking_request():
    """A request that books a free slot of instructor_1."""
    return {
        "student_id": "student_1",
        "instructor_id": "instructor_1",
        "vehicle_id": "vehicle_1",
        "type": "practical",
        "date": WEDNESDAY,
        "time": "08:00",
        "location": "Centro de Treinamento",
    }


@pytest.fixture
def repositories(students, instructors, vehicles, lessons):
    return {
        "students": InMemoryRepository("students", records=students),
        "instructors": InMemoryRepository("instructors", records=instructors),
        "vehicles": InMemoryRepository("vehicles", records=vehicles),
        "lessons": InMemoryRepository(
            "lessons", records=lessons, constraints=[LESSON_SLOT_CONSTRAINT]
        ),
    }


@pytest.fixture
def service(repositories):
    return LessonService(
        students=repositories["students"],
        instructors=repositories["instructors"],
        vehicles=repositories["vehicles"],
        lessons=repositories["lessons"],
        breaker=CircuitBreaker(failure_threshold=3),
    )
