"""
Unit tests for the dependency injection container.
"""

import pytest

from driving_school.repository.memory import LESSON_SLOT_CONSTRAINT
from driving_school.resilience.circuit_breaker import CircuitBreaker
from driving_school.services.lesson_service import LessonService
from driving_school.utils.config import Config
from driving_school.utils.di_container import (
    DIContainer,
    TABLES,
    configure_default_services,
)


class TestDIContainer:
    """Test cases for DIContainer."""

    def test_transient_service(self):
        """Test a new instance per resolve."""
        container = DIContainer()
        container.register("counter", lambda: object())

        assert container.resolve("counter") is not container.resolve("counter")

    def test_singleton_service(self):
        """Test one shared instance."""
        container = DIContainer()
        container.register(Config, lambda: object(), singleton=True)

        assert container.resolve(Config) is container.resolve(Config)
        assert container.is_registered(Config)
        assert container.get_registered_services() == ["Config"]

    def test_unregistered_service(self):
        """Test resolving an unknown service."""
        container = DIContainer()
        container.register("lessons", lambda: [])

        with pytest.raises(ValueError, match="Service not registered: students"):
            container.resolve("students")

    def test_clear(self):
        container = DIContainer()
        container.register("lessons", lambda: [])
        container.clear()

        assert not container.is_registered("lessons")


class TestConfigureDefaultServices:
    """Test cases for the default wiring."""

    @pytest.fixture
    def container(self, students, instructors, vehicles, lessons):
        container = DIContainer()
        configure_default_services(
            container,
            snapshot={
                "students": students,
                "instructors": instructors,
                "vehicles": vehicles,
                "lessons": lessons,
            },
            config=Config(),
        )
        return container

    def test_tables_loaded(self, container):
        """Test every table is seeded from the snapshot."""
        assert [len(container.resolve(table)) for table in TABLES] == [3, 3, 3, 2]

    def test_lesson_table_enforces_slot(self, container):
        """Test the lesson table carries the slot constraint."""
        assert container.resolve("lessons").constraints == [LESSON_SLOT_CONSTRAINT]
        assert container.resolve("students").constraints == []

    def test_service_shares_repositories(self, container):
        """Test the service writes to the registered tables."""
        service = container.resolve(LessonService)

        assert service is container.resolve(LessonService)
        assert service.lessons is container.resolve("lessons")
        assert service.breaker is container.resolve(CircuitBreaker)

    def test_empty_snapshot(self):
        """Test tables default to empty."""
        container = DIContainer()
        configure_default_services(container, config=Config())

        assert len(container.resolve("lessons")) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
