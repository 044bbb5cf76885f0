"""
Dependency Injection Container.

This module wires configuration, logging, repositories and services
together so no module keeps its own global instances.
"""

import logging
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional


logger = logging.getLogger(__name__)


def _key_name(key: Hashable) -> str:
    return getattr(key, "__name__", str(key))


class DIContainer:
    """
    Simple dependency injection container.

    Services are registered under a type or a string name; repositories
    share one type, so they are registered by table name.

    Examples:
        >>> container = DIContainer()
        >>> container.register(Config, lambda: Config(), singleton=True)
        >>> container.register("lessons", lambda: InMemoryRepository("lessons"), singleton=True)
        >>> lessons = container.resolve("lessons")
    """

    def __init__(self):
        """Initialize empty container."""
        self._services: Dict[Hashable, Callable[[], Any]] = {}
        self._singletons: Dict[Hashable, Any] = {}
        self._singleton_flags: Dict[Hashable, bool] = {}

        logger.debug("DI Container initialized")

    def register(
        self,
        key: Hashable,
        implementation: Callable[[], Any],
        singleton: bool = False
    ):
        """
        Register a service in the container.

        Args:
            key: Service type or name
            implementation: Factory function that creates the service
            singleton: Whether to create a single shared instance
        """
        self._services[key] = implementation
        self._singleton_flags[key] = singleton
        self._singletons.pop(key, None)

        logger.debug(
            f"Registered service: {_key_name(key)} "
            f"(singleton={singleton})"
        )

    def resolve(self, key: Hashable) -> Any:
        """
        Resolve a service from the container.

        Args:
            key: Service type or name to resolve

        Returns:
            Service instance

        Raises:
            ValueError: If service is not registered
        """
        if key not in self._services:
            raise ValueError(
                f"Service not registered: {_key_name(key)}. "
                f"Available services: {', '.join(self.get_registered_services())}"
            )

        if self._singleton_flags.get(key, False):
            if key not in self._singletons:
                logger.debug(f"Creating singleton instance: {_key_name(key)}")
                self._singletons[key] = self._services[key]()
            return self._singletons[key]

        logger.debug(f"Creating transient instance: {_key_name(key)}")
        return self._services[key]()

    def is_registered(self, key: Hashable) -> bool:
        """Check if a service is registered."""
        return key in self._services

    def clear(self):
        """Clear all registered services."""
        self._services.clear()
        self._singletons.clear()
        self._singleton_flags.clear()
        logger.debug("DI Container cleared")

    def get_registered_services(self) -> List[str]:
        """Get names of all registered services."""
        return [_key_name(key) for key in self._services.keys()]


TABLES = ("students", "instructors", "vehicles", "lessons")


def configure_default_services(
    container: DIContainer,
    snapshot: Optional[Mapping[str, Any]] = None,
    config=None
):
    """
    Register the default services.

    Args:
        container: DI container to configure
        snapshot: Initial records per table (students, instructors,
            vehicles, lessons); tables default to empty
        config: Config instance to use instead of reading the environment

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container, snapshot=load_json(path))
        >>> service = container.resolve(LessonService)
    """
    from ..repository.memory import InMemoryRepository, LESSON_SLOT_CONSTRAINT
    from ..resilience.circuit_breaker import CircuitBreaker
    from ..services.lesson_service import LessonService
    from .config import Config
    from .logger import setup_logger

    snapshot = snapshot or {}

    container.register(Config, lambda: config or Config(), singleton=True)

    container.register(
        logging.Logger,
        lambda: setup_logger(
            level=getattr(logging, container.resolve(Config).log_level, logging.INFO),
            log_file=container.resolve(Config).log_file
        ),
        singleton=True
    )

    for table in TABLES:
        constraints = [LESSON_SLOT_CONSTRAINT] if table == "lessons" else []
        container.register(
            table,
            lambda table=table, constraints=constraints: InMemoryRepository(
                table,
                records=snapshot.get(table, []),
                constraints=constraints
            ),
            singleton=True
        )

    container.register(
        CircuitBreaker,
        lambda: CircuitBreaker(
            failure_threshold=container.resolve(Config).store_failure_threshold,
            timeout=container.resolve(Config).store_retry_timeout
        ),
        singleton=True
    )

    container.register(
        LessonService,
        lambda: LessonService(
            students=container.resolve("students"),
            instructors=container.resolve("instructors"),
            vehicles=container.resolve("vehicles"),
            lessons=container.resolve("lessons"),
            breaker=container.resolve(CircuitBreaker),
            default_duration=container.resolve(Config).default_lesson_duration
        ),
        singleton=True
    )

    logger.info("Default services configured")
