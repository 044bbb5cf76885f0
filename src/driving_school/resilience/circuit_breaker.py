"""
Circuit Breaker around the record store.

Stops hammering a failing store: after enough consecutive store failures
the circuit opens and calls are refused until a cool-down has passed.

States:
- CLOSED: Normal operation, calls pass through
- OPEN: Too many failures, calls are blocked
- HALF_OPEN: One trial call lets the store prove it recovered

Store operations report failures as failed Results rather than raising,
so both raised exceptions and failed Results count. Domain refusals
(a unique constraint or a missing record) are answers from a healthy
store and do not count.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Any, Optional, Tuple, Type

from ..models.result import Result
from ..repository.interfaces import (
    RepositoryError,
    RecordNotFoundError,
    UniqueConstraintError,
)


logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"          # Normal operation
    OPEN = "open"              # Blocking calls due to failures
    HALF_OPEN = "half_open"    # Testing recovery


class CircuitBreakerOpenError(RepositoryError):
    """Raised when circuit breaker is in OPEN state."""
    pass


class CircuitBreaker:
    """
    Circuit breaker for store calls.

    Examples:
        >>> breaker = CircuitBreaker(failure_threshold=3, timeout=timedelta(seconds=30))
        >>> try:
        ...     result = breaker.call(lessons.insert, lesson)
        ... except CircuitBreakerOpenError:
        ...     result = Result.failure("Store unavailable, try again later")
    """

    # Failed Results carrying these errors are normal answers, not outages
    DOMAIN_ERRORS: Tuple[Type[Exception], ...] = (
        UniqueConstraintError,
        RecordNotFoundError,
    )

    def __init__(
        self,
        failure_threshold: int = 5,
        timeout: timedelta = timedelta(seconds=60),
        expected_exception: Type[Exception] = RepositoryError,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize circuit breaker.

        Args:
            failure_threshold: Number of failures before opening circuit
            timeout: Time to wait before trying again (HALF_OPEN)
            expected_exception: Exception type to count as failure
            clock: Time source
        """
        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.expected_exception = expected_exception
        self._clock = clock

        # State
        self.failure_count = 0
        self.last_failure_time: Optional[datetime] = None
        self.state = CircuitState.CLOSED

        logger.info(
            f"Circuit breaker initialized: "
            f"threshold={failure_threshold}, timeout={timeout}"
        )

    def call(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute a store operation with circuit breaker protection.

        Args:
            func: Store operation to execute
            *args: Positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Whatever func returns (usually a Result)

        Raises:
            CircuitBreakerOpenError: If circuit is OPEN
            Exception: Any exception raised by func
        """
        if self.state == CircuitState.OPEN:
            if self._should_attempt_reset():
                logger.info("Circuit breaker: Entering HALF_OPEN state")
                self.state = CircuitState.HALF_OPEN
            else:
                raise CircuitBreakerOpenError(
                    f"Circuit breaker is OPEN (failures: {self.failure_count})"
                )

        try:
            result = func(*args, **kwargs)
        except self.expected_exception:
            self._on_failure()
            raise

        if self._is_store_failure(result):
            self._on_failure()
        else:
            self._on_success()
        return result

    def _is_store_failure(self, result: Any) -> bool:
        if not isinstance(result, Result) or result.is_success:
            return False
        return not isinstance(result.error, self.DOMAIN_ERRORS)

    def _should_attempt_reset(self) -> bool:
        """Check if enough time has passed to attempt reset."""
        if self.last_failure_time is None:
            return True

        time_since_failure = self._clock() - self.last_failure_time
        return time_since_failure > self.timeout

    def _on_success(self):
        """Handle successful call."""
        if self.state == CircuitState.HALF_OPEN:
            logger.info("Circuit breaker: Back to CLOSED state")
            self.state = CircuitState.CLOSED

        self.failure_count = 0

    def _on_failure(self):
        """Handle failed call."""
        self.failure_count += 1
        self.last_failure_time = self._clock()

        logger.warning(
            f"Circuit breaker: Failure #{self.failure_count} "
            f"(threshold={self.failure_threshold})"
        )

        if self.state == CircuitState.HALF_OPEN or self.failure_count >= self.failure_threshold:
            logger.error(
                f"Circuit breaker: OPEN after {self.failure_count} failures"
            )
            self.state = CircuitState.OPEN

    def reset(self):
        """Manually reset circuit breaker to CLOSED state."""
        logger.info("Circuit breaker: Manual reset to CLOSED")
        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.last_failure_time = None

    @property
    def is_open(self) -> bool:
        """Check if circuit is OPEN."""
        return self.state == CircuitState.OPEN

    @property
    def is_closed(self) -> bool:
        """Check if circuit is CLOSED."""
        return self.state == CircuitState.CLOSED

    @property
    def is_half_open(self) -> bool:
        """Check if circuit is HALF_OPEN."""
        return self.state == CircuitState.HALF_OPEN

    def get_state_info(self) -> dict:
        """
        Get current circuit breaker state information.

        Returns:
            Dictionary with state, failure count, and last failure time
        """
        return {
            "state": self.state.value,
            "failure_count": self.failure_count,
            "last_failure_time": (
                self.last_failure_time.isoformat()
                if self.last_failure_time
                else None
            ),
            "failure_threshold": self.failure_threshold,
        }
