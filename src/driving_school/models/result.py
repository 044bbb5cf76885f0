"""
Result<T> pattern for store-facing operations.

Every call that crosses the persistence boundary (list, insert, update,
remove) reports its outcome as a Result instead of raising, so services
can chain store operations and surface failures to the caller.
"""

from dataclasses import dataclass
from typing import Optional, Generic, TypeVar, Callable
from enum import Enum


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Success/failure wrapper for repository and service operations.

    Attributes:
        status: Result status (SUCCESS or FAILURE)
        value: The result value if successful (None if failure)
        error: The exception that caused failure (None if success)
        message: Optional message describing the result

    Examples:
        >>> result = lessons.insert({"instructor_id": "i1", "time": "09:00"})
        >>> if result.is_success:
        ...     print(f"Booked lesson {result.value['id']}")

        >>> result = Result.failure("Lesson not found", RecordNotFoundError("42"))
        >>> result.unwrap_or(None) is None
        True
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            value: The result value
            message: Optional success message

        Returns:
            Result instance with SUCCESS status
        """
        return cls(
            status=ResultStatus.SUCCESS,
            value=value,
            message=message
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: Error message describing the failure
            error: Optional exception that caused the failure

        Returns:
            Result instance with FAILURE status
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error
        )

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the value if successful, otherwise ``default``."""
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Map a function over the success value.

        Examples:
            >>> rows = Result.success([{"id": "1"}, {"id": "2"}])
            >>> rows.map(len).value
            2
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)

        try:
            new_value = func(self.value)
            return Result.success(new_value, self.message)
        except Exception as e:
            return Result.failure(str(e), e)

    def and_then(self, func: Callable[[T], 'Result[U]']) -> 'Result[U]':
        """
        Chain another Result-returning operation on the success value.

        Examples:
            >>> found = lessons.list({"id": lesson_id})
            >>> updated = found.and_then(
            ...     lambda rows: lessons.update(rows[0]["id"], {"status": "completed"})
            ... )
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)
        return func(self.value)
