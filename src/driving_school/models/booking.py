"""
Booking outcome models.

This module provides the data structures the lesson service hands back
to its caller after a scheduling attempt.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from enum import Enum


class BookingStatus(Enum):
    """Outcome of a scheduling attempt."""
    BOOKED = "booked"
    REJECTED = "rejected"
    CONFLICT = "conflict"
    FAILED = "failed"


@dataclass
class BookingOutcome:
    """
    Result of scheduling or editing a lesson.

    Attributes:
        status: Outcome status
        lesson: Persisted lesson record (BOOKED only)
        field_errors: Field name -> violation message (REJECTED only)
        error_message: Store or conflict error description

    Examples:
        >>> outcome = service.schedule_lesson(request)
        >>> if outcome.status == BookingStatus.REJECTED:
        ...     for field_name, message in outcome.field_errors.items():
        ...         print(f"{field_name}: {message}")
    """

    status: BookingStatus
    lesson: Optional[Dict[str, Any]] = None
    field_errors: Dict[str, str] = field(default_factory=dict)
    error_message: Optional[str] = None

    @classmethod
    def booked(cls, lesson: Dict[str, Any]) -> 'BookingOutcome':
        return cls(status=BookingStatus.BOOKED, lesson=lesson)

    @classmethod
    def rejected(cls, field_errors: Dict[str, str]) -> 'BookingOutcome':
        return cls(status=BookingStatus.REJECTED, field_errors=dict(field_errors))

    @classmethod
    def conflict(cls, message: str) -> 'BookingOutcome':
        return cls(status=BookingStatus.CONFLICT, error_message=message)

    @classmethod
    def failed(cls, message: str) -> 'BookingOutcome':
        return cls(status=BookingStatus.FAILED, error_message=message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the outcome
        """
        return {
            "status": self.status.value,
            "lesson": self.lesson,
            "field_errors": self.field_errors,
            "error_message": self.error_message,
        }

    @property
    def is_booked(self) -> bool:
        """Check if the lesson was persisted."""
        return self.status == BookingStatus.BOOKED

    @property
    def is_rejected(self) -> bool:
        """Check if validation rejected the request."""
        return self.status == BookingStatus.REJECTED

    @property
    def is_conflict(self) -> bool:
        """Check if the store refused a double booking."""
        return self.status == BookingStatus.CONFLICT
