"""
Record storage.

Usage:
    >>> from driving_school.repository import InMemoryRepository, LESSON_SLOT_CONSTRAINT
    >>> lessons = InMemoryRepository("lessons", constraints=[LESSON_SLOT_CONSTRAINT])
"""

from .interfaces import (
    Repository,
    RepositoryError,
    RecordNotFoundError,
    UniqueConstraintError,
)
from .memory import InMemoryRepository, UniqueConstraint, LESSON_SLOT_CONSTRAINT

__all__ = [
    "Repository",
    "RepositoryError",
    "RecordNotFoundError",
    "UniqueConstraintError",
    "InMemoryRepository",
    "UniqueConstraint",
    "LESSON_SLOT_CONSTRAINT",
]
