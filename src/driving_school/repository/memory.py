"""
In-memory record store.

Each repository instance owns its records; there is no shared module
state. Unique constraints are checked inside the write itself, which is
how the one-scheduled-lesson-per-slot rule is enforced at the
persistence boundary rather than in the booking form.
"""

import copy
import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models.result import Result
from .interfaces import (
    Repository,
    RecordNotFoundError,
    UniqueConstraintError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UniqueConstraint:
    """
    Uniqueness of ``fields`` among records matching ``where``.

    Examples:
        >>> # One scheduled lesson per instructor, day and hour
        >>> UniqueConstraint(
        ...     fields=("instructor_id", "date", "time"),
        ...     where={"status": "scheduled"},
        ... )
    """

    fields: Tuple[str, ...]
    where: Dict[str, Any] = field(default_factory=dict)
    name: Optional[str] = None

    def applies_to(self, record: Dict[str, Any]) -> bool:
        return all(record.get(key) == value for key, value in self.where.items())

    def key(self, record: Dict[str, Any]) -> Tuple[Any, ...]:
        return tuple(record.get(f) for f in self.fields)

    def __hash__(self):
        return hash((self.fields, tuple(sorted(self.where.items())), self.name))


# One scheduled lesson per (instructor, date, time)
LESSON_SLOT_CONSTRAINT = UniqueConstraint(
    fields=("instructor_id", "date", "time"),
    where={"status": "scheduled"},
    name="lesson_slot",
)


class InMemoryRepository(Repository):
    """
    Repository backed by a dict of records.

    Writes are serialized with a lock so a constraint check and the
    write it guards happen as one step.

    Examples:
        >>> lessons = InMemoryRepository("lessons", constraints=[LESSON_SLOT_CONSTRAINT])
        >>> first = lessons.insert({"instructor_id": "i1", "date": "2025-10-15",
        ...                         "time": "09:00", "status": "scheduled"})
        >>> second = lessons.insert({"instructor_id": "i1", "date": "2025-10-15",
        ...                          "time": "09:00", "status": "scheduled"})
        >>> first.is_success, second.is_failure
        (True, True)
    """

    def __init__(
        self,
        table: str,
        records: Optional[Iterable[Dict[str, Any]]] = None,
        constraints: Optional[Iterable[UniqueConstraint]] = None
    ):
        """
        Initialize the repository.

        Args:
            table: Table name, used in log and error messages
            records: Initial records; ids are generated for records without one
            constraints: Unique constraints checked on every write
        """
        self.table = table
        self.constraints = list(constraints or [])
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

        for record in records or []:
            result = self.insert(record)
            if result.is_failure:
                raise result.error

    def _check_constraints(
        self,
        candidate: Dict[str, Any],
        ignore_id: Optional[str] = None
    ) -> Optional[UniqueConstraintError]:
        for constraint in self.constraints:
            if not constraint.applies_to(candidate):
                continue
            key = constraint.key(candidate)
            for record_id, existing in self._records.items():
                if record_id == ignore_id:
                    continue
                if constraint.applies_to(existing) and constraint.key(existing) == key:
                    label = constraint.name or ",".join(constraint.fields)
                    return UniqueConstraintError(
                        f"{self.table}: unique constraint '{label}' violated by {key} "
                        f"(held by {record_id})"
                    )
        return None

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        ascending: bool = True
    ) -> Result[List[Dict[str, Any]]]:
        with self._lock:
            rows = [
                copy.deepcopy(record) for record in self._records.values()
                if all(record.get(k) == v for k, v in (filters or {}).items())
            ]

        if order_by:
            rows.sort(
                key=lambda r: (r.get(order_by) is None, r.get(order_by)),
                reverse=not ascending
            )

        return Result.success(rows)

    def insert(self, record: Dict[str, Any]) -> Result[Dict[str, Any]]:
        stored = copy.deepcopy(record)
        stored.setdefault("id", uuid.uuid4().hex)
        stored["id"] = str(stored["id"])

        with self._lock:
            if stored["id"] in self._records:
                error = UniqueConstraintError(f"{self.table}: duplicate id {stored['id']}")
                logger.warning(str(error))
                return Result.failure(str(error), error)

            error = self._check_constraints(stored)
            if error:
                logger.warning(str(error))
                return Result.failure(str(error), error)

            self._records[stored["id"]] = stored

        logger.debug(f"{self.table}: inserted {stored['id']}")
        return Result.success(copy.deepcopy(stored))

    def update(self, record_id: str, changes: Dict[str, Any]) -> Result[Dict[str, Any]]:
        with self._lock:
            existing = self._records.get(record_id)
            if existing is None:
                error = RecordNotFoundError(f"{self.table}: record not found: {record_id}")
                return Result.failure(str(error), error)

            updated = {**existing, **copy.deepcopy(changes), "id": record_id}
            error = self._check_constraints(updated, ignore_id=record_id)
            if error:
                logger.warning(str(error))
                return Result.failure(str(error), error)

            self._records[record_id] = updated

        logger.debug(f"{self.table}: updated {record_id}")
        return Result.success(copy.deepcopy(updated))

    def remove(self, record_id: str) -> Result[None]:
        with self._lock:
            if self._records.pop(record_id, None) is None:
                error = RecordNotFoundError(f"{self.table}: record not found: {record_id}")
                return Result.failure(str(error), error)

        logger.debug(f"{self.table}: removed {record_id}")
        return Result.success(None)

    def __len__(self) -> int:
        return len(self._records)
