"""
Abstract interface for record storage.

Services depend on this interface rather than on a concrete store, so
the remote backend, the in-memory store and test mocks are swappable.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.result import Result


class RepositoryError(Exception):
    """Raised (or carried by a failed Result) when a store operation fails."""
    pass


class RecordNotFoundError(RepositoryError):
    """Raised when no record has the requested id."""
    pass


class UniqueConstraintError(RepositoryError):
    """Raised when a write would break a uniqueness constraint."""
    pass


class Repository(ABC):
    """
    Abstract interface for one table of records.

    Implementing classes must return Result<T> from every operation and
    never raise for store-level failures; the failed Result carries a
    RepositoryError subclass instead.
    """

    @abstractmethod
    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        ascending: bool = True
    ) -> Result[List[Dict[str, Any]]]:
        """
        List records.

        Args:
            filters: Field -> value equality filters, all of which must match
            order_by: Field to sort by
            ascending: Sort direction

        Returns:
            Result containing the matching records
        """
        pass

    @abstractmethod
    def insert(self, record: Dict[str, Any]) -> Result[Dict[str, Any]]:
        """
        Insert a record.

        Returns:
            Result containing the stored record, with its id
        """
        pass

    @abstractmethod
    def update(self, record_id: str, changes: Dict[str, Any]) -> Result[Dict[str, Any]]:
        """
        Apply changes to a record.

        Returns:
            Result containing the updated record
        """
        pass

    @abstractmethod
    def remove(self, record_id: str) -> Result[None]:
        """
        Delete a record.

        Returns:
            Result with None on success
        """
        pass

    def get(self, record_id: str) -> Result[Dict[str, Any]]:
        """
        Fetch one record by id.

        Returns:
            Result containing the record, failure with RecordNotFoundError if absent
        """
        listed = self.list({"id": record_id})
        if listed.is_failure:
            return Result.failure(listed.message, listed.error)
        if not listed.value:
            return Result.failure(
                f"Record not found: {record_id}",
                RecordNotFoundError(record_id)
            )
        return Result.success(listed.value[0])
