"""
Role-based access.

Usage:
    >>> from driving_school.auth import CapabilityTable, has_permission
    >>> table = CapabilityTable.from_rows(role_permission_rows)
    >>> has_permission(table, current_user, "lessons", "create")
"""

from .permissions import ACTIONS, ADMIN_ROLE, MODULES, CapabilityTable, has_permission

__all__ = ["ACTIONS", "ADMIN_ROLE", "MODULES", "CapabilityTable", "has_permission"]
