"""
Role capability table.

Answers "may this role perform this action on this module?" through one
query, replacing per-screen permission lookups.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, FrozenSet, Iterable, List, Literal, Mapping, Optional, Set, Tuple

logger = logging.getLogger(__name__)


Action = Literal["view", "create", "edit", "delete"]
ACTIONS: Tuple[str, ...] = ("view", "create", "edit", "delete")

ADMIN_ROLE = "admin"

# Modules in navigation order
MODULES: Tuple[str, ...] = (
    "dashboard",
    "students",
    "lessons",
    "schedule",
    "exams",
    "instructors",
    "vehicles",
    "sales",
    "financial",
    "reports",
    "users",
    "settings",
)


class CapabilityTable:
    """
    Mapping of (role, module, action) -> allowed.

    The admin role is allowed everything; any other triple is allowed
    only when it was granted.

    Examples:
        >>> table = CapabilityTable.from_rows([
        ...     {"role_id": "instructor", "module": "lessons", "action": "view"},
        ...     {"role_id": "instructor", "module": "schedule", "action": "view"},
        ... ])
        >>> table.can("instructor", "lessons", "view")
        True
        >>> table.can("instructor", "lessons", "delete")
        False
        >>> table.can("admin", "users", "delete")
        True
    """

    def __init__(self, grants: Optional[Mapping[str, Mapping[str, Iterable[str]]]] = None):
        """
        Initialize the table.

        Args:
            grants: role -> module -> allowed actions

        Raises:
            ValueError: If an action is not one of view/create/edit/delete
        """
        self._grants: Dict[str, Dict[str, FrozenSet[str]]] = {}
        for role, modules in (grants or {}).items():
            for module, actions in modules.items():
                self.grant(role, module, *actions)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> "CapabilityTable":
        """
        Build a table from role-permission rows.

        Args:
            rows: Records with role_id, module and action keys
        """
        grants: Dict[str, Dict[str, Set[str]]] = defaultdict(lambda: defaultdict(set))
        for row in rows:
            grants[row["role_id"]][row["module"]].add(row["action"])
        return cls(grants)

    def grant(self, role: str, module: str, *actions: str) -> None:
        """Allow ``actions`` on ``module`` for ``role``."""
        unknown = [a for a in actions if a not in ACTIONS]
        if unknown:
            raise ValueError(
                f"Unknown action(s) {', '.join(unknown)} "
                f"(must be one of: {', '.join(ACTIONS)})"
            )
        modules = self._grants.setdefault(role, {})
        modules[module] = modules.get(module, frozenset()) | frozenset(actions)

    def can(self, role: Optional[str], module: str, action: Action) -> bool:
        """Check if ``role`` may perform ``action`` on ``module``."""
        if not role:
            return False
        if role == ADMIN_ROLE:
            return True
        return action in self._grants.get(role, {}).get(module, frozenset())

    def visible_modules(self, role: Optional[str]) -> List[str]:
        """Modules the role may view, in navigation order."""
        return [module for module in MODULES if self.can(role, module, "view")]

    def to_dict(self) -> Dict[str, Dict[str, List[str]]]:
        return {
            role: {module: sorted(actions) for module, actions in modules.items()}
            for role, modules in self._grants.items()
        }


def has_permission(
    table: CapabilityTable,
    user: Optional[Mapping[str, Any]],
    module: str,
    action: Action
) -> bool:
    """
    Check a user record's permission.

    No user or an inactive user has no permissions.
    """
    if not user:
        return False
    if user.get("status", "active") != "active":
        logger.debug(f"Permission denied for inactive user {user.get('id')}")
        return False
    return table.can(user.get("role_id"), module, action)
