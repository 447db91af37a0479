"""Actions that can be granted on resources."""

from enum import StrEnum

WILDCARD_ACTION = "*"


class SystemAction(StrEnum):
    """Action tags used in permissions and checks."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"
    MANAGE = "manage"
    ASSIGN = "assign"
    REVOKE = "revoke"
