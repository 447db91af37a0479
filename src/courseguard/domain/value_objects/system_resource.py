"""Resources guarded by the permission system."""

from enum import StrEnum


class SystemResource(StrEnum):
    """Resource tags used in permissions and checks."""

    USER = "user"
    COURSE = "course"
    SELECTION = "selection"
    PERMISSION = "permission"
    ROLE = "role"
    SYSTEM = "system"
