"""Repository ports."""

from courseguard.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from courseguard.application.ports.repositories.role_permission_repository import (
    RolePermissionRepository,
)

__all__ = [
    "PermissionRepository",
    "RolePermissionRepository",
]
