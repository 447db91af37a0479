"""Domain entities."""

from courseguard.domain.entities.permission import Permission
from courseguard.domain.entities.principal import Principal
from courseguard.domain.entities.role_permission import RolePermission

__all__ = [
    "Permission",
    "Principal",
    "RolePermission",
]
