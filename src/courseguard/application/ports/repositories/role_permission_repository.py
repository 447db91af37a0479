"""Role permission repository port."""

from typing import Protocol
from uuid import UUID

from courseguard.domain.entities import Permission, RolePermission


class RolePermissionRepository(Protocol):
    """Port for role-to-permission bindings."""

    async def list_by_role(self, role: str) -> list[tuple[RolePermission, Permission]]: ...

    async def get(self, role: str, permission_id: UUID) -> RolePermission | None: ...

    async def create(self, role_permission: RolePermission) -> RolePermission: ...

    async def delete(self, role: str, permission_id: UUID) -> None: ...

    async def delete_by_role(self, role: str) -> None: ...
