"""PostgreSQL role permission repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from courseguard.domain.entities import Permission, RolePermission
from courseguard.infrastructure.persistence.postgres.permission_repository import (
    row_to_permission,
)


class PostgresRolePermissionRepository:
    """Role permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_role(self, role: str) -> list[tuple[RolePermission, Permission]]:
        """List bindings of role joined with their permissions."""
        cur = await self._conn.execute(
            "SELECT rp.id, rp.role, rp.permission_id, rp.granted_at, rp.granted_by, "
            "p.id, p.name, p.description, p.resource, p.action, p.conditions, "
            "p.created_at, p.updated_at "
            "FROM role_permissions rp JOIN permissions p ON p.id = rp.permission_id "
            "WHERE rp.role = %s ORDER BY p.resource, p.action",
            (role,),
        )
        rows = await cur.fetchall()
        return [
            (
                RolePermission(
                    id=r[0],
                    role=r[1],
                    permission_id=r[2],
                    granted_at=r[3],
                    granted_by=r[4],
                ),
                row_to_permission(r[5:]),
            )
            for r in rows
        ]

    async def get(self, role: str, permission_id: UUID) -> RolePermission | None:
        """Get binding of permission to role."""
        cur = await self._conn.execute(
            "SELECT id, role, permission_id, granted_at, granted_by "
            "FROM role_permissions WHERE role = %s AND permission_id = %s",
            (role, permission_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return RolePermission(
            id=r[0],
            role=r[1],
            permission_id=r[2],
            granted_at=r[3],
            granted_by=r[4],
        )

    async def create(self, role_permission: RolePermission) -> RolePermission:
        """Create binding."""
        await self._conn.execute(
            "INSERT INTO role_permissions (id, role, permission_id, granted_at, granted_by) "
            "VALUES (%s, %s, %s, %s, %s)",
            (
                role_permission.id,
                role_permission.role,
                role_permission.permission_id,
                role_permission.granted_at,
                role_permission.granted_by,
            ),
        )
        return role_permission

    async def delete(self, role: str, permission_id: UUID) -> None:
        """Delete binding."""
        await self._conn.execute(
            "DELETE FROM role_permissions WHERE role = %s AND permission_id = %s",
            (role, permission_id),
        )

    async def delete_by_role(self, role: str) -> None:
        """Delete every binding of role."""
        await self._conn.execute(
            "DELETE FROM role_permissions WHERE role = %s",
            (role,),
        )
