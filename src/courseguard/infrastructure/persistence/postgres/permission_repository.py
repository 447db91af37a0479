"""PostgreSQL permission repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from courseguard.domain.entities import Permission
from courseguard.domain.value_objects import decode_conditions

_COLUMNS = "id, name, description, resource, action, conditions, created_at, updated_at"


def row_to_permission(r: tuple) -> Permission:
    """Map a permissions row (in _COLUMNS order) to the entity."""
    conditions = decode_conditions(r[5])
    return Permission(
        id=r[0],
        name=r[1],
        description=r[2],
        resource=r[3],
        action=r[4],
        conditions=list(conditions) or None,
        created_at=r[6],
        updated_at=r[7],
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return row_to_permission(r) if r else None

    async def list_all(self) -> list[Permission]:
        """List all permissions."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions ORDER BY resource, action, name"
        )
        rows = await cur.fetchall()
        return [row_to_permission(r) for r in rows]

    async def list_by_ids(self, permission_ids: list[UUID]) -> list[Permission]:
        """List permissions whose id is in permission_ids."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions WHERE id = ANY(%s)",
            (list(permission_ids),),
        )
        rows = await cur.fetchall()
        return [row_to_permission(r) for r in rows]
