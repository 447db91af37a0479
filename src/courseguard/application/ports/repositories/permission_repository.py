"""Permission repository port."""

from typing import Protocol
from uuid import UUID

from courseguard.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission persistence."""

    async def get_by_id(self, permission_id: UUID) -> Permission | None: ...

    async def list_all(self) -> list[Permission]: ...

    async def list_by_ids(self, permission_ids: list[UUID]) -> list[Permission]: ...
