"""Role permission DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class RolePermissionItem:
    """Permission as granted to a role."""

    id: UUID
    name: str
    description: str
    resource: str
    action: str
    granted_at: datetime
    granted_by: str | None = None


@dataclass
class RolePermissionSummary:
    """All permissions held by a role."""

    role: str
    permissions: list[RolePermissionItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.permissions)
