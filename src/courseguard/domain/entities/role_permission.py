"""RolePermission entity - binding of a permission to a role."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class RolePermission:
    """Role holds permission since granted_at, optionally granted by a user."""

    id: UUID
    role: str
    permission_id: UUID
    granted_at: datetime
    granted_by: str | None = None
