"""Permission entity - named grant of one action on one resource."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from courseguard.domain.value_objects import Condition


@dataclass
class Permission:
    """Permission - resource/action pair, optionally refined by conditions."""

    id: UUID
    name: str
    resource: str
    action: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    conditions: list[Condition] | None = None
