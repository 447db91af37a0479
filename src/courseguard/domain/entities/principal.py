"""Principal - the authenticated actor."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Principal:
    """Authenticated user identified by id and role."""

    id: str
    role: str
    email: str | None = None
    username: str | None = None
    profile: dict[str, Any] = field(default_factory=dict)
