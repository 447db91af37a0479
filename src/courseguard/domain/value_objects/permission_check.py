"""Permission check request."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PermissionCheck:
    """Requested action on a resource with its dynamic context."""

    resource: str
    action: str
    context: Mapping[str, Any] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return f"{self.resource}:{self.action}"
