"""Permission source port - where the evaluator loads role grants from."""

from typing import Protocol

from courseguard.domain.value_objects import Grant


class PermissionSource(Protocol):
    """Port for loading the grants held by a role."""

    async def load_grants(self, role: str) -> list[Grant]: ...
