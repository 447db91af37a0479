"""Grant - what a role may do on one resource."""

from dataclasses import dataclass

from courseguard.domain.value_objects.condition import Condition
from courseguard.domain.value_objects.system_action import WILDCARD_ACTION


@dataclass(frozen=True)
class Grant:
    """Resource, allowed actions and the conditions that must all hold."""

    resource: str
    actions: frozenset[str]
    conditions: tuple[Condition, ...] = ()

    def allows(self, resource: str, action: str) -> bool:
        """True if resource matches and action is listed or wildcarded."""
        if self.resource != resource:
            return False
        return WILDCARD_ACTION in self.actions or action in self.actions
