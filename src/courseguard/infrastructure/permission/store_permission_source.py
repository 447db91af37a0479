"""Permission source backed by the permission store."""

import logging
from collections.abc import Iterable, Mapping, Sequence

import psycopg

from courseguard.application.ports import UnitOfWorkFactory
from courseguard.domain.entities import Permission
from courseguard.domain.exceptions import StoreUnavailable
from courseguard.domain.value_objects import Condition, Grant

logger = logging.getLogger(__name__)


def group_grants(permissions: Iterable[Permission]) -> list[Grant]:
    """Merge permissions on the same resource with identical conditions.

    Permissions that differ in conditions stay separate grants so that each
    keeps its own condition list.
    """
    groups: list[tuple[str, tuple[Condition, ...], list[str]]] = []
    for perm in permissions:
        conditions = tuple(perm.conditions or ())
        for resource, group_conditions, actions in groups:
            if resource == perm.resource and group_conditions == conditions:
                if perm.action not in actions:
                    actions.append(perm.action)
                break
        else:
            groups.append((perm.resource, conditions, [perm.action]))
    return [
        Grant(resource=resource, actions=frozenset(actions), conditions=conditions)
        for resource, conditions, actions in groups
    ]


class StorePermissionSource:
    """Loads role grants through the Unit of Work.

    Falls back to built-in grants when the store holds nothing for a role.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        fallback_grants: Mapping[str, Sequence[Grant]] | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._fallback = fallback_grants or {}

    async def load_grants(self, role: str) -> list[Grant]:
        """Grants for role; raises StoreUnavailable when the store query fails."""
        try:
            async with self._uow_factory() as uow:
                bindings = await uow.role_permissions.list_by_role(role)
        except psycopg.Error as e:
            logger.exception("Failed to load grants for role %r", role)
            raise StoreUnavailable(f"Permission store unavailable: {e}") from e

        if not bindings:
            fallback = self._fallback.get(role)
            if fallback:
                logger.info("No stored grants for role %r, using built-in defaults", role)
                return list(fallback)
            return []

        return group_grants(perm for _, perm in bindings)
