"""Permission evaluator - role grants refined by context conditions."""

import logging
import time
from collections.abc import Callable, Iterable

from courseguard.application.ports import PermissionSource
from courseguard.application.services.condition_evaluator import conditions_hold
from courseguard.application.services.grant_cache import GrantCache
from courseguard.domain.entities import Principal
from courseguard.domain.value_objects import Grant, PermissionCheck

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TIMEOUT = 300.0


class PermissionEvaluator:
    """Decides whether a principal may perform an action on a resource.

    Grants for a role are loaded from the permission source once and reused
    until the cache timeout elapses or the cache is cleared. Source failures
    propagate to the caller and are never cached.

    A check passes when at least one grant for the resource allows the action
    (directly or via "*") and all of that grant's conditions hold against the
    check context merged with {"user": principal}.
    """

    def __init__(
        self,
        permission_source: PermissionSource,
        cache_timeout: float = DEFAULT_CACHE_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = permission_source
        self._cache = GrantCache(cache_timeout, clock)

    async def get_role_grants(self, role: str) -> list[Grant]:
        """Grants held by role, from cache when fresh."""
        entry = self._cache.get(role)
        if entry is not None:
            return list(entry.grants)

        logger.debug("Grant cache miss for role %r, loading from source", role)
        grants = await self._source.load_grants(role)
        entry = self._cache.put(role, grants)
        return list(entry.grants)

    async def check_permission(self, principal: Principal, check: PermissionCheck) -> bool:
        """Check a single permission."""
        if not principal.role:
            return False

        grants = await self.get_role_grants(principal.role)
        context = {**check.context, "user": principal}
        for grant in grants:
            if not grant.allows(check.resource, check.action):
                continue
            if conditions_hold(grant.conditions, context, principal):
                return True
        return False

    async def check_any_permission(
        self, principal: Principal, checks: Iterable[PermissionCheck]
    ) -> bool:
        """True if any check passes; stops at the first that does."""
        for check in checks:
            if await self.check_permission(principal, check):
                return True
        return False

    async def check_all_permissions(
        self, principal: Principal, checks: Iterable[PermissionCheck]
    ) -> bool:
        """True if every check passes; stops at the first that fails."""
        for check in checks:
            if not await self.check_permission(principal, check):
                return False
        return True

    def clear_role_cache(self, role: str) -> None:
        self._cache.invalidate(role)

    def clear_all_cache(self) -> None:
        self._cache.invalidate_all()
