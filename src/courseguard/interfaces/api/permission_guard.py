"""Permission guard - maps evaluator decisions onto HTTP responses.

No principal gives 401, a denied check gives 403 naming the required
permission, and an evaluator failure gives 500. Responders are protected with
Falcon ``before`` hooks built by ``require``, ``require_resource``,
``require_ownership``, ``require_any`` and ``require_all``; the hooks use the
``guard`` attribute of the resource they decorate.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import falcon
import falcon.asgi

from courseguard.application.services.context_path import resolve_path
from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.domain.entities import Principal
from courseguard.domain.value_objects import PermissionCheck

logger = logging.getLogger(__name__)

ResourceLoader = Callable[[falcon.asgi.Request, dict[str, Any]], Awaitable[Any]]


class PermissionForbidden(falcon.HTTPForbidden):
    """403 carrying the required permission(s) and the caller's role."""

    def __init__(self, required: str | list[str], role: str) -> None:
        super().__init__(title="Forbidden", description="Insufficient permissions")
        self.required = required
        self.role = role

    def to_dict(self, obj_type=dict):
        obj = super().to_dict(obj_type)
        obj["required"] = self.required
        obj["role"] = self.role
        return obj


class PermissionGuard:
    """Runs permission checks for a request."""

    def __init__(self, permission_evaluator: PermissionEvaluator) -> None:
        self._evaluator = permission_evaluator

    @property
    def evaluator(self) -> PermissionEvaluator:
        return self._evaluator

    def _principal(self, req: falcon.asgi.Request) -> Principal:
        principal = getattr(req.context, "user", None)
        if principal is None:
            raise falcon.HTTPUnauthorized(
                title="Unauthorized", description="Authentication required"
            )
        return principal

    async def _decide(self, decision: Awaitable[bool]) -> bool:
        try:
            return await decision
        except falcon.HTTPError:
            raise
        except Exception as e:
            logger.exception("Permission check failed")
            raise falcon.HTTPInternalServerError(
                title="Internal Server Error", description="Permission check failed"
            ) from e

    async def authorize(
        self,
        req: falcon.asgi.Request,
        resource: str,
        action: str,
        params: dict[str, Any] | None = None,
        load_resource: ResourceLoader | None = None,
    ) -> Principal:
        """Allow or raise; the loaded resource is exposed as req.context.permission_resource."""
        principal = self._principal(req)

        async def decide() -> bool:
            context: dict[str, Any] = {}
            if load_resource is not None:
                data = await load_resource(req, params or {})
                req.context.permission_resource = data
                context["resource"] = data
            return await self._evaluator.check_permission(
                principal, PermissionCheck(resource=resource, action=action, context=context)
            )

        if not await self._decide(decide()):
            raise PermissionForbidden(f"{resource}:{action}", principal.role)
        return principal

    async def authorize_ownership(
        self,
        req: falcon.asgi.Request,
        resource: str,
        action: str,
        params: dict[str, Any],
        load_resource: ResourceLoader,
        owner_field: str = "user_id",
    ) -> Principal:
        """Owner of the loaded resource passes; anyone else needs the permission."""
        principal = self._principal(req)

        async def decide() -> bool:
            data = await load_resource(req, params)
            req.context.permission_resource = data
            if resolve_path(data, owner_field) == principal.id:
                return True
            return await self._evaluator.check_permission(
                principal,
                PermissionCheck(resource=resource, action=action, context={"resource": data}),
            )

        if not await self._decide(decide()):
            raise PermissionForbidden(f"{resource}:{action}", principal.role)
        return principal

    async def authorize_any(
        self, req: falcon.asgi.Request, pairs: Sequence[tuple[str, str]]
    ) -> Principal:
        principal = self._principal(req)
        checks = [PermissionCheck(resource=r, action=a) for r, a in pairs]
        if not await self._decide(self._evaluator.check_any_permission(principal, checks)):
            raise PermissionForbidden([c.label for c in checks], principal.role)
        return principal

    async def authorize_all(
        self, req: falcon.asgi.Request, pairs: Sequence[tuple[str, str]]
    ) -> Principal:
        principal = self._principal(req)
        checks = [PermissionCheck(resource=r, action=a) for r, a in pairs]
        if not await self._decide(self._evaluator.check_all_permissions(principal, checks)):
            raise PermissionForbidden([c.label for c in checks], principal.role)
        return principal


def require(resource: str, action: str, load_resource: ResourceLoader | None = None):
    """Hook: caller must hold resource:action."""

    async def hook(req, resp, resource_obj, params) -> None:
        await resource_obj.guard.authorize(req, resource, action, params, load_resource)

    return hook


def require_resource(resource: str, action: str, id_param: str = "id"):
    """Hook: like require, with {"id", "resource_type"} from the route as resource data."""

    async def load(req, params) -> dict[str, Any]:
        return {"id": params.get(id_param), "resource_type": resource}

    return require(resource, action, load)


def require_ownership(
    resource: str,
    action: str,
    load_resource: ResourceLoader,
    owner_field: str = "user_id",
):
    """Hook: owner of the loaded resource, or holder of resource:action."""

    async def hook(req, resp, resource_obj, params) -> None:
        await resource_obj.guard.authorize_ownership(
            req, resource, action, params, load_resource, owner_field
        )

    return hook


def require_any(pairs: Sequence[tuple[str, str]]):
    """Hook: caller must hold at least one of the (resource, action) pairs."""

    async def hook(req, resp, resource_obj, params) -> None:
        await resource_obj.guard.authorize_any(req, pairs)

    return hook


def require_all(pairs: Sequence[tuple[str, str]]):
    """Hook: caller must hold every (resource, action) pair."""

    async def hook(req, resp, resource_obj, params) -> None:
        await resource_obj.guard.authorize_all(req, pairs)

    return hook
