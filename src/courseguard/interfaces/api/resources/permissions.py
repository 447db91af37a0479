"""Permissions API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from courseguard.application.ports import UnitOfWorkFactory
from courseguard.domain.entities import Permission
from courseguard.domain.value_objects import Grant, PermissionCheck, SystemAction, SystemResource
from courseguard.interfaces.api.permission_guard import PermissionGuard, require


def permission_to_dict(p: Permission) -> dict:
    return {
        "id": str(p.id),
        "name": p.name,
        "description": p.description,
        "resource": p.resource,
        "action": p.action,
        "conditions": [c.to_dict() for c in p.conditions or ()],
    }


def grant_to_dict(g: Grant) -> dict:
    return {
        "resource": g.resource,
        "actions": sorted(g.actions),
        "conditions": [c.to_dict() for c in g.conditions],
    }


class PermissionsResource:
    """GET /v1/permissions - list every defined permission."""

    def __init__(self, guard: PermissionGuard, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory

    @falcon.before(require(SystemResource.PERMISSION, SystemAction.READ))
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()
        resp.media = {
            "items": [permission_to_dict(p) for p in permissions],
            "total": len(permissions),
        }
        resp.status = falcon.HTTP_200


class PermissionResource:
    """GET /v1/permissions/{permission_id} - one permission."""

    def __init__(self, guard: PermissionGuard, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory

    @falcon.before(require(SystemResource.PERMISSION, SystemAction.READ))
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        try:
            pid = UUID(permission_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid permission ID"}
            return

        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(pid)
        if not permission:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Permission not found"}
            return

        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200


class PermissionCheckResource:
    """POST /v1/permissions/check - evaluate a check for the current user."""

    def __init__(self, guard: PermissionGuard) -> None:
        self.guard = guard

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            resource = body["resource"]
            action = body["action"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        if not isinstance(resource, str) or not isinstance(action, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "resource and action must be strings"}
            return

        context = body.get("context") or {}
        if not isinstance(context, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "context must be an object"}
            return

        allowed = await self.guard.evaluator.check_permission(
            user, PermissionCheck(resource=resource, action=action, context=context)
        )
        resp.media = {"resource": resource, "action": action, "allowed": allowed}
        resp.status = falcon.HTTP_200


class MyPermissionsResource:
    """GET /v1/permissions/me - grants held by the current user's role."""

    def __init__(self, guard: PermissionGuard) -> None:
        self.guard = guard

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        grants = await self.guard.evaluator.get_role_grants(user.role) if user.role else []
        resp.media = {
            "user_id": user.id,
            "role": user.role,
            "items": [grant_to_dict(g) for g in grants],
        }
        resp.status = falcon.HTTP_200
