"""Role permission administration resources."""

from uuid import UUID

import falcon
import falcon.asgi

from courseguard.application.use_cases.permission.assign_permissions import (
    AssignPermissionsUseCase,
)
from courseguard.application.use_cases.permission.copy_role_permissions import (
    CopyRolePermissionsUseCase,
)
from courseguard.application.use_cases.permission.get_role_permissions import (
    GetRolePermissionsUseCase,
    ListAvailablePermissionsUseCase,
)
from courseguard.application.use_cases.permission.replace_role_permissions import (
    ReplaceRolePermissionsUseCase,
)
from courseguard.application.use_cases.permission.revoke_permission import (
    RevokePermissionUseCase,
)
from courseguard.domain.exceptions import NotFound, PermissionDenied, ValidationError
from courseguard.interfaces.api.resources.permissions import permission_to_dict

_ERROR_STATUS = {
    ValidationError: falcon.HTTP_400,
    PermissionDenied: falcon.HTTP_403,
    NotFound: falcon.HTTP_404,
}


def _fail(resp: falcon.asgi.Response, e: Exception) -> None:
    resp.status = _ERROR_STATUS[type(e)]
    resp.media = {"error": "Permission denied" if isinstance(e, PermissionDenied) else str(e)}


def _unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized"}


def _parse_permission_ids(body: dict, allow_empty: bool = False) -> list[UUID]:
    raw = body.get("permission_ids") if isinstance(body, dict) else None
    if not isinstance(raw, list) or (not raw and not allow_empty):
        raise ValidationError("permission_ids must be a non-empty list")
    try:
        return [UUID(str(v)) for v in raw]
    except ValueError:
        raise ValidationError("permission_ids must contain UUIDs") from None


class RolePermissionsResource:
    """GET/POST/PUT /v1/roles/{role}/permissions - view, assign, replace."""

    def __init__(
        self,
        get_role_permissions: GetRolePermissionsUseCase,
        assign_permissions: AssignPermissionsUseCase,
        replace_role_permissions: ReplaceRolePermissionsUseCase,
    ) -> None:
        self._get = get_role_permissions
        self._assign = assign_permissions
        self._replace = replace_role_permissions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str
    ) -> None:
        """Permissions granted to role."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            summary = await self._get.execute(user, role)
        except (ValidationError, PermissionDenied) as e:
            _fail(resp, e)
            return

        resp.media = {
            "role": summary.role,
            "total": summary.total,
            "permissions": [
                {
                    "id": str(item.id),
                    "name": item.name,
                    "description": item.description,
                    "resource": item.resource,
                    "action": item.action,
                    "granted_at": item.granted_at.isoformat(),
                    "granted_by": item.granted_by,
                }
                for item in summary.permissions
            ],
        }
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str
    ) -> None:
        """Assign permissions to role."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            body = await req.get_media()
            permission_ids = _parse_permission_ids(body)
            created = await self._assign.execute(user, role, permission_ids)
        except (ValidationError, PermissionDenied, NotFound) as e:
            _fail(resp, e)
            return

        resp.media = {
            "role": role,
            "assigned_count": len(created),
            "permission_ids": [str(rp.permission_id) for rp in created],
        }
        resp.status = falcon.HTTP_201

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str
    ) -> None:
        """Replace all permissions of role."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            body = await req.get_media()
            permission_ids = _parse_permission_ids(body, allow_empty=True)
            created = await self._replace.execute(user, role, permission_ids)
        except (ValidationError, PermissionDenied, NotFound) as e:
            _fail(resp, e)
            return

        resp.media = {
            "role": role,
            "assigned_count": len(created),
            "permission_ids": [str(rp.permission_id) for rp in created],
        }
        resp.status = falcon.HTTP_200


class AvailablePermissionsResource:
    """GET /v1/roles/{role}/permissions/available - permissions role lacks."""

    def __init__(self, list_available: ListAvailablePermissionsUseCase) -> None:
        self._list_available = list_available

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            permissions = await self._list_available.execute(user, role)
        except (ValidationError, PermissionDenied) as e:
            _fail(resp, e)
            return

        resp.media = {
            "items": [permission_to_dict(p) for p in permissions],
            "total": len(permissions),
        }
        resp.status = falcon.HTTP_200


class RolePermissionRevokeResource:
    """DELETE /v1/roles/{role}/permissions/{permission_id} - revoke."""

    def __init__(self, revoke_permission: RevokePermissionUseCase) -> None:
        self._revoke = revoke_permission

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role: str,
        permission_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            perm_id = UUID(permission_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid permission ID"}
            return

        try:
            await self._revoke.execute(user, role, perm_id)
        except (ValidationError, PermissionDenied, NotFound) as e:
            _fail(resp, e)
            return
        resp.status = falcon.HTTP_204


class RolePermissionsCopyResource:
    """POST /v1/roles/{role}/permissions/copy/{to_role} - copy role onto to_role."""

    def __init__(self, copy_role_permissions: CopyRolePermissionsUseCase) -> None:
        self._copy = copy_role_permissions

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role: str,
        to_role: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            created = await self._copy.execute(user, role, to_role)
        except (ValidationError, PermissionDenied) as e:
            _fail(resp, e)
            return

        resp.media = {
            "from_role": role,
            "to_role": to_role,
            "copied_count": len(created),
        }
        resp.status = falcon.HTTP_200
