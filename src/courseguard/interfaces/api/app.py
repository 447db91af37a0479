"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from courseguard.interfaces.api.resources.health import HealthResource
from courseguard.interfaces.api.resources.permissions import (
    MyPermissionsResource,
    PermissionCheckResource,
    PermissionResource,
    PermissionsResource,
)
from courseguard.interfaces.api.resources.roles import (
    AvailablePermissionsResource,
    RolePermissionRevokeResource,
    RolePermissionsCopyResource,
    RolePermissionsResource,
)

logger = logging.getLogger(__name__)


async def handle_unexpected(req, resp, ex, params) -> None:
    """Log unhandled exceptions and answer with a bare 500."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    health_resource: HealthResource,
    permissions_resource: PermissionsResource,
    permission_resource: PermissionResource,
    permission_check_resource: PermissionCheckResource,
    my_permissions_resource: MyPermissionsResource,
    role_permissions_resource: RolePermissionsResource,
    available_permissions_resource: AvailablePermissionsResource,
    role_permission_revoke_resource: RolePermissionRevokeResource,
    role_permissions_copy_resource: RolePermissionsCopyResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/permissions", permissions_resource)
    app.add_route("/v1/permissions/check", permission_check_resource)
    app.add_route("/v1/permissions/me", my_permissions_resource)
    app.add_route("/v1/permissions/{permission_id}", permission_resource)
    app.add_route("/v1/roles/{role}/permissions", role_permissions_resource)
    app.add_route(
        "/v1/roles/{role}/permissions/available", available_permissions_resource
    )
    app.add_route(
        "/v1/roles/{role}/permissions/{permission_id}", role_permission_revoke_resource
    )
    app.add_route(
        "/v1/roles/{role}/permissions/copy/{to_role}",
        role_permissions_copy_resource,
    )
    return app
