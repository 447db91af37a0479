"""Application entry point and composition root."""

import logging

from courseguard import __version__
from courseguard.application.services.permission_evaluator import PermissionEvaluator
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
from courseguard.config import get_settings
from courseguard.domain.default_grants import DEFAULT_GRANTS
from courseguard.infrastructure.auth.keycloak_provider import KeycloakProvider
from courseguard.infrastructure.permission.store_permission_source import (
    StorePermissionSource,
)
from courseguard.infrastructure.persistence.postgres.connection import create_pool
from courseguard.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from courseguard.interfaces.api.app import create_app
from courseguard.interfaces.api.middleware.auth import AuthMiddleware
from courseguard.interfaces.api.middleware.cors import CORSMiddleware
from courseguard.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from courseguard.interfaces.api.permission_guard import PermissionGuard
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


def configure_logging(level: str) -> None:
    """Root logger setup for the service process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    print(f"CourseGuard v{__version__}")


def create_courseguard_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set, all requests are unauthenticated")

    permission_source = StorePermissionSource(
        uow_factory,
        fallback_grants=DEFAULT_GRANTS if settings.use_default_grants else None,
    )
    evaluator = PermissionEvaluator(
        permission_source,
        cache_timeout=settings.permission_cache_timeout,
    )
    guard = PermissionGuard(evaluator)

    get_role_permissions = GetRolePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        permission_evaluator=evaluator,
    )
    list_available = ListAvailablePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        permission_evaluator=evaluator,
    )
    assign_permissions = AssignPermissionsUseCase(
        unit_of_work_factory=uow_factory,
        permission_evaluator=evaluator,
    )
    replace_role_permissions = ReplaceRolePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        permission_evaluator=evaluator,
    )
    revoke_permission = RevokePermissionUseCase(
        unit_of_work_factory=uow_factory,
        permission_evaluator=evaluator,
    )
    copy_role_permissions = CopyRolePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        permission_evaluator=evaluator,
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        health_resource=HealthResource(readiness_probe=pool.check),
        permissions_resource=PermissionsResource(guard, uow_factory),
        permission_resource=PermissionResource(guard, uow_factory),
        permission_check_resource=PermissionCheckResource(guard),
        my_permissions_resource=MyPermissionsResource(guard),
        role_permissions_resource=RolePermissionsResource(
            get_role_permissions, assign_permissions, replace_role_permissions
        ),
        available_permissions_resource=AvailablePermissionsResource(list_available),
        role_permission_revoke_resource=RolePermissionRevokeResource(revoke_permission),
        role_permissions_copy_resource=RolePermissionsCopyResource(copy_role_permissions),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_courseguard_app(),
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
    )
