"""Fixtures for API tests."""

import falcon.asgi
import pytest

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
from courseguard.domain.entities import Principal
from courseguard.interfaces.api.app import create_app
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

from tests.conftest import FakeUnitOfWork, make_permission


class HeaderUserMiddleware:
    """Middleware that sets context.user from X-User-Id / X-User-Role headers."""

    async def process_request(self, req, resp):
        user_id = req.get_header("X-User-Id")
        if user_id is None:
            req.context.user = None
            return
        req.context.user = Principal(id=user_id, role=req.get_header("X-User-Role") or "")


def as_user(user_id: str, role: str) -> dict[str, str]:
    return {"X-User-Id": user_id, "X-User-Role": role}


ADMIN = as_user("admin-1", "admin")
STUDENT = as_user("student-1", "student")


@pytest.fixture
def seeded_uow(fake_uow: FakeUnitOfWork) -> FakeUnitOfWork:
    """UnitOfWork holding a few course permissions, one bound to student."""
    read = fake_uow.permissions.add(make_permission("course.read", "course", "read"))
    fake_uow.permissions.add(make_permission("course.create", "course", "create"))
    fake_uow.permissions.add(make_permission("course.delete", "course", "delete"))
    fake_uow.role_permissions.grant("student", read)
    return fake_uow


@pytest.fixture
def guard(evaluator) -> PermissionGuard:
    return PermissionGuard(evaluator)


@pytest.fixture
def app(seeded_uow, uow_factory, evaluator, guard):
    """Falcon ASGI app wired like the composition root, over fakes."""
    return create_app(
        health_resource=HealthResource(),
        permissions_resource=PermissionsResource(guard, uow_factory),
        permission_resource=PermissionResource(guard, uow_factory),
        permission_check_resource=PermissionCheckResource(guard),
        my_permissions_resource=MyPermissionsResource(guard),
        role_permissions_resource=RolePermissionsResource(
            GetRolePermissionsUseCase(uow_factory, evaluator),
            AssignPermissionsUseCase(uow_factory, evaluator),
            ReplaceRolePermissionsUseCase(uow_factory, evaluator),
        ),
        available_permissions_resource=AvailablePermissionsResource(
            ListAvailablePermissionsUseCase(uow_factory, evaluator)
        ),
        role_permission_revoke_resource=RolePermissionRevokeResource(
            RevokePermissionUseCase(uow_factory, evaluator)
        ),
        role_permissions_copy_resource=RolePermissionsCopyResource(
            CopyRolePermissionsUseCase(uow_factory, evaluator)
        ),
        middleware=[HeaderUserMiddleware()],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
