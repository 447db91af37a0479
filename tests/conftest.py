"""Pytest fixtures for CourseGuard tests."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.domain.default_grants import DEFAULT_GRANTS
from courseguard.domain.entities import Permission, Principal, RolePermission
from courseguard.domain.value_objects import Condition, Grant


# --- Fake repositories ---


class FakePermissionRepository:
    """In-memory permission repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Permission] = {}

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        return self._by_id.get(permission_id)

    async def list_all(self) -> list[Permission]:
        return sorted(self._by_id.values(), key=lambda p: (p.resource, p.action, p.name))

    async def list_by_ids(self, permission_ids: list[UUID]) -> list[Permission]:
        return [self._by_id[i] for i in dict.fromkeys(permission_ids) if i in self._by_id]

    def add(self, permission: Permission) -> Permission:
        """Helper to add permission for tests."""
        self._by_id[permission.id] = permission
        return permission


class FakeRolePermissionRepository:
    """In-memory role permission repository joined against permissions."""

    def __init__(self, permissions: FakePermissionRepository) -> None:
        self._permissions = permissions
        self._bindings: list[RolePermission] = []

    async def list_by_role(self, role: str) -> list[tuple[RolePermission, Permission]]:
        return [
            (rp, self._permissions._by_id[rp.permission_id])
            for rp in self._bindings
            if rp.role == role
        ]

    async def get(self, role: str, permission_id: UUID) -> RolePermission | None:
        for rp in self._bindings:
            if rp.role == role and rp.permission_id == permission_id:
                return rp
        return None

    async def create(self, role_permission: RolePermission) -> RolePermission:
        self._bindings.append(role_permission)
        return role_permission

    async def delete(self, role: str, permission_id: UUID) -> None:
        self._bindings = [
            rp
            for rp in self._bindings
            if not (rp.role == role and rp.permission_id == permission_id)
        ]

    async def delete_by_role(self, role: str) -> None:
        self._bindings = [rp for rp in self._bindings if rp.role != role]

    def grant(self, role: str, permission: Permission) -> RolePermission:
        """Helper to bind permission to role for tests."""
        rp = RolePermission(
            id=uuid4(),
            role=role,
            permission_id=permission.id,
            granted_at=datetime.now(UTC),
        )
        self._bindings.append(rp)
        return rp


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.role_permissions = FakeRolePermissionRepository(self.permissions)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


# --- Evaluator collaborators ---


class StaticPermissionSource:
    """PermissionSource with fixed grants per role; records every load."""

    def __init__(self, grants: dict[str, list[Grant]] | None = None) -> None:
        self.grants = grants or {}
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def load_grants(self, role: str) -> list[Grant]:
        self.calls.append(role)
        if self.error is not None:
            raise self.error
        return list(self.grants.get(role, []))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_permission(
    name: str,
    resource: str,
    action: str,
    conditions: list[Condition] | None = None,
) -> Permission:
    now = datetime.now(UTC)
    return Permission(
        id=uuid4(),
        name=name,
        resource=resource,
        action=action,
        created_at=now,
        updated_at=now,
        description=name,
        conditions=conditions,
    )


def grant(resource: str, *actions: str, conditions: list[Condition] | None = None) -> Grant:
    return Grant(resource=resource, actions=frozenset(actions), conditions=tuple(conditions or ()))


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the test's UnitOfWork."""

    @asynccontextmanager
    async def _factory():
        yield fake_uow

    return _factory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def default_source() -> StaticPermissionSource:
    """Source serving the built-in student/admin grants."""
    return StaticPermissionSource({role: list(g) for role, g in DEFAULT_GRANTS.items()})


@pytest.fixture
def evaluator(default_source: StaticPermissionSource, clock: FakeClock) -> PermissionEvaluator:
    return PermissionEvaluator(default_source, cache_timeout=300, clock=clock)


@pytest.fixture
def admin() -> Principal:
    return Principal(id="admin-1", role="admin", username="admin")


@pytest.fixture
def student() -> Principal:
    return Principal(id="student-1", role="student", username="alice")
