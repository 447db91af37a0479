"""Unit tests for role permission use cases."""

from uuid import uuid4

import pytest

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
from courseguard.domain.entities import Principal
from courseguard.domain.exceptions import NotFound, PermissionDenied, ValidationError

from tests.conftest import FakeUnitOfWork, StaticPermissionSource, make_permission


def _seed(uow: FakeUnitOfWork):
    read = uow.permissions.add(make_permission("course.read", "course", "read"))
    create = uow.permissions.add(make_permission("course.create", "course", "create"))
    delete = uow.permissions.add(make_permission("course.delete", "course", "delete"))
    return read, create, delete


# --- AssignPermissionsUseCase ---


@pytest.mark.asyncio
async def test_assign_permissions_success(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, create, _ = _seed(fake_uow)
    use_case = AssignPermissionsUseCase(uow_factory, evaluator)

    created = await use_case.execute(admin, "student", [read.id, create.id, read.id])

    assert [rp.permission_id for rp in created] == [read.id, create.id]
    assert all(rp.granted_by == admin.id for rp in created)
    assert len(await fake_uow.role_permissions.list_by_role("student")) == 2


@pytest.mark.asyncio
async def test_assign_skips_already_granted(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, create, _ = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)
    use_case = AssignPermissionsUseCase(uow_factory, evaluator)

    created = await use_case.execute(admin, "student", [read.id, create.id])

    assert [rp.permission_id for rp in created] == [create.id]


@pytest.mark.asyncio
async def test_assign_permission_denied_for_student(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, student: Principal
) -> None:
    read, _, _ = _seed(fake_uow)
    use_case = AssignPermissionsUseCase(uow_factory, evaluator)

    with pytest.raises(PermissionDenied):
        await use_case.execute(student, "student", [read.id])
    assert await fake_uow.role_permissions.list_by_role("student") == []


@pytest.mark.asyncio
async def test_assign_unknown_permission_not_found(
    uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    use_case = AssignPermissionsUseCase(uow_factory, evaluator)
    with pytest.raises(NotFound):
        await use_case.execute(admin, "student", [uuid4()])


@pytest.mark.asyncio
async def test_assign_validation(uow_factory, evaluator: PermissionEvaluator, admin: Principal) -> None:
    use_case = AssignPermissionsUseCase(uow_factory, evaluator)
    with pytest.raises(ValidationError):
        await use_case.execute(admin, "guest", [uuid4()])
    with pytest.raises(ValidationError):
        await use_case.execute(admin, "student", [])


@pytest.mark.asyncio
async def test_assign_evicts_role_cache(
    fake_uow: FakeUnitOfWork, uow_factory, clock, admin: Principal, student: Principal
) -> None:
    """Changes made through the use case are visible on the next check."""
    from courseguard.infrastructure.permission.store_permission_source import (
        StorePermissionSource,
    )
    from courseguard.domain.value_objects import PermissionCheck

    assign = fake_uow.permissions.add(make_permission("permission.assign", "permission", "assign"))
    fake_uow.role_permissions.grant("admin", assign)
    read, _, _ = _seed(fake_uow)
    evaluator = PermissionEvaluator(StorePermissionSource(uow_factory), clock=clock)
    check = PermissionCheck(resource="course", action="read")

    assert not await evaluator.check_permission(student, check)
    await AssignPermissionsUseCase(uow_factory, evaluator).execute(admin, "student", [read.id])
    assert await evaluator.check_permission(student, check)


# --- RevokePermissionUseCase ---


@pytest.mark.asyncio
async def test_revoke_permission_success(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, _, _ = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)

    await RevokePermissionUseCase(uow_factory, evaluator).execute(admin, "student", read.id)

    assert await fake_uow.role_permissions.get("student", read.id) is None


@pytest.mark.asyncio
async def test_revoke_missing_binding_not_found(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, _, _ = _seed(fake_uow)
    with pytest.raises(NotFound):
        await RevokePermissionUseCase(uow_factory, evaluator).execute(admin, "student", read.id)


@pytest.mark.asyncio
async def test_revoke_requires_revoke_action(fake_uow: FakeUnitOfWork, uow_factory, clock) -> None:
    from tests.conftest import grant

    source = StaticPermissionSource({"admin": [grant("permission", "assign")]})
    evaluator = PermissionEvaluator(source, clock=clock)
    read, _, _ = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)

    with pytest.raises(PermissionDenied):
        await RevokePermissionUseCase(uow_factory, evaluator).execute(
            Principal(id="a", role="admin"), "student", read.id
        )


# --- ReplaceRolePermissionsUseCase ---


@pytest.mark.asyncio
async def test_replace_role_permissions(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, create, delete = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)
    fake_uow.role_permissions.grant("student", delete)

    created = await ReplaceRolePermissionsUseCase(uow_factory, evaluator).execute(
        admin, "student", [create.id]
    )

    assert [rp.permission_id for rp in created] == [create.id]
    bound = [rp.permission_id for rp, _ in await fake_uow.role_permissions.list_by_role("student")]
    assert bound == [create.id]


@pytest.mark.asyncio
async def test_replace_with_empty_list_clears_role(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, _, _ = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)

    created = await ReplaceRolePermissionsUseCase(uow_factory, evaluator).execute(
        admin, "student", []
    )

    assert created == []
    assert await fake_uow.role_permissions.list_by_role("student") == []


@pytest.mark.asyncio
async def test_replace_unknown_permission_keeps_existing(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, _, _ = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)

    with pytest.raises(NotFound):
        await ReplaceRolePermissionsUseCase(uow_factory, evaluator).execute(
            admin, "student", [uuid4()]
        )
    assert len(await fake_uow.role_permissions.list_by_role("student")) == 1


# --- CopyRolePermissionsUseCase ---


@pytest.mark.asyncio
async def test_copy_role_permissions(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, create, delete = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)
    fake_uow.role_permissions.grant("student", create)
    fake_uow.role_permissions.grant("admin", delete)

    copied = await CopyRolePermissionsUseCase(uow_factory, evaluator).execute(
        admin, "student", "admin"
    )

    assert {rp.permission_id for rp in copied} == {read.id, create.id}
    bound = {rp.permission_id for rp, _ in await fake_uow.role_permissions.list_by_role("admin")}
    assert bound == {read.id, create.id}


@pytest.mark.asyncio
async def test_copy_from_empty_role_leaves_target(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    _, _, delete = _seed(fake_uow)
    fake_uow.role_permissions.grant("admin", delete)

    copied = await CopyRolePermissionsUseCase(uow_factory, evaluator).execute(
        admin, "student", "admin"
    )

    assert copied == []
    assert len(await fake_uow.role_permissions.list_by_role("admin")) == 1


@pytest.mark.asyncio
async def test_copy_same_role_rejected(
    uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    with pytest.raises(ValidationError):
        await CopyRolePermissionsUseCase(uow_factory, evaluator).execute(admin, "admin", "admin")


# --- Queries ---


@pytest.mark.asyncio
async def test_get_role_permissions_summary(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, create, _ = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)
    fake_uow.role_permissions.grant("student", create)

    summary = await GetRolePermissionsUseCase(uow_factory, evaluator).execute(admin, "student")

    assert summary.role == "student"
    assert summary.total == 2
    assert {item.name for item in summary.permissions} == {"course.read", "course.create"}


@pytest.mark.asyncio
async def test_get_role_permissions_denied_for_student(
    uow_factory, evaluator: PermissionEvaluator, student: Principal
) -> None:
    with pytest.raises(PermissionDenied):
        await GetRolePermissionsUseCase(uow_factory, evaluator).execute(student, "student")


@pytest.mark.asyncio
async def test_list_available_permissions(
    fake_uow: FakeUnitOfWork, uow_factory, evaluator: PermissionEvaluator, admin: Principal
) -> None:
    read, create, delete = _seed(fake_uow)
    fake_uow.role_permissions.grant("student", read)

    available = await ListAvailablePermissionsUseCase(uow_factory, evaluator).execute(
        admin, "student"
    )

    assert [p.id for p in available] == [create.id, delete.id]
