"""Role permission queries."""

from courseguard.application.dto.role_permission_dto import (
    RolePermissionItem,
    RolePermissionSummary,
)
from courseguard.application.ports import UnitOfWorkFactory
from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.application.use_cases.permission.guards import require_permission, validate_role
from courseguard.domain.entities import Permission, Principal
from courseguard.domain.value_objects import SystemAction, SystemResource


class GetRolePermissionsUseCase:
    """Summary of the permissions granted to a role."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_evaluator: PermissionEvaluator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._evaluator = permission_evaluator

    async def execute(self, actor: Principal, role: str) -> RolePermissionSummary:
        validate_role(role)
        await require_permission(self._evaluator, actor, SystemResource.ROLE, SystemAction.READ)

        async with self._uow_factory() as uow:
            bindings = await uow.role_permissions.list_by_role(role)

        items = [
            RolePermissionItem(
                id=perm.id,
                name=perm.name,
                description=perm.description or "",
                resource=perm.resource,
                action=perm.action,
                granted_at=rp.granted_at,
                granted_by=rp.granted_by,
            )
            for rp, perm in bindings
        ]
        return RolePermissionSummary(role=role, permissions=items)


class ListAvailablePermissionsUseCase:
    """Permissions not yet granted to a role, ordered by resource and action."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_evaluator: PermissionEvaluator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._evaluator = permission_evaluator

    async def execute(self, actor: Principal, role: str) -> list[Permission]:
        validate_role(role)
        await require_permission(
            self._evaluator, actor, SystemResource.PERMISSION, SystemAction.ASSIGN
        )

        async with self._uow_factory() as uow:
            bound = {rp.permission_id for rp, _ in await uow.role_permissions.list_by_role(role)}
            permissions = await uow.permissions.list_all()

        available = [p for p in permissions if p.id not in bound]
        available.sort(key=lambda p: (p.resource, p.action, p.name))
        return available
