"""Revoke permission use case."""

from uuid import UUID

from courseguard.application.ports import UnitOfWorkFactory
from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.application.use_cases.permission.guards import require_permission, validate_role
from courseguard.domain.entities import Principal
from courseguard.domain.exceptions import NotFound
from courseguard.domain.value_objects import SystemAction, SystemResource


class RevokePermissionUseCase:
    """Remove a permission from a role."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_evaluator: PermissionEvaluator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._evaluator = permission_evaluator

    async def execute(self, actor: Principal, role: str, permission_id: UUID) -> None:
        """Revoke permission from role. Actor must have permission:revoke."""
        validate_role(role)
        await require_permission(
            self._evaluator, actor, SystemResource.PERMISSION, SystemAction.REVOKE
        )

        async with self._uow_factory() as uow:
            binding = await uow.role_permissions.get(role, permission_id)
            if not binding:
                raise NotFound("RolePermission", f"{role}/{permission_id}")
            await uow.role_permissions.delete(role, permission_id)

        self._evaluator.clear_role_cache(role)
