"""Replace role permissions use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from courseguard.application.ports import UnitOfWorkFactory
from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.application.use_cases.permission.guards import require_permission, validate_role
from courseguard.domain.entities import Principal, RolePermission
from courseguard.domain.exceptions import NotFound
from courseguard.domain.value_objects import SystemAction, SystemResource


class ReplaceRolePermissionsUseCase:
    """Drop every permission of a role and grant the given set instead."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        permission_evaluator: PermissionEvaluator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._evaluator = permission_evaluator

    async def execute(
        self,
        actor: Principal,
        role: str,
        permission_ids: list[UUID],
    ) -> list[RolePermission]:
        """Replace role permissions. An empty list clears the role."""
        validate_role(role)
        await require_permission(
            self._evaluator, actor, SystemResource.PERMISSION, SystemAction.ASSIGN
        )

        unique_ids = list(dict.fromkeys(permission_ids))
        async with self._uow_factory() as uow:
            if unique_ids:
                found = await uow.permissions.list_by_ids(unique_ids)
                missing = set(unique_ids) - {p.id for p in found}
                if missing:
                    raise NotFound("Permission", ", ".join(sorted(str(m) for m in missing)))

            await uow.role_permissions.delete_by_role(role)
            now = datetime.now(UTC)
            created = [
                await uow.role_permissions.create(
                    RolePermission(
                        id=uuid4(),
                        role=role,
                        permission_id=pid,
                        granted_at=now,
                        granted_by=actor.id,
                    )
                )
                for pid in unique_ids
            ]

        self._evaluator.clear_role_cache(role)
        return created
