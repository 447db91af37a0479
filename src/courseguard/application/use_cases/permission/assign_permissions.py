"""Assign permissions to role use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from courseguard.application.ports import UnitOfWorkFactory
from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.application.use_cases.permission.guards import require_permission, validate_role
from courseguard.domain.entities import Principal, RolePermission
from courseguard.domain.exceptions import NotFound, ValidationError
from courseguard.domain.value_objects import SystemAction, SystemResource


class AssignPermissionsUseCase:
    """Grant permissions to a role. Already granted permissions are skipped."""

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
        """Assign permissions to role. Actor must have permission:assign."""
        validate_role(role)
        if not permission_ids:
            raise ValidationError("Permission ID list must not be empty")
        await require_permission(
            self._evaluator, actor, SystemResource.PERMISSION, SystemAction.ASSIGN
        )

        async with self._uow_factory() as uow:
            found = await uow.permissions.list_by_ids(permission_ids)
            missing = set(permission_ids) - {p.id for p in found}
            if missing:
                raise NotFound("Permission", ", ".join(sorted(str(m) for m in missing)))

            bound = {rp.permission_id for rp, _ in await uow.role_permissions.list_by_role(role)}
            now = datetime.now(UTC)
            created: list[RolePermission] = []
            for permission_id in dict.fromkeys(permission_ids):
                if permission_id in bound:
                    continue
                created.append(
                    await uow.role_permissions.create(
                        RolePermission(
                            id=uuid4(),
                            role=role,
                            permission_id=permission_id,
                            granted_at=now,
                            granted_by=actor.id,
                        )
                    )
                )

        self._evaluator.clear_role_cache(role)
        return created
