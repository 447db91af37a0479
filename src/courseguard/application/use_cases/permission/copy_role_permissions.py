"""Copy role permissions use case."""

from datetime import UTC, datetime
from uuid import uuid4

from courseguard.application.ports import UnitOfWorkFactory
from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.application.use_cases.permission.guards import require_permission, validate_role
from courseguard.domain.entities import Principal, RolePermission
from courseguard.domain.exceptions import ValidationError
from courseguard.domain.value_objects import SystemAction, SystemResource


class CopyRolePermissionsUseCase:
    """Make to_role hold exactly the permissions of from_role."""

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
        from_role: str,
        to_role: str,
    ) -> list[RolePermission]:
        """Copy permissions. Target is left untouched when the source has none."""
        validate_role(from_role)
        validate_role(to_role)
        if from_role == to_role:
            raise ValidationError("Source and target roles must differ")
        await require_permission(
            self._evaluator, actor, SystemResource.PERMISSION, SystemAction.ASSIGN
        )

        async with self._uow_factory() as uow:
            source = await uow.role_permissions.list_by_role(from_role)
            if not source:
                return []

            await uow.role_permissions.delete_by_role(to_role)
            now = datetime.now(UTC)
            created = [
                await uow.role_permissions.create(
                    RolePermission(
                        id=uuid4(),
                        role=to_role,
                        permission_id=rp.permission_id,
                        granted_at=now,
                        granted_by=actor.id,
                    )
                )
                for rp, _ in source
            ]

        self._evaluator.clear_role_cache(to_role)
        return created
