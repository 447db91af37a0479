"""Shared authorization and validation steps for permission use cases."""

from courseguard.application.services.permission_evaluator import PermissionEvaluator
from courseguard.domain.entities import Principal
from courseguard.domain.exceptions import PermissionDenied, ValidationError
from courseguard.domain.value_objects import PermissionCheck, SystemAction, SystemResource, UserRole


async def require_permission(
    evaluator: PermissionEvaluator,
    actor: Principal,
    resource: SystemResource,
    action: SystemAction,
) -> None:
    """Raise PermissionDenied unless actor may perform action on resource."""
    allowed = await evaluator.check_permission(
        actor, PermissionCheck(resource=resource.value, action=action.value)
    )
    if not allowed:
        raise PermissionDenied(f"Role {actor.role!r} lacks {resource}:{action}")


def validate_role(role: str) -> None:
    if not UserRole.is_valid(role):
        raise ValidationError(f"Invalid role: {role}")
