"""Built-in grants used when the store holds none for a role."""

from collections.abc import Iterable

from courseguard.domain.value_objects import (
    CURRENT_PRINCIPAL_ID,
    Condition,
    ConditionOperator,
    Grant,
    SystemAction,
    SystemResource,
    UserRole,
)


def _grant(
    resource: SystemResource,
    *actions: SystemAction,
    conditions: Iterable[Condition] = (),
) -> Grant:
    return Grant(
        resource=resource.value,
        actions=frozenset(a.value for a in actions),
        conditions=tuple(conditions),
    )


_OWN_USER = Condition(
    field="resource.id",
    operator=ConditionOperator.EQ,
    value=CURRENT_PRINCIPAL_ID,
)

DEFAULT_GRANTS: dict[str, tuple[Grant, ...]] = {
    UserRole.STUDENT.value: (
        _grant(SystemResource.COURSE, SystemAction.READ, SystemAction.LIST),
        _grant(
            SystemResource.SELECTION,
            SystemAction.CREATE,
            SystemAction.READ,
            SystemAction.UPDATE,
            SystemAction.DELETE,
        ),
        _grant(SystemResource.USER, SystemAction.READ, conditions=[_OWN_USER]),
    ),
    UserRole.ADMIN.value: (
        _grant(
            SystemResource.USER,
            SystemAction.CREATE,
            SystemAction.READ,
            SystemAction.UPDATE,
            SystemAction.DELETE,
            SystemAction.LIST,
            SystemAction.MANAGE,
        ),
        _grant(
            SystemResource.COURSE,
            SystemAction.CREATE,
            SystemAction.READ,
            SystemAction.UPDATE,
            SystemAction.DELETE,
            SystemAction.LIST,
            SystemAction.MANAGE,
        ),
        _grant(SystemResource.SELECTION, SystemAction.READ, SystemAction.LIST, SystemAction.MANAGE),
        _grant(
            SystemResource.PERMISSION,
            SystemAction.READ,
            SystemAction.LIST,
            SystemAction.ASSIGN,
            SystemAction.REVOKE,
        ),
        _grant(SystemResource.ROLE, SystemAction.READ, SystemAction.LIST, SystemAction.MANAGE),
        _grant(SystemResource.SYSTEM, SystemAction.READ, SystemAction.MANAGE),
    ),
}
