"""Domain value objects."""

from courseguard.domain.value_objects.condition import (
    CURRENT_PRINCIPAL_ID,
    Condition,
    ConditionOperator,
    ConditionValue,
    LiteralValue,
    PrincipalRef,
    decode_conditions,
)
from courseguard.domain.value_objects.grant import Grant
from courseguard.domain.value_objects.permission_check import PermissionCheck
from courseguard.domain.value_objects.system_action import WILDCARD_ACTION, SystemAction
from courseguard.domain.value_objects.system_resource import SystemResource
from courseguard.domain.value_objects.user_role import UserRole

__all__ = [
    "CURRENT_PRINCIPAL_ID",
    "Condition",
    "ConditionOperator",
    "ConditionValue",
    "Grant",
    "LiteralValue",
    "PermissionCheck",
    "PrincipalRef",
    "SystemAction",
    "SystemResource",
    "UserRole",
    "WILDCARD_ACTION",
    "decode_conditions",
]
