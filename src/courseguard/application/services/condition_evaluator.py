"""Condition evaluation against request context."""

import logging
import operator
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from typing import Any

from courseguard.application.services.context_path import MISSING, resolve_path
from courseguard.domain.entities import Principal
from courseguard.domain.value_objects import Condition, ConditionOperator, PrincipalRef

logger = logging.getLogger(__name__)

_COLLECTIONS = (list, tuple, set, frozenset)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _strict_equal(actual: Any, expected: Any) -> bool:
    if actual is MISSING or expected is MISSING:
        return False
    # True == 1 in Python; rules must not conflate flags with numbers
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _member(actual: Any, expected: Any) -> bool:
    return any(_strict_equal(actual, item) for item in expected)


def _numeric(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        if not (_is_number(actual) and _is_number(expected)):
            return False
        return compare(actual, expected)

    return check


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str) and isinstance(expected, str):
        return expected in actual
    if isinstance(actual, _COLLECTIONS):
        return _member(expected, actual)
    return False


def _string_op(method: str) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        if not (isinstance(actual, str) and isinstance(expected, str)):
            return False
        return getattr(actual, method)(expected)

    return check


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQ: _strict_equal,
    ConditionOperator.NE: lambda a, e: not _strict_equal(a, e),
    ConditionOperator.IN: lambda a, e: isinstance(e, _COLLECTIONS) and _member(a, e),
    ConditionOperator.NIN: lambda a, e: isinstance(e, _COLLECTIONS) and not _member(a, e),
    ConditionOperator.GT: _numeric(operator.gt),
    ConditionOperator.GTE: _numeric(operator.ge),
    ConditionOperator.LT: _numeric(operator.lt),
    ConditionOperator.LTE: _numeric(operator.le),
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.STARTS_WITH: _string_op("startswith"),
    ConditionOperator.ENDS_WITH: _string_op("endswith"),
}


def resolve_value(condition: Condition, principal: Principal) -> Any:
    """Expected value of a condition; principal references resolve at call time."""
    if isinstance(condition.value, PrincipalRef):
        return resolve_path(principal, condition.value.attribute)
    return condition.value.value


def evaluate_condition(
    condition: Condition, context: Mapping[str, Any], principal: Principal
) -> bool:
    """Evaluate one condition. Unknown operators and bad operands yield False."""
    compare = _OPERATORS.get(condition.operator)
    if compare is None:
        logger.warning(
            "Unknown condition operator %r on field %r, treating as not satisfied",
            condition.operator,
            condition.field,
        )
        return False

    expected = resolve_value(condition, principal)
    if expected is MISSING:
        return False
    actual = resolve_path(context, condition.field)
    return compare(actual, expected)


def conditions_hold(
    conditions: Iterable[Condition], context: Mapping[str, Any], principal: Principal
) -> bool:
    """All conditions must hold; an empty list always holds."""
    return all(evaluate_condition(c, context, principal) for c in conditions)
