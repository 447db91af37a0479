"""Permission conditions - predicates over the request context."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

PRINCIPAL_REF_PREFIX = "currentUser."


class ConditionOperator(StrEnum):
    """Comparison operators understood by the condition evaluator."""

    EQ = "eq"
    NE = "ne"
    IN = "in"
    NIN = "nin"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"


@dataclass(frozen=True)
class LiteralValue:
    """Condition value compared as-is."""

    value: Any


@dataclass(frozen=True)
class PrincipalRef:
    """Condition value resolved from the current principal at check time."""

    attribute: str


CURRENT_PRINCIPAL_ID = PrincipalRef("id")

ConditionValue = LiteralValue | PrincipalRef


@dataclass(frozen=True)
class Condition:
    """Single predicate: field (dotted path) <operator> value.

    The operator is kept as a plain string so that rules carrying an unknown
    operator can still be loaded; the evaluator treats them as not satisfied.
    """

    field: str
    operator: str
    value: ConditionValue

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Condition":
        """Decode stored form, turning "currentUser.<attr>" into a PrincipalRef."""
        raw = data.get("value")
        value: ConditionValue
        if isinstance(raw, str) and raw.startswith(PRINCIPAL_REF_PREFIX):
            value = PrincipalRef(raw[len(PRINCIPAL_REF_PREFIX):])
        else:
            value = LiteralValue(raw)
        return cls(
            field=str(data.get("field", "")),
            operator=str(data.get("operator", "")),
            value=value,
        )

    def to_dict(self) -> dict[str, Any]:
        """Encode to stored form."""
        if isinstance(self.value, PrincipalRef):
            raw: Any = PRINCIPAL_REF_PREFIX + self.value.attribute
        else:
            raw = self.value.value
        return {"field": self.field, "operator": self.operator, "value": raw}


def _malformed(raw: Any) -> Condition:
    # No operator: the evaluator logs it and never satisfies it
    return Condition(field="", operator="", value=LiteralValue(raw))


def decode_conditions(raw: Any) -> tuple[Condition, ...]:
    """Decode a stored condition list; None or an empty list means unconditional.

    Anything that is not a list of objects decodes to conditions that never
    hold, so a broken rule denies instead of failing the whole role.
    """
    if raw is None:
        return ()
    if not isinstance(raw, list):
        return (_malformed(raw),)
    return tuple(
        Condition.from_dict(c) if isinstance(c, Mapping) else _malformed(c) for c in raw
    )
