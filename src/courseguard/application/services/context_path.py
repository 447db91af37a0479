"""Dotted-path lookup into request context."""

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any


class _Missing:
    """Marker for a path that does not exist (distinct from a stored None)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def resolve_path(root: Any, path: str) -> Any:
    """Resolve "a.b.c" against mappings and dataclass records.

    Returns MISSING when any segment is absent.
    """
    if not path:
        return MISSING
    return _resolve(root, path.split("."))


def _resolve(value: Any, segments: list[str]) -> Any:
    if not segments:
        return value
    head, *rest = segments
    child = _child(value, head)
    if child is MISSING:
        return MISSING
    return _resolve(child, rest)


def _child(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        if key in value:
            return value[key]
        return MISSING
    if is_dataclass(value) and not isinstance(value, type):
        if key in {f.name for f in fields(value)}:
            return getattr(value, key)
    return MISSING
