"""User roles."""

from enum import StrEnum


class UserRole(StrEnum):
    """Roles a principal can hold."""

    STUDENT = "student"
    ADMIN = "admin"

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in {r.value for r in cls}
