"""Application ports - interfaces for external adapters."""

from courseguard.application.ports.permission_source import PermissionSource
from courseguard.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionSource",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
