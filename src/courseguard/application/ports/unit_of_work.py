"""Unit of Work port - transactional boundary."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from courseguard.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from courseguard.application.ports.repositories.role_permission_repository import (
    RolePermissionRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def role_permissions(self) -> RolePermissionRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
