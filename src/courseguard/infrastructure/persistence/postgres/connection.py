"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(conninfo: str, min_size: int = 1, max_size: int = 5) -> AsyncConnectionPool:
    """Create async connection pool for the permission store.

    Pool is created with open=False; PoolLifespanMiddleware opens it on ASGI
    startup and closes it on shutdown.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )
