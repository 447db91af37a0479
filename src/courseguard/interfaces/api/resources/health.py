"""Health check endpoints."""

import logging
from collections.abc import Awaitable, Callable

import falcon.asgi

logger = logging.getLogger(__name__)


class HealthResource:
    """Liveness, plus readiness backed by an optional store probe."""

    def __init__(self, readiness_probe: Callable[[], Awaitable[None]] | None = None) -> None:
        self._probe = readiness_probe

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - permission store reachable."""
        if self._probe is not None:
            try:
                await self._probe()
            except Exception:
                logger.warning("Readiness probe failed", exc_info=True)
                resp.media = {"status": "unavailable"}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
