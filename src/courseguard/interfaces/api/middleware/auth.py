"""Auth middleware - resolves the request principal from a bearer token."""

import falcon.asgi

from courseguard.domain.entities import Principal
from courseguard.domain.value_objects import UserRole
from courseguard.infrastructure.auth.keycloak_provider import OIDCUser

# First match wins when a token carries several realm roles
ROLE_PRECEDENCE = (UserRole.ADMIN, UserRole.STUDENT)


def principal_from_oidc(user: OIDCUser) -> Principal:
    """Map OIDC user to principal; no known realm role gives an empty role."""
    role = next((r.value for r in ROLE_PRECEDENCE if r.value in user.realm_roles), "")
    return Principal(
        id=user.user_id,
        role=role,
        email=user.email,
        username=user.username,
    )


class AuthMiddleware:
    """Middleware that validates JWT and sets req.context.user (or None)."""

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract principal from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = self._keycloak.decode_token(auth[7:])
        if user:
            req.context.user = principal_from_oidc(user)
