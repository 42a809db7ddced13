"""Auth middleware - resolves the calling operator from a bearer token."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """Operator from request context."""

    user_id: str
    username: str | None = None


class AuthMiddleware:
    """Sets req.context.user, or None when the token is missing or rejected.

    Without a Keycloak provider (local development) every caller is the
    anonymous operator.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if self._keycloak is None:
            req.context.user = RequestUser(user_id="anonymous")
            return

        req.context.user = None
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            operator = self._keycloak.authenticate(auth[7:])
            if operator:
                req.context.user = RequestUser(
                    user_id=operator.user_id,
                    username=operator.username,
                )


def require_user(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> bool:
    """Set 401 on resp and return False when no operator is authenticated."""
    if getattr(req.context, "user", None):
        return True
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized"}
    return False
