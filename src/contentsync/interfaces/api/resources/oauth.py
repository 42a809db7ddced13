"""OAuth API resources - connect, callback and disconnect."""

from collections.abc import MutableMapping
from datetime import UTC, datetime
from typing import Any

import falcon.asgi

from contentsync.application.use_cases.auth.credential_exchange import (
    SESSION_KEY,
    CredentialExchange,
)
from contentsync.domain.entities import ExchangeSession
from contentsync.domain.exceptions import (
    AuthorizationDenied,
    AuthorizationError,
    ExchangeFailed,
)
from contentsync.interfaces.api.middleware.auth import require_user
from contentsync.interfaces.api.resources.connection import connection_details

STATE_COOKIE = "contentsync_oauth_state"
COOKIE_PATH = "/v1/oauth"
COOKIE_MAX_AGE = 600


def _cookie_value(session: MutableMapping[str, Any]) -> str:
    exchange_session: ExchangeSession = session[SESSION_KEY]
    return f"{exchange_session.state}.{int(exchange_session.created_at.timestamp())}"


def _session_from_cookie(value: str | None) -> dict[str, Any]:
    """Rebuild the exchange session carried by the state cookie."""
    session: dict[str, Any] = {}
    if not value:
        return session
    state, _, timestamp = value.partition(".")
    try:
        created_at = datetime.fromtimestamp(int(timestamp), UTC)
    except (ValueError, OverflowError, OSError):
        return session
    if state:
        session[SESSION_KEY] = ExchangeSession(state=state, created_at=created_at)
    return session


def _status_for(error: AuthorizationError) -> str:
    if isinstance(error, AuthorizationDenied):
        return falcon.HTTP_403
    if isinstance(error, ExchangeFailed):
        return falcon.HTTP_502
    return falcon.HTTP_400


class OAuthConnectResource:
    """GET /v1/oauth/connect - start an authorization round trip."""

    def __init__(self, exchange: CredentialExchange, secure_cookie: bool = True) -> None:
        self._exchange = exchange
        self._secure_cookie = secure_cookie

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Return the authorization URL; the state travels in an HttpOnly cookie."""
        if not require_user(req, resp):
            return

        session: dict[str, Any] = {}
        url = self._exchange.initiate(session)
        resp.set_cookie(
            STATE_COOKIE,
            _cookie_value(session),
            max_age=COOKIE_MAX_AGE,
            path=COOKIE_PATH,
            secure=self._secure_cookie,
            http_only=True,
            same_site="Lax",
        )
        if req.get_param_as_bool("redirect"):
            resp.location = url
            resp.status = falcon.HTTP_302
            return
        resp.media = {"authorization_url": url}
        resp.status = falcon.HTTP_200


class OAuthCallbackResource:
    """GET /v1/oauth/callback - authorization server redirects here."""

    def __init__(self, exchange: CredentialExchange) -> None:
        self._exchange = exchange

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        cookies = req.get_cookie_values(STATE_COOKIE) or []
        session = _session_from_cookie(cookies[0] if cookies else None)
        resp.unset_cookie(STATE_COOKIE, path=COOKIE_PATH)

        try:
            credential = await self._exchange.complete(
                session,
                code=req.get_param("code"),
                state=req.get_param("state"),
                error=req.get_param("error"),
                error_description=req.get_param("error_description"),
            )
        except AuthorizationError as e:
            resp.status = _status_for(e)
            resp.media = {"error": str(e), "reason": e.reason}
            return

        resp.media = connection_details(credential)
        resp.status = falcon.HTTP_200


class OAuthDisconnectResource:
    """POST /v1/oauth/disconnect - forget the stored credential."""

    def __init__(self, exchange: CredentialExchange) -> None:
        self._exchange = exchange

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return
        await self._exchange.disconnect()
        resp.media = connection_details(None)
        resp.status = falcon.HTTP_200
