"""Credential exchange use case - OAuth round trip that yields a bearer credential."""

import secrets
from collections.abc import Callable, MutableMapping
from datetime import UTC, datetime, timedelta
from typing import Any

from contentsync.application.ports import AuthorizationServer, CredentialStore
from contentsync.domain.entities import Credential, ExchangeSession, Target
from contentsync.domain.exceptions import (
    AuthorizationDenied,
    AuthorizationError,
    DeliveryError,
    ExchangeFailed,
    InvalidState,
    MissingCode,
)
from contentsync.domain.value_objects import ExchangeState
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)

SESSION_KEY = "contentsync_oauth_session"
STATUS_KEY = "contentsync_oauth_status"
DEFAULT_SESSION_TTL = timedelta(minutes=10)


def credential_from_token_response(data: dict[str, Any]) -> Credential:
    """Build a credential from the token endpoint payload, first site active."""
    api_key = data.get("api_key")
    if not api_key:
        raise ExchangeFailed("No API key in response")

    sites = data.get("sites")
    available = tuple(
        Target.from_api(site) for site in (sites if isinstance(sites, list) else []) if isinstance(site, dict)
    )
    credential = Credential(
        bearer_token=api_key,
        org_id=str(data.get("org_id") or ""),
        org_name=data.get("org_name") or "",
        available_sites=available,
    )
    if available:
        credential = credential.with_target(available[0])
    return credential


class CredentialExchange:
    """Authorization state machine.

    UNAUTHENTICATED -> AWAITING_CALLBACK -> CONNECTED | FAILED. The session
    mapping belongs to the caller (one per browser session); its state token
    is single use and removed by complete() whatever the outcome.
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        authorization_server: AuthorizationServer,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = credential_store
        self._server = authorization_server
        self._session_ttl = session_ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def state_of(self, session: MutableMapping[str, Any]) -> ExchangeState:
        """Current exchange state for the session."""
        if SESSION_KEY in session:
            return ExchangeState.AWAITING_CALLBACK
        return session.get(STATUS_KEY, ExchangeState.UNAUTHENTICATED)

    def initiate(self, session: MutableMapping[str, Any]) -> str:
        """Start a fresh round trip and return the authorization URL."""
        exchange_session = ExchangeSession(state=secrets.token_hex(16), created_at=self._clock())
        session[SESSION_KEY] = exchange_session
        session.pop(STATUS_KEY, None)
        return self._server.authorization_url(exchange_session.state)

    async def complete(
        self,
        session: MutableMapping[str, Any],
        code: str | None,
        state: str | None,
        error: str | None = None,
        error_description: str | None = None,
    ) -> Credential:
        """Finish the round trip and store the credential.

        Raises InvalidState, AuthorizationDenied, MissingCode or
        ExchangeFailed; the credential store is untouched on any failure.
        """
        stored: ExchangeSession | None = session.pop(SESSION_KEY, None)
        session[STATUS_KEY] = ExchangeState.FAILED
        try:
            if stored is None or not state or not secrets.compare_digest(stored.state, state):
                raise InvalidState("Invalid OAuth state. Please try again.")
            if self._clock() - stored.created_at > self._session_ttl:
                raise InvalidState("OAuth session expired. Please try again.")
            if error:
                raise AuthorizationDenied(error_description or error)
            if not code:
                raise MissingCode("No authorization code received.")

            try:
                data = await self._server.exchange_code(code)
            except DeliveryError as e:
                raise ExchangeFailed(str(e)) from e
            credential = credential_from_token_response(data)
        except AuthorizationError as e:
            logger.error("OAuth exchange failed", reason=e.reason, error=str(e))
            raise

        await self._store.save(credential)
        session[STATUS_KEY] = ExchangeState.CONNECTED
        logger.info(
            "Connected to search API",
            org=credential.org_name or credential.org_id,
            site_id=credential.site_id,
        )
        return credential

    async def disconnect(self) -> None:
        """Forget the stored credential. Safe to call when already disconnected."""
        await self._store.clear()
        logger.info("Disconnected from search API")
