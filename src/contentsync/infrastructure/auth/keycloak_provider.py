"""Keycloak OIDC provider - authenticates operators of the admin API."""

from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Operator:
    """Operator identity from an introspected token."""

    user_id: str
    username: str | None
    realm_roles: list[str]


class KeycloakProvider:
    """Introspects bearer tokens; optionally requires a realm role."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        required_role: str | None = None,
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._required_role = required_role

    def authenticate(self, token: str) -> Operator | None:
        """Return the operator for an active token holding the required role."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed", error=str(e))
            return None
        if not token_info.get("active"):
            return None
        roles = token_info.get("realm_access", {}).get("roles", [])
        if self._required_role and self._required_role not in roles:
            return None
        return Operator(
            user_id=token_info.get("sub", ""),
            username=token_info.get("preferred_username"),
            realm_roles=roles,
        )
