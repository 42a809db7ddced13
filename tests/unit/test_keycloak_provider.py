"""Unit tests for operator authentication."""

from keycloak.exceptions import KeycloakConnectionError

from contentsync.infrastructure.auth.keycloak_provider import KeycloakProvider


def _provider(monkeypatch, token_info=None, error=None) -> KeycloakProvider:
    provider = KeycloakProvider(
        server_url="http://keycloak.test",
        realm="contentsync",
        client_id="contentsync-api",
        client_secret="secret",
        required_role="contentsync-admin",
    )

    def introspect(token):
        if error:
            raise error
        return token_info

    monkeypatch.setattr(provider._keycloak, "introspect", introspect)
    return provider


def test_active_token_with_role(monkeypatch) -> None:
    provider = _provider(
        monkeypatch,
        {
            "active": True,
            "sub": "user-1",
            "preferred_username": "editor",
            "realm_access": {"roles": ["contentsync-admin"]},
        },
    )

    operator = provider.authenticate("token")

    assert operator is not None
    assert operator.user_id == "user-1"
    assert operator.username == "editor"


def test_missing_role(monkeypatch) -> None:
    provider = _provider(
        monkeypatch, {"active": True, "sub": "user-1", "realm_access": {"roles": ["viewer"]}}
    )
    assert provider.authenticate("token") is None


def test_inactive_token(monkeypatch) -> None:
    assert _provider(monkeypatch, {"active": False}).authenticate("token") is None


def test_introspection_error(monkeypatch) -> None:
    provider = _provider(monkeypatch, error=KeycloakConnectionError("down"))
    assert provider.authenticate("token") is None
