"""API resource tests."""

from urllib.parse import parse_qs, urlparse

import pytest
from falcon.testing import TestClient

from contentsync.interfaces.api.resources.oauth import STATE_COOKIE
from contentsync.main import create_contentsync_app

from tests.conftest import FakeRecordStore, FakeRenderer


class RejectingKeycloak:
    """Keycloak provider that accepts no token."""

    def authenticate(self, token: str):
        return None


def _connect(client: TestClient) -> dict:
    """Run the OAuth round trip and return the callback body."""
    start = client.simulate_get("/v1/oauth/connect")
    state = parse_qs(urlparse(start.json["authorization_url"]).query)["state"][0]
    result = client.simulate_get(
        "/v1/oauth/callback",
        params={"code": "abc", "state": state},
        cookies={STATE_COOKIE: start.cookies[STATE_COOKIE].value},
    )
    assert result.status_code == 200
    return result.json


class TestOAuth:
    """OAuth connect/callback/disconnect."""

    def test_connect_returns_url_and_state_cookie(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/oauth/connect")

        assert result.status_code == 200
        url = result.json["authorization_url"]
        assert url.startswith("https://search.test/api/auth/oauth/authorize?")
        state = parse_qs(urlparse(url).query)["state"][0]
        cookie = result.cookies[STATE_COOKIE]
        assert cookie.value.startswith(f"{state}.")
        assert cookie.http_only is True
        assert cookie.path == "/v1/oauth"

    def test_connect_redirect(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/oauth/connect", params={"redirect": "1"})

        assert result.status_code == 302
        assert result.headers["location"].startswith("https://search.test/api/auth/oauth/authorize?")
        assert STATE_COOKIE in result.cookies

    def test_callback_stores_credential(self, client: TestClient) -> None:
        body = _connect(client)

        assert body["connected"] is True
        assert body["org_name"] == "Acme"
        assert body["site_id"] == "site-1"
        assert "bearer_token" not in body
        assert "key-123" not in str(body)

    def test_callback_with_forged_state(self, client: TestClient) -> None:
        start = client.simulate_get("/v1/oauth/connect")

        result = client.simulate_get(
            "/v1/oauth/callback",
            params={"code": "abc", "state": "forged"},
            cookies={STATE_COOKIE: start.cookies[STATE_COOKIE].value},
        )

        assert result.status_code == 400
        assert result.json["reason"] == "invalid_state"
        assert client.simulate_get("/v1/connection").json["connected"] is False

    def test_callback_without_cookie(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/oauth/callback", params={"code": "abc", "state": "s"})
        assert result.status_code == 400
        assert result.json["reason"] == "invalid_state"

    def test_callback_denied(self, client: TestClient) -> None:
        start = client.simulate_get("/v1/oauth/connect")
        state = parse_qs(urlparse(start.json["authorization_url"]).query)["state"][0]

        result = client.simulate_get(
            "/v1/oauth/callback",
            params={"error": "access_denied", "error_description": "User cancelled", "state": state},
            cookies={STATE_COOKIE: start.cookies[STATE_COOKIE].value},
        )

        assert result.status_code == 403
        assert result.json == {"error": "User cancelled", "reason": "authorization_denied"}

    def test_disconnect(self, client: TestClient) -> None:
        _connect(client)

        result = client.simulate_post("/v1/oauth/disconnect")

        assert result.status_code == 200
        assert result.json["connected"] is False
        assert client.simulate_get("/v1/connection").json["connected"] is False


class TestConnection:
    """Connection details and site selection."""

    def test_not_connected(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/connection")
        assert result.status_code == 200
        assert result.json["connected"] is False
        assert result.json["available_sites"] == []

    def test_select_site(self, client: TestClient) -> None:
        _connect(client)

        result = client.simulate_put("/v1/connection/site", json={"site_id": "site-2"})

        assert result.status_code == 200
        assert result.json["site_id"] == "site-2"
        assert result.json["site_name"] == "Blog"

    def test_select_unknown_site(self, client: TestClient) -> None:
        _connect(client)
        result = client.simulate_put("/v1/connection/site", json={"site_id": "site-9"})
        assert result.status_code == 404

    def test_select_site_not_connected(self, client: TestClient) -> None:
        result = client.simulate_put("/v1/connection/site", json={"site_id": "site-1"})
        assert result.status_code == 409

    def test_select_site_requires_id(self, client: TestClient) -> None:
        result = client.simulate_put("/v1/connection/site", json={})
        assert result.status_code == 400

    def test_validate(self, client: TestClient) -> None:
        assert client.simulate_post("/v1/connection/validate").json == {"valid": False}
        _connect(client)
        assert client.simulate_post("/v1/connection/validate").json == {"valid": True}

    def test_connection_never_exposes_token(self, client: TestClient) -> None:
        _connect(client)
        assert "key-123" not in client.simulate_get("/v1/connection").text


class TestRecordsAndQueue:
    """Record notifications, drain, reindex and clear."""

    def test_saved_record_is_queued(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/records/1/saved")

        assert result.status_code == 202
        assert result.json == {"record_id": "1", "status": "queued"}
        assert client.simulate_get("/v1/queue").json == {"size": 1}

    def test_saved_record_not_indexable(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/records/3/saved")
        assert result.json["status"] == "ignored"

    def test_saved_record_missing(self, client: TestClient) -> None:
        assert client.simulate_post("/v1/records/nope/saved").status_code == 404

    def test_deleted_record_requires_url(self, client: TestClient) -> None:
        assert client.simulate_post("/v1/records/1/deleted", json={}).status_code == 400

    def test_deleted_record_is_queued(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/records/1/deleted", json={"url": "https://example.com/node/1"}
        )
        assert result.status_code == 202
        assert result.json["status"] == "queued"

    def test_drain_submits_pages(self, client: TestClient, search_api_handler) -> None:
        _connect(client)
        client.simulate_post("/v1/records/1/saved")
        client.simulate_post("/v1/records/2/saved")
        client.simulate_post("/v1/records/9/deleted", json={"url": "https://example.com/node/9"})

        result = client.simulate_post("/v1/queue/drain", json={"limit": 10})

        assert result.status_code == 200
        assert result.json == {"processed": 3, "remaining": 0}
        assert search_api_handler.paths("POST").count("/api/sites/site-1/pages") == 1
        assert search_api_handler.paths("DELETE") == ["/api/sites/site-1/pages"]

    def test_drain_not_connected_keeps_queue(self, client: TestClient) -> None:
        client.simulate_post("/v1/records/1/saved")

        result = client.simulate_post("/v1/queue/drain")

        assert result.json == {"processed": 0, "remaining": 1}

    def test_drain_rejects_bad_limit(self, client: TestClient) -> None:
        assert client.simulate_post("/v1/queue/drain", json={"limit": "x"}).status_code == 400
        assert client.simulate_post("/v1/queue/drain", json={"limit": 0}).status_code == 400

    def test_reindex_and_clear(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/queue/reindex")
        assert result.status_code == 202
        assert result.json == {"queued": 2}

        result = client.simulate_delete("/v1/queue")
        assert result.json == {"cleared": 2}
        assert client.simulate_get("/v1/queue").json == {"size": 0}


class TestCrawl:
    """Crawl and remote index purge."""

    def test_crawl_not_connected(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/crawl", json={"max_pages": 5})
        assert result.status_code == 409

    def test_crawl_and_status(self, client: TestClient) -> None:
        _connect(client)

        started = client.simulate_post("/v1/crawl", json={"max_pages": 5})
        assert started.status_code == 202
        assert started.json == {"job_id": "job-1"}

        status = client.simulate_get("/v1/crawl/job-1")
        assert status.status_code == 200
        assert status.json["status"] == "done"
        assert status.json["pages_crawled"] == 3

    def test_crawl_status_unknown_job(self, client: TestClient) -> None:
        _connect(client)
        assert client.simulate_get("/v1/crawl/missing").status_code == 404

    def test_purge(self, client: TestClient, search_api_handler) -> None:
        _connect(client)
        result = client.simulate_post("/v1/index/purge")
        assert result.json == {"purged": True}
        assert search_api_handler.paths("POST")[-1] == "/api/sites/site-1/purge"


class TestOperatorAuth:
    """Operator routes require an authenticated user."""

    @pytest.fixture
    def locked_client(self, settings, queue, credential_store) -> TestClient:
        app = create_contentsync_app(
            FakeRecordStore(),
            FakeRenderer(),
            settings=settings,
            queue=queue,
            credential_store=credential_store,
            keycloak=RejectingKeycloak(),
        )
        return TestClient(app)

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/v1/oauth/connect"),
            ("POST", "/v1/oauth/disconnect"),
            ("GET", "/v1/connection"),
            ("GET", "/v1/queue"),
            ("POST", "/v1/queue/drain"),
            ("POST", "/v1/records/1/saved"),
            ("POST", "/v1/crawl"),
            ("POST", "/v1/index/purge"),
        ],
    )
    def test_unauthorized(self, locked_client: TestClient, method: str, path: str) -> None:
        result = locked_client.simulate_request(
            method, path, headers={"Authorization": "Bearer bad"}
        )
        assert result.status_code == 401

    def test_health_is_public(self, locked_client: TestClient) -> None:
        assert locked_client.simulate_get("/v1/health").status_code == 200

    def test_callback_is_public(self, locked_client: TestClient) -> None:
        result = locked_client.simulate_get("/v1/oauth/callback", params={"state": "s"})
        assert result.status_code == 400


class TestCors:
    """CORS middleware."""

    @pytest.fixture
    def cors_client(self, settings, queue, credential_store) -> TestClient:
        settings = settings.model_copy(update={"cors_origins": "https://admin.test"})
        app = create_contentsync_app(
            FakeRecordStore(),
            FakeRenderer(),
            settings=settings,
            queue=queue,
            credential_store=credential_store,
        )
        return TestClient(app)

    def test_preflight_allowed_origin(self, cors_client: TestClient) -> None:
        result = cors_client.simulate_options(
            "/v1/queue", headers={"Origin": "https://admin.test"}
        )
        assert result.status_code == 204
        assert result.headers["access-control-allow-origin"] == "https://admin.test"

    def test_unknown_origin_not_echoed(self, cors_client: TestClient) -> None:
        result = cors_client.simulate_get("/v1/health", headers={"Origin": "https://evil.test"})
        assert "access-control-allow-origin" not in result.headers
