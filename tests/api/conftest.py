"""Fixtures for API tests."""

import httpx
import pytest
from falcon.testing import TestClient

from contentsync.config import Settings
from contentsync.infrastructure.persistence.memory.credential_store import InMemoryCredentialStore
from contentsync.infrastructure.persistence.memory.index_queue import InMemoryIndexQueue
from contentsync.main import create_contentsync_app

from tests.conftest import FakeRecordStore, FakeRenderer, make_record, token_payload

API_ENDPOINT = "https://search.test/api"


def search_api(request: httpx.Request) -> httpx.Response:
    """Stand-in for the remote search API."""
    path = request.url.path
    if path == "/api/auth/oauth/token":
        return httpx.Response(200, json=token_payload())
    if path.endswith("/crawl") and request.method == "POST":
        return httpx.Response(200, json={"jobId": "job-1"})
    if "/crawl/" in path:
        if path.endswith("/missing"):
            return httpx.Response(200, json={})
        return httpx.Response(200, json={"status": "done", "pagesCrawled": 3})
    if path == "/api/sites":
        return httpx.Response(200, json={"sites": token_payload()["sites"]})
    return httpx.Response(200, json={"queued": True})


class RecordingSearchApi:
    """MockTransport handler that keeps requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return search_api(request)

    def paths(self, method: str) -> list[str]:
        return [r.url.path for r in self.requests if r.method == method]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_endpoint=API_ENDPOINT,
        indexing_enabled=True,
        indexing_content_types=["article", "page"],
        keycloak_client_secret="",
        session_cookie_secure=False,
        log_json=False,
    )


@pytest.fixture
def queue() -> InMemoryIndexQueue:
    return InMemoryIndexQueue()


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def api_record_store() -> FakeRecordStore:
    return FakeRecordStore(
        [
            make_record("1", tags=("News",)),
            make_record("2", bundle="page", title="About"),
            make_record("3", bundle="event"),
        ]
    )


@pytest.fixture
def search_api_handler() -> RecordingSearchApi:
    return RecordingSearchApi()


@pytest.fixture
def app(settings, queue, credential_store, api_record_store, search_api_handler):
    """Falcon ASGI app wired with in-memory adapters and a mocked search API."""
    return create_contentsync_app(
        api_record_store,
        FakeRenderer(),
        settings=settings,
        queue=queue,
        credential_store=credential_store,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(search_api_handler)),
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
