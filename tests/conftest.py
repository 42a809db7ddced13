"""Pytest fixtures for contentsync tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Collection
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from contentsync.application.dto.indexing_config import IndexingConfig
from contentsync.application.dto.search_api import SubmitAck
from contentsync.domain.entities import ContentRecord, Credential, Reference, Target
from contentsync.domain.entities.record import TAXONOMY_TARGET


# --- Fake host application ---


class FakeRecordStore:
    """In-memory record store."""

    def __init__(self, records: list[ContentRecord] | None = None) -> None:
        self._by_id: dict[str, ContentRecord] = {r.id: r for r in records or []}

    def add(self, record: ContentRecord) -> None:
        self._by_id[record.id] = record

    def remove(self, record_id: str) -> None:
        self._by_id.pop(record_id, None)

    async def get_by_id(self, record_id: str) -> ContentRecord | None:
        return self._by_id.get(record_id)

    async def list_indexable_ids(
        self, bundles: Collection[str], published_only: bool = True
    ) -> list[str]:
        return [
            r.id
            for r in self._by_id.values()
            if r.bundle in bundles and (r.published or not published_only)
        ]


class FakeRenderer:
    """Renders a record as a small HTML page and records calls."""

    def __init__(self, body: str = "<p>Body</p>") -> None:
        self.body = body
        self.calls: list[tuple[str, str]] = []

    async def render(self, record: ContentRecord, view_mode: str) -> str:
        self.calls.append((record.id, view_mode))
        return f"<h1>{record.title}</h1>{self.body}"


class FakeIngestionClient:
    """Ingestion client that records calls and can be told to fail."""

    def __init__(self, configured: bool = True) -> None:
        self.configured = configured
        self.submissions: list[tuple[list, bool | None]] = []
        self.deleted: list[str] = []
        self.submit_error: Exception | None = None
        self.delete_error: Exception | None = None
        self.targets: list[Target] = []

    async def is_configured(self) -> bool:
        return self.configured

    async def submit(self, documents, wait=None) -> SubmitAck:
        self.submissions.append((list(documents), wait))
        if self.submit_error:
            raise self.submit_error
        return SubmitAck(queued=True, wait=bool(wait))

    async def delete_pages(self, urls) -> bool:
        if self.delete_error:
            raise self.delete_error
        self.deleted.extend(urls)
        return True

    async def list_targets(self) -> list[Target]:
        return list(self.targets)

    async def start_crawl(self, options=None):
        return "job-1"

    async def crawl_status(self, job_id):
        return None

    async def purge_all(self) -> bool:
        return True


class FakeAuthorizationServer:
    """Authorization server with a canned token response."""

    def __init__(self, payload: dict | None = None, error: Exception | None = None) -> None:
        self.payload = payload if payload is not None else token_payload()
        self.error = error
        self.codes: list[str] = []

    def authorization_url(self, state: str) -> str:
        return f"https://auth.test/authorize?state={state}"

    async def exchange_code(self, code: str) -> dict:
        self.codes.append(code)
        if self.error:
            raise self.error
        return self.payload


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# --- Builders ---


def make_record(
    record_id: str = "1",
    bundle: str = "article",
    title: str = "Hello",
    published: bool = True,
    tags: tuple[str, ...] = (),
) -> ContentRecord:
    return ContentRecord(
        id=record_id,
        bundle=bundle,
        title=title,
        path=f"https://example.com/node/{record_id}",
        published=published,
        references=tuple(Reference("field_tags", TAXONOMY_TARGET, t) for t in tags),
    )


def token_payload(**overrides) -> dict:
    payload = {
        "api_key": "key-123",
        "org_id": "org-1",
        "org_name": "Acme",
        "sites": [
            {"id": "site-1", "name": "Main", "baseUrl": "https://example.com"},
            {"id": "site-2", "name": "Blog", "baseUrl": "https://blog.example.com"},
        ],
    }
    payload.update(overrides)
    return payload


def recording_transport(
    responder: Callable[[httpx.Request], httpx.Response] | None = None,
) -> tuple[httpx.MockTransport, list[httpx.Request]]:
    """MockTransport that keeps every request it sees."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if responder is not None:
            return responder(request)
        return httpx.Response(200, json={"queued": True})

    return httpx.MockTransport(handler), requests


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content.decode())


# --- Fixtures ---


@pytest.fixture
def indexing_config() -> IndexingConfig:
    return IndexingConfig(enabled=True, content_types=frozenset({"article", "page"}), batch_size=50)


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore(
        [
            make_record("1", tags=("News", "Sports")),
            make_record("2", bundle="page", title="About"),
            make_record("3", bundle="event", title="Party"),
            make_record("4", published=False, title="Draft"),
        ]
    )


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def ingestion_client() -> FakeIngestionClient:
    return FakeIngestionClient()


@pytest.fixture
def connected_credential() -> Credential:
    site = Target(id="site-1", name="Main", base_url="https://example.com")
    return Credential(
        bearer_token="key-123",
        org_id="org-1",
        org_name="Acme",
        available_sites=(site, Target(id="site-2", name="Blog")),
    ).with_target(site)
