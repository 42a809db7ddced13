"""HTTP ingestion client for the search API."""

from collections.abc import Sequence
from typing import Any

import httpx

from contentsync.application.dto.search_api import CrawlStatus, SubmitAck
from contentsync.application.ports import CredentialStore
from contentsync.application.services.wait_policy import choose_wait_mode
from contentsync.domain.entities import Credential, Document, Target
from contentsync.domain.exceptions import ConfigurationError, DeliveryError
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


def page_payload(document: Document) -> dict[str, Any]:
    """Serialize a Document into the API's page shape."""
    page: dict[str, Any] = {
        "url": document.url,
        "title": document.title,
        "content": document.content,
        "contentType": document.content_type.value,
        "fetchedAt": document.fetched_at.isoformat(),
    }
    if document.tags:
        page["tags"] = list(document.tags)
    return page


class HttpIngestionClient:
    """Search API client. Reads the credential store on every call."""

    def __init__(
        self,
        base_url: str,
        credential_store: CredentialStore,
        submit_timeout: float = 30.0,
        wait_timeout: float = 300.0,
        request_timeout: float = 30.0,
        purge_timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._store = credential_store
        self._submit_timeout = submit_timeout
        self._wait_timeout = wait_timeout
        self._request_timeout = request_timeout
        self._purge_timeout = purge_timeout
        self._http = http_client or httpx.AsyncClient()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def is_configured(self) -> bool:
        credential = await self._store.get()
        return credential is not None and credential.has_target

    async def submit(self, documents: Sequence[Document], wait: bool | None = None) -> SubmitAck:
        """POST pages; wait=True asks the API to finish processing before replying."""
        if not documents:
            return SubmitAck(queued=False, wait=False)
        credential = await self._require_target()
        wait = choose_wait_mode(len(documents), wait)

        response = await self._request(
            "POST",
            f"/sites/{credential.site_id}/pages",
            credential,
            json={"pages": [page_payload(d) for d in documents]},
            params={"wait": "true"} if wait else None,
            timeout=self._wait_timeout if wait else self._submit_timeout,
        )
        data = _json(response)
        return SubmitAck(queued=bool(data.get("queued", False)), wait=wait, raw=data)

    async def delete_pages(self, urls: Sequence[str]) -> bool:
        credential = await self._require_target()
        response = await self._request(
            "DELETE",
            f"/sites/{credential.site_id}/pages",
            credential,
            json={"urls": list(urls)},
            timeout=self._request_timeout,
        )
        return response.is_success

    async def list_targets(self) -> list[Target]:
        credential = await self._store.get()
        if credential is None or not credential.bearer_token:
            raise ConfigurationError("API key not configured")
        response = await self._request("GET", "/sites", credential, timeout=self._request_timeout)
        try:
            data = response.json() if response.content else []
        except ValueError:
            data = []
        sites = data.get("sites", []) if isinstance(data, dict) else data
        return [Target.from_api(s) for s in sites or [] if isinstance(s, dict)]

    async def start_crawl(self, options: dict[str, Any] | None = None) -> str | None:
        """Start a site crawl and return its job id."""
        credential = await self._require_target()
        response = await self._request(
            "POST",
            f"/sites/{credential.site_id}/crawl",
            credential,
            json=options or {},
            timeout=self._request_timeout,
        )
        data = _json(response)
        job_id = data.get("jobId") or data.get("job_id")
        return str(job_id) if job_id else None

    async def crawl_status(self, job_id: str) -> CrawlStatus | None:
        credential = await self._require_target()
        response = await self._request(
            "GET",
            f"/sites/{credential.site_id}/crawl/{job_id}",
            credential,
            timeout=self._request_timeout,
        )
        data = _json(response)
        if not data:
            return None
        return CrawlStatus.from_api(job_id, data)

    async def purge_all(self) -> bool:
        """Remove every page of the active site from the index."""
        credential = await self._require_target()
        response = await self._request(
            "POST",
            f"/sites/{credential.site_id}/purge",
            credential,
            timeout=self._purge_timeout,
        )
        return response.is_success

    async def _require_target(self) -> Credential:
        credential = await self._store.get()
        if credential is None or not credential.bearer_token:
            raise ConfigurationError("API key not configured")
        if not credential.site_id:
            raise ConfigurationError("Site ID not configured")
        return credential

    async def _request(
        self,
        method: str,
        path: str,
        credential: Credential,
        *,
        timeout: float,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {credential.bearer_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        try:
            response = await self._http.request(
                method,
                f"{self._base_url}{path}",
                headers=headers,
                json=json,
                params=params,
                timeout=timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = f"{method} {path} returned {e.response.status_code}: {e.response.text[:200]}"
            logger.error("Search API request failed", method=method, path=path, error=message)
            raise DeliveryError(message) from e
        except httpx.HTTPError as e:
            message = f"{method} {path} failed: {e or type(e).__name__}"
            logger.error("Search API request failed", method=method, path=path, error=message)
            raise DeliveryError(message) from e
        return response


def _json(response: httpx.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
