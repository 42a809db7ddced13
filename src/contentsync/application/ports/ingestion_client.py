"""Ingestion client port - the search API boundary."""

from collections.abc import Sequence
from typing import Any, Protocol

from contentsync.application.dto.search_api import CrawlStatus, SubmitAck
from contentsync.domain.entities import Document, Target


class IngestionClient(Protocol):
    """Port for delivering documents to the remote index."""

    async def is_configured(self) -> bool: ...

    async def submit(self, documents: Sequence[Document], wait: bool | None = None) -> SubmitAck: ...

    async def delete_pages(self, urls: Sequence[str]) -> bool: ...

    async def list_targets(self) -> list[Target]: ...

    async def start_crawl(self, options: dict[str, Any] | None = None) -> str | None: ...

    async def crawl_status(self, job_id: str) -> CrawlStatus | None: ...

    async def purge_all(self) -> bool: ...
