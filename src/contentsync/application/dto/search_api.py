"""Search API response DTOs."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SubmitAck:
    """Acknowledgement of a page submission."""

    queued: bool
    wait: bool
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class CrawlStatus:
    """Progress of a crawl job."""

    job_id: str
    status: str
    pages_discovered: int = 0
    pages_crawled: int = 0
    pages_processed: int = 0
    pages_errored: int = 0

    @classmethod
    def from_api(cls, job_id: str, data: dict[str, Any]) -> "CrawlStatus":
        return cls(
            job_id=job_id,
            status=data.get("status") or "unknown",
            pages_discovered=_count(data.get("pagesDiscovered")),
            pages_crawled=_count(data.get("pagesCrawled")),
            pages_processed=_count(data.get("pagesProcessed")),
            pages_errored=_count(data.get("pagesErrored")),
        )


def _count(value: Any) -> int:
    """Page counters arrive as numbers or numeric strings; anything else is 0."""
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
