"""Crawl and remote index API resources."""

import falcon.asgi

from contentsync.application.ports import IngestionClient
from contentsync.domain.exceptions import ConfigurationError, DeliveryError
from contentsync.interfaces.api.middleware.auth import require_user


def _error(resp: falcon.asgi.Response, e: Exception) -> None:
    resp.status = falcon.HTTP_409 if isinstance(e, ConfigurationError) else falcon.HTTP_502
    resp.media = {"error": str(e)}


class CrawlResource:
    """POST /v1/crawl - ask the search API to crawl the active site."""

    def __init__(self, ingestion_client: IngestionClient) -> None:
        self._client = ingestion_client

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return

        body = await req.get_media(default_when_empty={})
        try:
            max_pages = int(body.get("max_pages", 100))
        except (AttributeError, TypeError, ValueError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "max_pages must be an integer"}
            return

        try:
            job_id = await self._client.start_crawl({"maxPages": max_pages})
        except (ConfigurationError, DeliveryError) as e:
            _error(resp, e)
            return
        if not job_id:
            resp.status = falcon.HTTP_502
            resp.media = {"error": "Search API did not return a job id"}
            return

        resp.media = {"job_id": job_id}
        resp.status = falcon.HTTP_202


class CrawlStatusResource:
    """GET /v1/crawl/{job_id} - crawl progress."""

    def __init__(self, ingestion_client: IngestionClient) -> None:
        self._client = ingestion_client

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, job_id: str
    ) -> None:
        if not require_user(req, resp):
            return
        try:
            status = await self._client.crawl_status(job_id)
        except (ConfigurationError, DeliveryError) as e:
            _error(resp, e)
            return
        if status is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Job not found"}
            return

        resp.media = {
            "job_id": status.job_id,
            "status": status.status,
            "pages_discovered": status.pages_discovered,
            "pages_crawled": status.pages_crawled,
            "pages_processed": status.pages_processed,
            "pages_errored": status.pages_errored,
        }
        resp.status = falcon.HTTP_200


class IndexPurgeResource:
    """POST /v1/index/purge - remove every page of the site from the index."""

    def __init__(self, ingestion_client: IngestionClient) -> None:
        self._client = ingestion_client

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return
        try:
            purged = await self._client.purge_all()
        except (ConfigurationError, DeliveryError) as e:
            _error(resp, e)
            return
        resp.media = {"purged": purged}
        resp.status = falcon.HTTP_200
