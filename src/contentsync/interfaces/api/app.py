"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon
import falcon.asgi
from falcon.asgi import App

from contentsync.interfaces.api.resources.connection import (
    ConnectionResource,
    ConnectionSiteResource,
    ConnectionValidateResource,
)
from contentsync.interfaces.api.resources.crawl import (
    CrawlResource,
    CrawlStatusResource,
    IndexPurgeResource,
)
from contentsync.interfaces.api.resources.health import HealthResource
from contentsync.interfaces.api.resources.oauth import (
    OAuthCallbackResource,
    OAuthConnectResource,
    OAuthDisconnectResource,
)
from contentsync.interfaces.api.resources.queue import (
    QueueDrainResource,
    QueueReindexResource,
    QueueResource,
)
from contentsync.interfaces.api.resources.records import (
    RecordDeletedResource,
    RecordSavedResource,
)
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ApiResources:
    """Every resource the API routes to."""

    health: HealthResource
    oauth_connect: OAuthConnectResource
    oauth_callback: OAuthCallbackResource
    oauth_disconnect: OAuthDisconnectResource
    connection: ConnectionResource
    connection_site: ConnectionSiteResource
    connection_validate: ConnectionValidateResource
    queue: QueueResource
    queue_drain: QueueDrainResource
    queue_reindex: QueueReindexResource
    record_saved: RecordSavedResource
    record_deleted: RecordDeletedResource
    crawl: CrawlResource
    crawl_status: CrawlStatusResource
    index_purge: IndexPurgeResource


async def _log_exception(req, resp, ex, params) -> None:
    logger.exception("Unhandled error", method=req.method, path=req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _log_exception)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/oauth/connect", resources.oauth_connect)
    app.add_route("/v1/oauth/callback", resources.oauth_callback)
    app.add_route("/v1/oauth/disconnect", resources.oauth_disconnect)
    app.add_route("/v1/connection", resources.connection)
    app.add_route("/v1/connection/site", resources.connection_site)
    app.add_route("/v1/connection/validate", resources.connection_validate)
    app.add_route("/v1/queue", resources.queue)
    app.add_route("/v1/queue/drain", resources.queue_drain)
    app.add_route("/v1/queue/reindex", resources.queue_reindex)
    app.add_route("/v1/records/{record_id}/saved", resources.record_saved)
    app.add_route("/v1/records/{record_id}/deleted", resources.record_deleted)
    app.add_route("/v1/crawl", resources.crawl)
    app.add_route("/v1/crawl/{job_id}", resources.crawl_status)
    app.add_route("/v1/index/purge", resources.index_purge)
    return app
