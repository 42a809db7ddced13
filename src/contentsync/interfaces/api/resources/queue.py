"""Queue API resources - the trigger surface for drains, purges and reindexing."""

import falcon.asgi

from contentsync.application.ports import IndexQueue
from contentsync.application.use_cases.indexing.manage_queue import (
    ClearQueueUseCase,
    QueueFullIndexUseCase,
)
from contentsync.application.use_cases.indexing.process_queue import BatchIndexer
from contentsync.interfaces.api.middleware.auth import require_user

MAX_DRAIN_LIMIT = 1000


class QueueResource:
    """GET/DELETE /v1/queue - queue size and clear."""

    def __init__(self, queue: IndexQueue, clear_queue: ClearQueueUseCase) -> None:
        self._queue = queue
        self._clear_queue = clear_queue

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return
        resp.media = {"size": await self._queue.size()}
        resp.status = falcon.HTTP_200

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return
        resp.media = {"cleared": await self._clear_queue.execute()}
        resp.status = falcon.HTTP_200


class QueueDrainResource:
    """POST /v1/queue/drain - process a bounded number of queue items.

    Meant for cron ticks and manual runs. Failed batches are dropped from
    the queue; a full reindex recovers them.
    """

    def __init__(self, batch_indexer: BatchIndexer, queue: IndexQueue) -> None:
        self._batch_indexer = batch_indexer
        self._queue = queue

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return

        body = await req.get_media(default_when_empty={})
        try:
            limit = int(body.get("limit", 100))
            batch_size = int(body["batch_size"]) if body.get("batch_size") is not None else None
        except (AttributeError, TypeError, ValueError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "limit and batch_size must be integers"}
            return
        if limit < 1 or (batch_size is not None and batch_size < 1):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "limit and batch_size must be positive"}
            return

        processed = await self._batch_indexer.drain(min(limit, MAX_DRAIN_LIMIT), batch_size)
        resp.media = {"processed": processed, "remaining": await self._queue.size()}
        resp.status = falcon.HTTP_200


class QueueReindexResource:
    """POST /v1/queue/reindex - queue every indexable record."""

    def __init__(self, full_index: QueueFullIndexUseCase) -> None:
        self._full_index = full_index

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return
        resp.media = {"queued": await self._full_index.execute()}
        resp.status = falcon.HTTP_202
