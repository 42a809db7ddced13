"""Record event API resources - host application save/delete notifications."""

import falcon.asgi

from contentsync.application.use_cases.indexing.record_events import RecordEventsUseCase
from contentsync.domain.exceptions import NotFound
from contentsync.interfaces.api.middleware.auth import require_user


class RecordSavedResource:
    """POST /v1/records/{record_id}/saved."""

    def __init__(self, record_events: RecordEventsUseCase) -> None:
        self._record_events = record_events

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, record_id: str
    ) -> None:
        if not require_user(req, resp):
            return
        try:
            status = await self._record_events.on_saved(record_id)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        resp.media = {"record_id": record_id, "status": status}
        resp.status = falcon.HTTP_202


class RecordDeletedResource:
    """POST /v1/records/{record_id}/deleted - body carries the record's url."""

    def __init__(self, record_events: RecordEventsUseCase) -> None:
        self._record_events = record_events

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, record_id: str
    ) -> None:
        if not require_user(req, resp):
            return

        body = await req.get_media(default_when_empty={})
        url = str(body.get("url") or "").strip() if isinstance(body, dict) else ""
        if not url:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "url is required"}
            return

        status = await self._record_events.on_deleted(record_id, url)
        resp.media = {"record_id": record_id, "status": status}
        resp.status = falcon.HTTP_202
