"""Connection API resources - details, site selection, validation."""

from typing import Any

import falcon.asgi

from contentsync.application.ports import CredentialStore
from contentsync.application.use_cases.auth.manage_connection import (
    SelectTargetUseCase,
    ValidateConnectionUseCase,
)
from contentsync.domain.entities import Credential
from contentsync.domain.exceptions import ConfigurationError, NotFound
from contentsync.interfaces.api.middleware.auth import require_user


def connection_details(credential: Credential | None) -> dict[str, Any]:
    """Public view of the credential; never includes the token."""
    if credential is None:
        return {
            "connected": False,
            "org_id": None,
            "org_name": None,
            "site_id": None,
            "site_name": None,
            "base_url": None,
            "available_sites": [],
        }
    return {
        "connected": credential.has_target,
        "org_id": credential.org_id,
        "org_name": credential.org_name,
        "site_id": credential.site_id,
        "site_name": credential.site_name,
        "base_url": credential.base_url,
        "available_sites": [
            {"id": s.id, "name": s.name, "base_url": s.base_url} for s in credential.available_sites
        ],
    }


class ConnectionResource:
    """GET /v1/connection - current connection details."""

    def __init__(self, credential_store: CredentialStore) -> None:
        self._store = credential_store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return
        resp.media = connection_details(await self._store.get())
        resp.status = falcon.HTTP_200


class ConnectionSiteResource:
    """PUT /v1/connection/site - choose the active site."""

    def __init__(self, select_target: SelectTargetUseCase) -> None:
        self._select_target = select_target

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return

        body = await req.get_media(default_when_empty={})
        site_id = str(body.get("site_id") or "").strip() if isinstance(body, dict) else ""
        if not site_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "site_id is required"}
            return

        try:
            credential = await self._select_target.execute(site_id)
        except ConfigurationError as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = connection_details(credential)
        resp.status = falcon.HTTP_200


class ConnectionValidateResource:
    """POST /v1/connection/validate - check the token against the API."""

    def __init__(self, validate_connection: ValidateConnectionUseCase) -> None:
        self._validate = validate_connection

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_user(req, resp):
            return
        resp.media = {"valid": await self._validate.execute()}
        resp.status = falcon.HTTP_200
