"""HTTP client for the search API's OAuth endpoints."""

from typing import Any
from urllib.parse import urlencode

import httpx

from contentsync.domain.exceptions import DeliveryError


class HttpAuthorizationServer:
    """Builds authorization URLs and exchanges codes for an API key."""

    def __init__(
        self,
        base_url: str,
        client_id: str,
        redirect_uri: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._redirect_uri = redirect_uri
        self._timeout = timeout
        self._http = http_client or httpx.AsyncClient()

    async def aclose(self) -> None:
        await self._http.aclose()

    def authorization_url(self, state: str) -> str:
        query = urlencode(
            {
                "client_id": self._client_id,
                "redirect_uri": self._redirect_uri,
                "state": state,
                "response_type": "code",
            }
        )
        return f"{self._base_url}/auth/oauth/authorize?{query}"

    async def exchange_code(self, code: str) -> dict[str, Any]:
        """POST the code to the token endpoint; returns the decoded payload."""
        try:
            response = await self._http.post(
                f"{self._base_url}/auth/oauth/token",
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self._redirect_uri,
                    "client_id": self._client_id,
                },
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise DeliveryError(
                f"Token endpoint returned {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise DeliveryError(f"Token request failed: {e or type(e).__name__}") from e
        except ValueError as e:
            raise DeliveryError("Token endpoint returned invalid JSON") from e
        if not isinstance(data, dict):
            raise DeliveryError("Token endpoint returned an unexpected payload")
        return data
