"""Authorization server port - OAuth code exchange."""

from typing import Any, Protocol


class AuthorizationServer(Protocol):
    """Port for the search API's OAuth endpoints."""

    def authorization_url(self, state: str) -> str: ...

    async def exchange_code(self, code: str) -> dict[str, Any]: ...
