"""In-memory credential store."""

from contentsync.domain.entities import Credential


class InMemoryCredentialStore:
    """Holds one immutable Credential; writes swap the reference."""

    def __init__(self, credential: Credential | None = None) -> None:
        self._credential = credential

    async def get(self) -> Credential | None:
        return self._credential

    async def save(self, credential: Credential) -> None:
        self._credential = credential

    async def clear(self) -> None:
        self._credential = None
