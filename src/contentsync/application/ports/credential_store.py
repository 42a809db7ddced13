"""Credential store port."""

from typing import Protocol

from contentsync.domain.entities import Credential


class CredentialStore(Protocol):
    """Port for the stored bearer credential and active target."""

    async def get(self) -> Credential | None: ...

    async def save(self, credential: Credential) -> None: ...

    async def clear(self) -> None: ...
