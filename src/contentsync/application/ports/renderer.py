"""Renderer port - turns a record into markup."""

from typing import Protocol

from contentsync.domain.entities import ContentRecord


class Renderer(Protocol):
    """Port for the host application's view rendering."""

    async def render(self, record: ContentRecord, view_mode: str) -> str: ...
