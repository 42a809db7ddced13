"""Record store port - host application content."""

from collections.abc import Collection
from typing import Protocol

from contentsync.domain.entities import ContentRecord


class RecordStore(Protocol):
    """Port for loading content records from the host application."""

    async def get_by_id(self, record_id: str) -> ContentRecord | None: ...

    async def list_indexable_ids(
        self, bundles: Collection[str], published_only: bool = True
    ) -> list[str]: ...
