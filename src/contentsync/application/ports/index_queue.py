"""Index queue port - durable at-least-once FIFO."""

from typing import Protocol

from contentsync.domain.entities import QueueItem


class IndexQueue(Protocol):
    """Port for the indexing work queue.

    Claimed items stay invisible to other claimants until committed or until
    their lease expires, after which they are delivered again.
    """

    async def enqueue(self, item: QueueItem) -> None: ...

    async def claim(self, limit: int = 1) -> list[QueueItem]: ...

    async def commit(self, item: QueueItem) -> None: ...

    async def size(self) -> int: ...

    async def purge(self) -> int: ...
