"""In-memory index queue - single process, lease semantics preserved."""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import UUID

from contentsync.domain.entities import QueueItem


class InMemoryIndexQueue:
    """Index queue held in process memory.

    Not durable across restarts; used by tests and embedded single-process
    setups. Claims are serialized by a lock so concurrent drains never
    receive the same item.
    """

    def __init__(
        self,
        lease_seconds: int = 300,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._lease = timedelta(seconds=lease_seconds)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._items: dict[UUID, QueueItem] = {}
        self._claimed_until: dict[UUID, datetime] = {}
        self._lock = asyncio.Lock()

    async def enqueue(self, item: QueueItem) -> None:
        async with self._lock:
            self._items[item.id] = item

    async def claim(self, limit: int = 1) -> list[QueueItem]:
        if limit < 1:
            return []
        async with self._lock:
            now = self._clock()
            claimed: list[QueueItem] = []
            for item_id, item in self._items.items():
                until = self._claimed_until.get(item_id)
                if until is not None and until >= now:
                    continue
                self._claimed_until[item_id] = now + self._lease
                claimed.append(item)
                if len(claimed) >= limit:
                    break
            return claimed

    async def commit(self, item: QueueItem) -> None:
        async with self._lock:
            self._items.pop(item.id, None)
            self._claimed_until.pop(item.id, None)

    async def size(self) -> int:
        return len(self._items)

    async def purge(self) -> int:
        async with self._lock:
            count = len(self._items)
            self._items.clear()
            self._claimed_until.clear()
            return count
