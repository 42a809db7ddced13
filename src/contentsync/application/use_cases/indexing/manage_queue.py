"""Queue management use cases - full reindex and clear."""

from contentsync.application.dto.indexing_config import IndexingConfig
from contentsync.application.ports import IndexQueue, RecordStore
from contentsync.domain.entities import QueueItem
from contentsync.domain.value_objects import QueueOperation
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


class QueueFullIndexUseCase:
    """Queue every published, allow-listed record for indexing."""

    def __init__(
        self,
        queue: IndexQueue,
        record_store: RecordStore,
        config: IndexingConfig,
    ) -> None:
        self._queue = queue
        self._record_store = record_store
        self._config = config

    async def execute(self) -> int:
        """Replace the backlog with one index item per record. Returns the count queued."""
        if not self._config.content_types:
            return 0

        # Purge first so a reindex never stacks on top of an old backlog.
        await self._queue.purge()

        record_ids = await self._record_store.list_indexable_ids(
            sorted(self._config.content_types), published_only=True
        )
        for record_id in record_ids:
            await self._queue.enqueue(QueueItem(record_id=record_id, operation=QueueOperation.INDEX))

        logger.info("Queued records for full re-index", count=len(record_ids))
        return len(record_ids)


class ClearQueueUseCase:
    """Discard every pending queue item."""

    def __init__(self, queue: IndexQueue) -> None:
        self._queue = queue

    async def execute(self) -> int:
        count = await self._queue.purge()
        logger.info("Cleared items from indexing queue", count=count)
        return count
