"""Record events use case - react to saves and deletes in the host application."""

from contentsync.application.dto.indexing_config import IndexingConfig
from contentsync.application.ports import IndexQueue, RecordStore
from contentsync.application.services.document_builder import should_index
from contentsync.application.use_cases.indexing.delete_record import DeleteRecordUseCase
from contentsync.application.use_cases.indexing.index_record import IndexRecordUseCase
from contentsync.domain.entities import QueueItem
from contentsync.domain.exceptions import NotFound
from contentsync.domain.value_objects import QueueOperation


class RecordEventsUseCase:
    """Index or queue records as they change.

    In realtime mode pages are delivered immediately; otherwise work is
    queued for the next drain.
    """

    def __init__(
        self,
        queue: IndexQueue,
        record_store: RecordStore,
        index_record: IndexRecordUseCase,
        delete_record: DeleteRecordUseCase,
        config: IndexingConfig,
    ) -> None:
        self._queue = queue
        self._record_store = record_store
        self._index_record = index_record
        self._delete_record = delete_record
        self._config = config

    async def on_saved(self, record_id: str) -> str:
        """Handle a save. Returns "indexed", "failed", "queued" or "ignored"."""
        record = await self._record_store.get_by_id(record_id)
        if record is None:
            raise NotFound(f"Record {record_id} not found")
        if not should_index(record, self._config):
            return "ignored"
        if self._config.realtime:
            return "indexed" if await self._index_record.execute(record) else "failed"
        await self._queue.enqueue(QueueItem(record_id=record.id, operation=QueueOperation.INDEX))
        return "queued"

    async def on_deleted(self, record_id: str, url: str) -> str:
        """Handle a delete. Returns "deleted", "failed", "queued" or "ignored"."""
        if not self._config.enabled:
            return "ignored"
        if self._config.realtime:
            return "deleted" if await self._delete_record.execute(record_id, url) else "failed"
        await self._queue.enqueue(
            QueueItem(record_id=record_id, operation=QueueOperation.DELETE, url=url)
        )
        return "queued"
