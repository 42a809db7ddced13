"""Process queue use case - bounded, batched draining of the index queue."""

from structlog.contextvars import bound_contextvars

from contentsync.application.dto.indexing_config import IndexingConfig
from contentsync.application.ports import IndexQueue, IngestionClient, RecordStore, Renderer
from contentsync.application.services.document_builder import DocumentBuilder, should_index
from contentsync.domain.entities import Document, QueueItem
from contentsync.domain.exceptions import ConfigurationError, DeliveryError, ValidationError
from contentsync.domain.value_objects import QueueOperation
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


class BatchIndexer:
    """Drain the index queue in batches and reconcile queue state.

    Every claimed item is committed once resolved, including items whose
    batch submission failed. A failed batch is dropped, not retried: one
    poison batch must not wedge the queue, and operators recover with a
    full reindex.
    """

    def __init__(
        self,
        queue: IndexQueue,
        record_store: RecordStore,
        renderer: Renderer,
        ingestion_client: IngestionClient,
        document_builder: DocumentBuilder,
        config: IndexingConfig,
    ) -> None:
        self._queue = queue
        self._record_store = record_store
        self._renderer = renderer
        self._client = ingestion_client
        self._builder = document_builder
        self._config = config

    async def drain(self, limit: int = 100, batch_size: int | None = None) -> int:
        """Process up to limit items, batch_size per submission.

        Returns the number of committed items (deletes, skips and batch
        items). A record that fails to load, render or build is logged and
        committed as a skip, so one bad item never blocks the queue.
        """
        batch_size = batch_size or self._config.batch_size
        if limit < 1 or batch_size < 1:
            return 0
        if not await self._client.is_configured():
            logger.warning("Search API is not connected; leaving queue untouched")
            return 0

        processed = 0
        batch = 0
        while processed < limit:
            batch += 1
            want = min(limit - processed, batch_size)
            with bound_contextvars(batch=batch):
                committed, claimed = await self._process_batch(want)
            processed += committed
            if claimed < want:
                break
        logger.info("Drained index queue", processed=processed, batches=batch)
        return processed

    async def _process_batch(self, max_items: int) -> tuple[int, int]:
        """Claim up to max_items one at a time. Returns (committed, claimed)."""
        committed = 0
        claimed = 0
        documents: list[Document] = []
        to_ingest: list[QueueItem] = []
        to_skip: list[QueueItem] = []

        while claimed < max_items:
            items = await self._queue.claim(1)
            if not items:
                break
            item = items[0]
            claimed += 1

            if item.operation == QueueOperation.DELETE:
                await self._delete(item)
                await self._queue.commit(item)
                committed += 1
                continue

            document = await self._build(item)
            if document is None:
                to_skip.append(item)
            else:
                documents.append(document)
                to_ingest.append(item)

        for item in to_skip:
            await self._queue.commit(item)
            committed += 1

        if documents:
            await self._submit(documents)
            for item in to_ingest:
                await self._queue.commit(item)
                committed += 1

        return committed, claimed

    async def _build(self, item: QueueItem) -> Document | None:
        """Load, render and build one record. Any failure skips the item."""
        try:
            record = await self._record_store.get_by_id(item.record_id)
            if record is None or not should_index(record, self._config):
                logger.info("Skipping record - not found or not indexable", record_id=item.record_id)
                return None
            rendered = await self._renderer.render(record, self._config.view_mode)
            return self._builder.build(record, rendered)
        except ValidationError as e:
            logger.warning("Skipping record - invalid document", record_id=item.record_id, error=str(e))
            return None
        except Exception:
            logger.exception("Skipping record - document build failed", record_id=item.record_id)
            return None

    async def _delete(self, item: QueueItem) -> None:
        url = item.url
        if not url:
            try:
                record = await self._record_store.get_by_id(item.record_id)
            except Exception:
                logger.exception("Skipping delete - record lookup failed", record_id=item.record_id)
                return
            url = record.path if record else None
        if not url:
            logger.info("Skipping delete - no url for record", record_id=item.record_id)
            return
        try:
            await self._client.delete_pages([url])
            logger.info("Deleted page from index", record_id=item.record_id, url=url)
        except (DeliveryError, ConfigurationError) as e:
            logger.error("Failed to delete page from index", record_id=item.record_id, url=url, error=str(e))
        except Exception:
            logger.exception("Failed to delete page from index", record_id=item.record_id, url=url)

    async def _submit(self, documents: list[Document]) -> None:
        logger.info("Sending pages to search API", count=len(documents))
        try:
            # Fire-and-forget regardless of size; waiting on large batches times out.
            await self._client.submit(documents, wait=False)
            logger.info("Submitted pages for async processing", count=len(documents))
        except (DeliveryError, ConfigurationError) as e:
            logger.error("Batch index failed", count=len(documents), error=str(e))
            logger.warning(
                "Removed failed items from queue to prevent infinite retry",
                count=len(documents),
            )
