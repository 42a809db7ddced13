"""Index record use case - immediate single-page delivery."""

import time

from contentsync.application.dto.indexing_config import IndexingConfig
from contentsync.application.ports import IngestionClient, Renderer
from contentsync.application.services.document_builder import DocumentBuilder, should_index
from contentsync.domain.entities import ContentRecord
from contentsync.domain.exceptions import ConfigurationError, DeliveryError, ValidationError
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


class IndexRecordUseCase:
    """Index one record now, bypassing the queue (fire-and-forget)."""

    def __init__(
        self,
        renderer: Renderer,
        ingestion_client: IngestionClient,
        document_builder: DocumentBuilder,
        config: IndexingConfig,
    ) -> None:
        self._renderer = renderer
        self._client = ingestion_client
        self._builder = document_builder
        self._config = config

    async def execute(self, record: ContentRecord) -> bool:
        """Return True when the page was accepted by the search API."""
        if not should_index(record, self._config):
            return False

        start = time.perf_counter()
        try:
            rendered = await self._renderer.render(record, self._config.view_mode)
            document = self._builder.build(record, rendered)
        except ValidationError as e:
            logger.warning("Cannot index record", record_id=record.id, error=str(e))
            return False
        except Exception:
            logger.exception("Cannot index record - document build failed", record_id=record.id)
            return False
        prep_ms = round((time.perf_counter() - start) * 1000)

        try:
            api_start = time.perf_counter()
            # A lone page never blocks the write path that triggered it.
            ack = await self._client.submit([document], wait=False)
            api_ms = round((time.perf_counter() - api_start) * 1000)
        except (DeliveryError, ConfigurationError) as e:
            logger.error("Failed to index record", record_id=record.id, error=str(e))
            return False

        logger.info(
            "Indexed record",
            record_id=record.id,
            title=record.title,
            prep_ms=prep_ms,
            api_ms=api_ms,
            queued=ack.queued,
        )
        return True
