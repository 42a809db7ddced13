"""Delete record use case - immediate removal from the index."""

from contentsync.application.ports import IngestionClient
from contentsync.domain.exceptions import ConfigurationError, DeliveryError
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


class DeleteRecordUseCase:
    """Remove one page from the index by its canonical url."""

    def __init__(self, ingestion_client: IngestionClient) -> None:
        self._client = ingestion_client

    async def execute(self, record_id: str, url: str) -> bool:
        try:
            deleted = await self._client.delete_pages([url])
        except (DeliveryError, ConfigurationError) as e:
            logger.error("Failed to delete record from index", record_id=record_id, error=str(e))
            return False
        if deleted:
            logger.info("Deleted record from index", record_id=record_id, url=url)
        return deleted
