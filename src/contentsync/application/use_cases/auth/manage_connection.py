"""Connection management use cases - active site selection and validation."""

from dataclasses import replace

from contentsync.application.ports import CredentialStore, IngestionClient
from contentsync.domain.entities import Credential
from contentsync.domain.exceptions import ConfigurationError, DeliveryError, NotFound
from contentsync.utils.logging import get_logger

logger = get_logger(__name__)


class SelectTargetUseCase:
    """Make one of the organization's sites the active delivery target."""

    def __init__(self, credential_store: CredentialStore, ingestion_client: IngestionClient) -> None:
        self._store = credential_store
        self._client = ingestion_client

    async def execute(self, site_id: str) -> Credential:
        credential = await self._store.get()
        if credential is None:
            raise ConfigurationError("Not connected to the search API")

        site = credential.find_site(site_id)
        if site is None:
            # Sites may have been added since the exchange; ask the API.
            try:
                targets = await self._client.list_targets()
            except DeliveryError as e:
                logger.warning("Could not refresh site list", error=str(e))
                targets = []
            site = next((t for t in targets if t.id == site_id), None)
            if site is None:
                raise NotFound(f"Site {site_id} not found")
            if targets:
                credential = replace(credential, available_sites=tuple(targets))

        updated = credential.with_target(site)
        await self._store.save(updated)
        logger.info("Selected active site", site_id=site.id, site_name=site.name)
        return updated


class ValidateConnectionUseCase:
    """Check that the stored bearer token is accepted by the API."""

    def __init__(self, ingestion_client: IngestionClient) -> None:
        self._client = ingestion_client

    async def execute(self) -> bool:
        try:
            await self._client.list_targets()
        except (ConfigurationError, DeliveryError) as e:
            logger.warning("Credential validation failed", error=str(e))
            return False
        return True
