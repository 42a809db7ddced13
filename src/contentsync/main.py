"""Application entry point and composition root."""

from collections.abc import Sequence

import httpx
from falcon.asgi import App

from contentsync import __version__
from contentsync.application.dto.indexing_config import IndexingConfig
from contentsync.application.ports import CredentialStore, IndexQueue, RecordStore, Renderer
from contentsync.application.services.document_builder import AlterHook, DocumentBuilder
from contentsync.application.use_cases.auth.credential_exchange import CredentialExchange
from contentsync.application.use_cases.auth.manage_connection import (
    SelectTargetUseCase,
    ValidateConnectionUseCase,
)
from contentsync.application.use_cases.indexing.delete_record import DeleteRecordUseCase
from contentsync.application.use_cases.indexing.index_record import IndexRecordUseCase
from contentsync.application.use_cases.indexing.manage_queue import (
    ClearQueueUseCase,
    QueueFullIndexUseCase,
)
from contentsync.application.use_cases.indexing.process_queue import BatchIndexer
from contentsync.application.use_cases.indexing.record_events import RecordEventsUseCase
from contentsync.config import Settings, get_settings
from contentsync.infrastructure.auth.keycloak_provider import KeycloakProvider
from contentsync.infrastructure.persistence.postgres.connection import create_pool
from contentsync.infrastructure.persistence.postgres.credential_store import (
    PostgresCredentialStore,
)
from contentsync.infrastructure.persistence.postgres.index_queue import PostgresIndexQueue
from contentsync.infrastructure.search_api.authorization_server import HttpAuthorizationServer
from contentsync.infrastructure.search_api.ingestion_client import HttpIngestionClient
from contentsync.interfaces.api.app import ApiResources, create_app
from contentsync.interfaces.api.middleware.auth import AuthMiddleware
from contentsync.interfaces.api.middleware.cors import CORSMiddleware
from contentsync.interfaces.api.middleware.lifespan import LifespanMiddleware
from contentsync.interfaces.api.resources.connection import (
    ConnectionResource,
    ConnectionSiteResource,
    ConnectionValidateResource,
)
from contentsync.interfaces.api.resources.crawl import (
    CrawlResource,
    CrawlStatusResource,
    IndexPurgeResource,
)
from contentsync.interfaces.api.resources.health import HealthResource
from contentsync.interfaces.api.resources.oauth import (
    OAuthCallbackResource,
    OAuthConnectResource,
    OAuthDisconnectResource,
)
from contentsync.interfaces.api.resources.queue import (
    QueueDrainResource,
    QueueReindexResource,
    QueueResource,
)
from contentsync.interfaces.api.resources.records import (
    RecordDeletedResource,
    RecordSavedResource,
)
from contentsync.utils.logging import configure_logging

OPERATOR_ROLE = "contentsync-admin"


def main() -> None:
    """CLI entry point."""
    print(f"contentsync v{__version__}")


def create_contentsync_app(
    record_store: RecordStore,
    renderer: Renderer,
    alter_hooks: Sequence[AlterHook] = (),
    settings: Settings | None = None,
    *,
    queue: IndexQueue | None = None,
    credential_store: CredentialStore | None = None,
    http_client: httpx.AsyncClient | None = None,
    keycloak: KeycloakProvider | None = None,
) -> App:
    """Composition root - build the Falcon app around the host's collaborators.

    The host application supplies its record store, renderer and alteration
    hooks. Queue and credential storage default to Postgres.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)

    pool = None
    if queue is None or credential_store is None:
        pool = create_pool(settings.database_url)
    if queue is None:
        queue = PostgresIndexQueue(pool, settings.queue_name, settings.queue_lease_seconds)
    if credential_store is None:
        credential_store = PostgresCredentialStore(pool)

    if keycloak is None and settings.keycloak_client_secret:
        keycloak = KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            required_role=OPERATOR_ROLE,
        )

    shared_http = http_client or httpx.AsyncClient()
    ingestion_client = HttpIngestionClient(
        base_url=settings.api_endpoint,
        credential_store=credential_store,
        submit_timeout=settings.submit_timeout,
        wait_timeout=settings.wait_timeout,
        request_timeout=settings.request_timeout,
        purge_timeout=settings.purge_timeout,
        http_client=shared_http,
    )
    authorization_server = HttpAuthorizationServer(
        base_url=settings.api_endpoint,
        client_id=settings.oauth_client_id,
        redirect_uri=settings.oauth_callback_url,
        timeout=settings.request_timeout,
        http_client=shared_http,
    )

    config = IndexingConfig.from_settings(settings)
    document_builder = DocumentBuilder(alter_hooks=alter_hooks)

    batch_indexer = BatchIndexer(
        queue=queue,
        record_store=record_store,
        renderer=renderer,
        ingestion_client=ingestion_client,
        document_builder=document_builder,
        config=config,
    )
    index_record = IndexRecordUseCase(
        renderer=renderer,
        ingestion_client=ingestion_client,
        document_builder=document_builder,
        config=config,
    )
    delete_record = DeleteRecordUseCase(ingestion_client)
    record_events = RecordEventsUseCase(
        queue=queue,
        record_store=record_store,
        index_record=index_record,
        delete_record=delete_record,
        config=config,
    )
    full_index = QueueFullIndexUseCase(queue=queue, record_store=record_store, config=config)
    clear_queue = ClearQueueUseCase(queue)
    exchange = CredentialExchange(credential_store, authorization_server)
    select_target = SelectTargetUseCase(credential_store, ingestion_client)
    validate_connection = ValidateConnectionUseCase(ingestion_client)

    resources = ApiResources(
        health=HealthResource(queue),
        oauth_connect=OAuthConnectResource(exchange, secure_cookie=settings.session_cookie_secure),
        oauth_callback=OAuthCallbackResource(exchange),
        oauth_disconnect=OAuthDisconnectResource(exchange),
        connection=ConnectionResource(credential_store),
        connection_site=ConnectionSiteResource(select_target),
        connection_validate=ConnectionValidateResource(validate_connection),
        queue=QueueResource(queue, clear_queue),
        queue_drain=QueueDrainResource(batch_indexer, queue),
        queue_reindex=QueueReindexResource(full_index),
        record_saved=RecordSavedResource(record_events),
        record_deleted=RecordDeletedResource(record_events),
        crawl=CrawlResource(ingestion_client),
        crawl_status=CrawlStatusResource(ingestion_client),
        index_purge=IndexPurgeResource(ingestion_client),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            LifespanMiddleware(pool, closeables=[] if http_client else [shared_http]),
            AuthMiddleware(keycloak),
        ],
    )


def run_server(
    record_store: RecordStore,
    renderer: Renderer,
    alter_hooks: Sequence[AlterHook] = (),
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Run uvicorn server around the host's record store and renderer."""
    import uvicorn

    app = create_contentsync_app(record_store, renderer, alter_hooks)
    uvicorn.run(app, host=host, port=port)
