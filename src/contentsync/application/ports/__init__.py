"""Application ports - interfaces for external adapters."""

from contentsync.application.ports.authorization_server import AuthorizationServer
from contentsync.application.ports.credential_store import CredentialStore
from contentsync.application.ports.index_queue import IndexQueue
from contentsync.application.ports.ingestion_client import IngestionClient
from contentsync.application.ports.record_store import RecordStore
from contentsync.application.ports.renderer import Renderer

__all__ = [
    "AuthorizationServer",
    "CredentialStore",
    "IndexQueue",
    "IngestionClient",
    "RecordStore",
    "Renderer",
]
