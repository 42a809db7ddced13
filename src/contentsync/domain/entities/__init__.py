"""Domain entities."""

from contentsync.domain.entities.credential import Credential, Target
from contentsync.domain.entities.document import Document, DocumentDraft
from contentsync.domain.entities.exchange_session import ExchangeSession
from contentsync.domain.entities.queue_item import QueueItem
from contentsync.domain.entities.record import ContentRecord, Reference

__all__ = [
    "ContentRecord",
    "Credential",
    "Document",
    "DocumentDraft",
    "ExchangeSession",
    "QueueItem",
    "Reference",
    "Target",
]
