"""Domain value objects."""

from contentsync.domain.value_objects.content_type import ContentType
from contentsync.domain.value_objects.exchange_state import ExchangeState
from contentsync.domain.value_objects.queue_operation import QueueOperation

__all__ = [
    "ContentType",
    "ExchangeState",
    "QueueOperation",
]
