"""Queue item entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from contentsync.domain.value_objects import QueueOperation


@dataclass(frozen=True)
class QueueItem:
    """Deferred indexing work for one record.

    url is captured for deletes so the remote page can be removed after the
    record itself is gone.
    """

    record_id: str
    operation: QueueOperation = QueueOperation.INDEX
    url: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
