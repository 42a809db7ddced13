"""Queue item operations."""

from enum import StrEnum


class QueueOperation(StrEnum):
    """What to do with a record when its queue item is processed."""

    INDEX = "index"
    DELETE = "delete"
