"""Document content types."""

from enum import StrEnum


class ContentType(StrEnum):
    """Content type reported to the search API."""

    HTML = "html"
