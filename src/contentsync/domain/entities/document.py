"""Document entity - the unit delivered to the search index."""

from dataclasses import dataclass, field
from datetime import datetime

from contentsync.domain.exceptions import ValidationError
from contentsync.domain.value_objects import ContentType


@dataclass(frozen=True)
class Document:
    """Normalized page built from one content record.

    Built fresh for every indexing attempt; never cached.
    """

    url: str
    title: str
    content: str
    fetched_at: datetime
    content_type: ContentType = ContentType.HTML
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.url:
            raise ValidationError("Document url is required")
        if not self.title:
            raise ValidationError("Document title is required")
        if self.content is None:
            raise ValidationError("Document content must not be None")


@dataclass
class DocumentDraft:
    """Mutable document handed to alteration hooks before it is frozen."""

    url: str
    title: str
    content: str
    fetched_at: datetime
    content_type: ContentType = ContentType.HTML
    tags: list[str] = field(default_factory=list)

    def add_tag(self, tag: str) -> None:
        """Add a lower-cased tag unless already present."""
        tag = tag.strip().lower()
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def freeze(self) -> Document:
        """Build the immutable Document, deduplicating tags in order."""
        return Document(
            url=self.url,
            title=self.title,
            content=self.content if self.content is not None else "",
            fetched_at=self.fetched_at,
            content_type=self.content_type,
            tags=tuple(dict.fromkeys(self.tags)),
        )
