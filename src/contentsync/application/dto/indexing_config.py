"""Indexing configuration DTO."""

from dataclasses import dataclass, field

from contentsync.config import Settings


@dataclass(frozen=True)
class IndexingConfig:
    """Indexing policy passed explicitly to builders and use cases."""

    enabled: bool = False
    content_types: frozenset[str] = field(default_factory=frozenset)
    exclude_unpublished: bool = True
    batch_size: int = 50
    view_mode: str = "full"
    realtime: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "IndexingConfig":
        return cls(
            enabled=settings.indexing_enabled,
            content_types=frozenset(settings.indexing_content_types),
            exclude_unpublished=settings.indexing_exclude_unpublished,
            batch_size=settings.indexing_batch_size,
            view_mode=settings.indexing_view_mode or "full",
            realtime=settings.indexing_realtime,
        )
