"""Build normalized documents from content records."""

import re
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from contentsync.application.dto.indexing_config import IndexingConfig
from contentsync.domain.entities import ContentRecord, Document, DocumentDraft

AlterHook = Callable[[DocumentDraft, ContentRecord], None]

# Non-greedy and anchored on the closing tag; unclosed blocks are left as-is.
_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_NAV_RE = re.compile(r"<nav\b[^>]*>.*?</nav\s*>", re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

_STRIP_PATTERNS = (_SCRIPT_RE, _STYLE_RE, _COMMENT_RE, _NAV_RE)


def sanitize_html(html: str | None) -> str:
    """Remove scripts, styles, comments and nav chrome; collapse whitespace.

    Forms are kept on purpose: their labels are searchable content.
    """
    if not html:
        return ""
    for pattern in _STRIP_PATTERNS:
        html = pattern.sub("", html)
    return _WHITESPACE_RE.sub(" ", html).strip()


def should_index(record: ContentRecord, config: IndexingConfig) -> bool:
    """Check whether a record belongs in the index under config."""
    if not config.enabled:
        return False
    if not config.content_types or record.bundle not in config.content_types:
        return False
    if config.exclude_unpublished and not record.published:
        return False
    return True


def collect_tags(record: ContentRecord) -> list[str]:
    """Lower-cased taxonomy names plus the type:<bundle> tag, deduplicated."""
    tags = [name.strip().lower() for name in record.taxonomy_names() if name.strip()]
    tags.append(f"type:{record.bundle}")
    return list(dict.fromkeys(tags))


class DocumentBuilder:
    """Turns a record and its rendered markup into a Document.

    Alteration hooks run once each, in the order given, after sanitization.
    A hook sees the changes made by the hooks before it.
    """

    def __init__(
        self,
        alter_hooks: Sequence[AlterHook] = (),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._alter_hooks = tuple(alter_hooks)
        self._clock = clock or (lambda: datetime.now(UTC))

    def build(self, record: ContentRecord, rendered_content: str | None) -> Document:
        """Build a fresh Document. No I/O."""
        draft = DocumentDraft(
            url=record.path,
            title=record.title,
            content=sanitize_html(rendered_content),
            fetched_at=self._clock(),
            tags=collect_tags(record),
        )
        for hook in self._alter_hooks:
            hook(draft, record)
        return draft.freeze()
