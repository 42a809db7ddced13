"""Content record as seen by the indexing pipeline."""

from dataclasses import dataclass, field

TAXONOMY_TARGET = "taxonomy_term"


@dataclass(frozen=True)
class Reference:
    """Entity referenced from a record field."""

    field_name: str
    target_type: str
    name: str


@dataclass(frozen=True)
class ContentRecord:
    """Host application content record (read-only snapshot)."""

    id: str
    bundle: str
    title: str
    path: str
    published: bool = True
    references: tuple[Reference, ...] = field(default_factory=tuple)

    def taxonomy_names(self) -> list[str]:
        """Names of every referenced taxonomy term, in field order."""
        return [r.name for r in self.references if r.target_type == TAXONOMY_TARGET]
