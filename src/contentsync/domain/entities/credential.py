"""Credential and target site entities."""

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class Target:
    """Site (index) the credential may deliver to."""

    id: str
    name: str = ""
    base_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Target":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            base_url=data.get("baseUrl") or data.get("base_url") or "",
        )


@dataclass(frozen=True)
class Credential:
    """Bearer token plus the active target identity."""

    bearer_token: str
    site_id: str = ""
    org_id: str = ""
    org_name: str = ""
    site_name: str = ""
    base_url: str = ""
    available_sites: tuple[Target, ...] = field(default_factory=tuple)

    @property
    def has_target(self) -> bool:
        return bool(self.bearer_token and self.site_id)

    def with_target(self, target: Target) -> "Credential":
        """Return a copy with target as the active site."""
        return replace(
            self,
            site_id=target.id,
            site_name=target.name,
            base_url=target.base_url,
        )

    def find_site(self, site_id: str) -> Target | None:
        for site in self.available_sites:
            if site.id == site_id:
                return site
        return None
