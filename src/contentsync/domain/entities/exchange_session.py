"""Exchange session - one authorization round trip."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ExchangeSession:
    """State token issued by initiate() and consumed by complete()."""

    state: str
    created_at: datetime
