"""Credential exchange states."""

from enum import StrEnum


class ExchangeState(StrEnum):
    """States of one authorization round trip."""

    UNAUTHENTICATED = "unauthenticated"
    AWAITING_CALLBACK = "awaiting_callback"
    CONNECTED = "connected"
    FAILED = "failed"
