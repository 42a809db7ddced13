"""Domain exceptions."""


class ContentSyncError(Exception):
    """Base exception for contentsync."""

    pass


class ConfigurationError(ContentSyncError):
    """Credential or target site is missing; no request was attempted."""

    pass


class DeliveryError(ContentSyncError):
    """Transport failure or non-2xx response from the search API."""

    pass


class NotFound(ContentSyncError):
    """Requested resource was not found."""

    pass


class ValidationError(ContentSyncError):
    """Validation failed for input data."""

    pass


class AuthorizationError(ContentSyncError):
    """Credential exchange did not complete."""

    reason = "authorization_failed"


class InvalidState(AuthorizationError):
    """Returned state is missing or does not match the session (CSRF or expired)."""

    reason = "invalid_state"


class AuthorizationDenied(AuthorizationError):
    """Authorization server reported an error."""

    reason = "authorization_denied"


class MissingCode(AuthorizationError):
    """Callback carried no authorization code."""

    reason = "missing_code"


class ExchangeFailed(AuthorizationError):
    """Code-for-credential exchange failed."""

    reason = "exchange_failed"
