"""Application error taxonomy mapped to HTTP responses."""


class InnerGardenError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(InnerGardenError):
    """Malformed or missing request fields."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(InnerGardenError):
    """Missing, invalid or expired admin credentials."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(InnerGardenError):
    """Referenced artwork does not exist."""

    status_code = 404
    default_message = "Artwork not found"


class StorageError(InnerGardenError):
    """Persisted artwork document could not be read or written."""

    status_code = 500
    default_message = "Storage unavailable"


class UpstreamError(InnerGardenError):
    """An outbound provider (mail, payments, webhook, vision) failed."""

    status_code = 502
    default_message = "Upstream service failed"


class AdminNotConfiguredError(InnerGardenError):
    """Admin login is disabled because no credentials are configured."""

    status_code = 503
    default_message = "Admin access is not configured"


class IntegrationDisabledError(InnerGardenError):
    """An optional integration was requested but is not configured."""

    status_code = 503
    default_message = "Service is not configured"
