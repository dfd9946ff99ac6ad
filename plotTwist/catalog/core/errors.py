"""catalog.core.errors
Failures raised by the TMDb client. Views map them to user-facing text via
`catalog.service.friendly_error`.
"""


class TMDBError(Exception):
    """Any failed TMDb request (transport error or non-2xx response)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class MissingApiKeyError(TMDBError):
    """No API key configured; raised before any network call."""


class InvalidApiKeyError(TMDBError):
    """TMDb answered 401."""


class NotFoundError(TMDBError):
    """TMDb answered 404."""
