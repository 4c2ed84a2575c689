"""Link registry error taxonomy.

Each error carries the HTTP status the API layer answers with, so a single
application-level handler can render any registry failure as
``{"error": message}`` without a lookup table.
"""

from fastapi import status


class LinkRegistryError(Exception):
    """Base class for all link registry errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class InvalidTarget(LinkRegistryError):
    """Target URL is missing or not an absolute http/https URL."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid or missing targetUrl. Must be a valid http/https URL."


class InvalidCode(LinkRegistryError):
    """Custom code does not match [A-Za-z0-9]{6,8}."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Code must match [A-Za-z0-9]{6,8}."


class CodeConflict(LinkRegistryError):
    """Custom code is already taken."""

    status_code = status.HTTP_409_CONFLICT
    message = "Code already exists."


class LinkNotFound(LinkRegistryError):
    """No link exists for the requested code."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Link not found"


class StoreUnavailable(LinkRegistryError):
    """The underlying database failed.

    The message stays opaque; the underlying exception is chained as
    ``__cause__`` and logged by the registry.
    """
