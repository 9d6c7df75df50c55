"""CRM panel exceptions.

Raised by the service layer and the list controller. List fetch failures are
absorbed by the query cache into ``status=error`` entries; mutation failures
propagate to the caller so the page can show a failure notification.
"""

from __future__ import annotations


class CrmError(Exception):
    """Base class for every error raised by the panel."""


class NetworkError(CrmError):
    """The request could not reach the backend."""


class ServerError(CrmError):
    """The backend answered with a failure status or a ``success=false`` body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class ValidationError(CrmError):
    """A malformed filter, page or input value was rejected before any request."""
