"""Error taxonomy for place discovery."""
from __future__ import annotations

from typing import Optional


class LocationSearchError(RuntimeError):
    pass


class InvalidRequestError(LocationSearchError, ValueError):
    pass


class SearchCancelledError(LocationSearchError):
    pass


class ProviderError(LocationSearchError):
    pass


class ProviderTransportError(ProviderError):
    """Upstream unreachable, timed out, or answered with an unusable HTTP response."""


class ProviderStatusError(ProviderError):
    """Upstream answered with a non-success status other than ZERO_RESULTS."""

    def __init__(self, status: str, message: Optional[str] = None) -> None:
        self.status = status
        self.message = message
        super().__init__(f"Places API error: {status} - {message or 'Unknown error'}")
