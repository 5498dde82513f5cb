"""Custom exceptions for lookup and storage errors."""


class LookupFailure(Exception):
    """Base exception for search, quote and storage failures."""


class TransportError(LookupFailure):
    """Raised when a request fails on the network or returns a non-2xx status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class InvalidResponseError(LookupFailure):
    """Raised when a response body cannot be decoded or has an unexpected shape."""


class TickerNotFoundError(LookupFailure):
    """Raised when a well-formed quote response does not contain the ticker."""


class StorageError(LookupFailure):
    """Raised when local storage cannot be read or written."""
