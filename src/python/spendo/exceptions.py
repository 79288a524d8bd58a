"""Custom exception types for Spendo."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when an entry payload is rejected, locally or by the server."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(Exception):
    """Raised when a requested record does not exist."""


class NetworkError(Exception):
    """Raised when the ledger service cannot be reached or answers with a failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
