"""Runtime client error types."""

from __future__ import annotations


class KibelClientError(Exception):
    """Base class for runtime client errors."""


class InputInvalidError(KibelClientError, ValueError):
    """Raised when a request fails local validation before it is sent."""


class ApiError(KibelClientError):
    """Raised when the server answers with GraphQL errors."""

    def __init__(self, code: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status_code = status_code


class TransportError(KibelClientError):
    """Raised when the HTTP exchange itself fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = ["ApiError", "InputInvalidError", "KibelClientError", "TransportError"]
