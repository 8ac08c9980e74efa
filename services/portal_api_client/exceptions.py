"""Custom exception classes for the Portal API Client."""

from __future__ import annotations

from typing import Any


class PortalClientError(Exception):
    """Base exception for Portal API Client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiRequestError(PortalClientError):
    """Raised when a GET request comes back with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: str = "",
        payload: Any = None,
    ) -> None:
        super().__init__(message, status_code)
        self.status_text = status_text
        self.payload = payload


class UserServiceError(PortalClientError):
    """Raised when a user administration call fails."""
