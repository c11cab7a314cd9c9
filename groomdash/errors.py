"""
Exception hierarchy for configuration, ingestion, and record validation.
"""

from __future__ import annotations

from typing import Optional


class DashboardError(Exception):
    """Base exception for dashboard failures."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigError(DashboardError):
    """Raised when a configuration value is missing or invalid."""


class FetchError(DashboardError):
    """Raised when an ingestion cycle cannot obtain a usable payload."""


class TransportError(FetchError):
    """Raised when the webhook cannot be reached or the request times out."""


class ResponseStatusError(FetchError):
    """Raised when the webhook answers with a non-success status code."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        *,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.status_code = status_code


class PayloadError(FetchError):
    """Raised when the response body is not valid JSON or has the wrong shape."""


class RecordError(DashboardError):
    """Raised when a single incoming record cannot be normalized."""
