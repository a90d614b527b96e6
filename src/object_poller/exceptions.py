"""
Custom exceptions for the object poller.

This module defines the error kinds surfaced by the polling fetcher. Each
error carries a machine-readable code, a context dictionary for diagnostics
and, where one exists, the underlying cause.
"""

from typing import Any


class ObjectPollerError(Exception):
    """Base exception for object poller errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code or "OBJECT_POLLER_ERROR"
        self.context = context or {}


class ConfigurationError(ObjectPollerError):
    """Exception for missing or invalid fetcher configuration."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "CONFIGURATION_ERROR", context)
        self.field = field


class ProbeError(ObjectPollerError):
    """Exception for a failed metadata (HEAD) request."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "PROBE_ERROR", context)
        self.cause = cause


class RetrievalError(ObjectPollerError):
    """Exception for a failed content (GET) request.

    The change token has already advanced when this is raised, so the
    version that failed to transfer is skipped unless the object changes
    again.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "RETRIEVAL_ERROR", context)
        self.cause = cause


class DecodeError(ObjectPollerError):
    """Exception for content that could not be opened as gzip."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "DECODE_ERROR", context)
        self.cause = cause


class FetchCancelledError(ObjectPollerError):
    """Exception raised when a fetch is cancelled before it completes."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "FETCH_CANCELLED", context)
