"""Client-level exception types.

This module defines the errors raised across services/adapters so callers
can tell configuration, validation, rate limiting and transport failures
apart by type and by a stable ``code``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for logs and callers.

    Fields are optional; each error fills in what it knows.
    """

    field: str
    product_index: int
    doc_id: str
    limit: int
    window_seconds: float
    retry_after: float
    http_status: int
    url: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for client failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class InvalidConfiguration(ValidationAppError):
    """Raised when a rate limiter is built with a non-positive limit or window."""


class MissingRequiredField(ValidationAppError):
    """Raised when a document lacks a field the remote service requires."""


class RateLimitTimeout(AppError):
    """Raised when a bounded acquire gives up. No permit is consumed."""


class TransportError(AppError):
    """Raised when the HTTP transport fails (connection, timeout, non-2xx)."""
