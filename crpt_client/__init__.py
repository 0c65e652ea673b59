"""Rate-limited client for submitting documents to the CRPT document API."""

from crpt_client.adapters.rate_limit import (
    AbstractRateLimiter,
    InMemoryFixedWindowRateLimiter,
    RateLimiterConfig,
    RateLimiterState,
)
from crpt_client.adapters.transport import AbstractTransport, HttpxTransport
from crpt_client.core.config import TimeUnit
from crpt_client.core.errors import (
    AppError,
    InvalidConfiguration,
    MissingRequiredField,
    RateLimitTimeout,
    TransportError,
    ValidationAppError,
)
from crpt_client.schemas.document import Document, Product
from crpt_client.services.document_client import DocumentClient, create_document_client

__all__ = [
    "AbstractRateLimiter",
    "AbstractTransport",
    "AppError",
    "Document",
    "DocumentClient",
    "HttpxTransport",
    "InMemoryFixedWindowRateLimiter",
    "InvalidConfiguration",
    "MissingRequiredField",
    "Product",
    "RateLimitTimeout",
    "RateLimiterConfig",
    "RateLimiterState",
    "TimeUnit",
    "TransportError",
    "ValidationAppError",
    "create_document_client",
]
