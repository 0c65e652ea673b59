"""Rate limiting adapters.

The document client depends only on ``AbstractRateLimiter`` so the in-memory
limiter can later be replaced by a shared store without touching callers.
"""

from crpt_client.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimiterConfig,
    RateLimiterState,
)
from crpt_client.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RateLimiterConfig",
    "RateLimiterState",
]
