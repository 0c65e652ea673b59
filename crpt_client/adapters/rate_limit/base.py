"""Rate limiter interfaces and value types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from crpt_client.core.config import TimeUnit
from crpt_client.core.errors import InvalidConfiguration


@dataclass(frozen=True)
class RateLimiterConfig:
    """Immutable limiter configuration.

    Attributes:
        limit: Permits granted per window.
        window_seconds: Window length in seconds.

    Raises:
        InvalidConfiguration: If limit or window_seconds is not positive.
    """

    limit: int
    window_seconds: float

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit <= 0:
            raise InvalidConfiguration(
                code="rate_limit_invalid_limit",
                message=f"limit must be a positive integer, got {self.limit}",
                details={"limit": self.limit},
            )
        if self.window_seconds <= 0:
            raise InvalidConfiguration(
                code="rate_limit_invalid_window",
                message=f"window must be positive, got {self.window_seconds}s",
                details={"window_seconds": self.window_seconds},
            )

    @classmethod
    def from_time_unit(cls, time_unit: TimeUnit | str, request_limit: int) -> RateLimiterConfig:
        """Build a config whose window is exactly one ``time_unit`` long.

        Raises:
            InvalidConfiguration: If the time unit is unknown or the limit invalid.
        """
        try:
            unit = TimeUnit(time_unit)
        except ValueError as exc:
            raise InvalidConfiguration(
                code="rate_limit_invalid_time_unit",
                message=f"Unknown time unit: {time_unit!r}",
                details={"context": {"time_unit": str(time_unit)}},
            ) from exc
        return cls(limit=request_limit, window_seconds=unit.seconds)


@dataclass(frozen=True)
class RateLimiterState:
    """Point-in-time snapshot of a limiter's window.

    Attributes:
        remaining: Permits left in the current window, in ``[0, limit]``.
        window_start: Clock reading at which the current window began.
    """

    remaining: int
    window_start: float


class AbstractRateLimiter(ABC):
    """Interface for blocking rate limiters."""

    @abstractmethod
    def acquire(self, *, timeout: float | None = None) -> None:
        """Block until a permit is available, then consume it.

        Args:
            timeout: Maximum seconds to wait. ``None`` waits as long as needed;
                ``0`` never waits.

        Raises:
            RateLimitTimeout: If no permit could be granted within ``timeout``.
                No permit is consumed in that case.
        """
        raise NotImplementedError
