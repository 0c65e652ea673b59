"""In-memory blocking fixed-window rate limiter.

Notes:
- Per-process only: each process (and each limiter instance) keeps its own
  window, so N processes multiply the effective limit.
- Thread-safe: the decide-and-mutate step runs under a single lock.
- Callers never get "limit exceeded"; they are delayed until the next window.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from crpt_client.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimiterConfig,
    RateLimiterState,
)
from crpt_client.core.config import TimeUnit
from crpt_client.core.errors import RateLimitTimeout

logger = logging.getLogger(__name__)


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Admit at most ``limit`` callers per fixed window, blocking the rest.

    The window starts when the limiter is built and is reset lazily: the
    first caller that arrives at or after ``window_start + window_seconds``
    opens a new window starting at its own arrival time. A caller arriving
    exactly on the boundary therefore starts the new window.

    Blocked callers compute their wait under the lock, sleep with the lock
    released, then run the decision again. Nothing is mutated while a caller
    sleeps, so an interrupted or timed-out wait never consumes a permit.
    Wake-up order among blocked callers is whatever the lock yields; it is
    not first-come-first-served.

    Like any fixed window, up to ``2 * limit`` permits can be granted within
    a span shorter than one window when bursts straddle a boundary.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the limiter with a full window starting now.

        Args:
            limit: Permits granted per window.
            window_seconds: Window length in seconds.
            clock: Time source returning seconds; must not go backwards.
            sleep: Function used to wait; receives seconds.

        Raises:
            InvalidConfiguration: If limit or window_seconds is not positive.
        """
        self._config = RateLimiterConfig(limit=limit, window_seconds=window_seconds)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.RLock()
        self._remaining = limit
        self._window_start = clock()

    @classmethod
    def from_time_unit(
        cls,
        time_unit: TimeUnit | str,
        request_limit: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> InMemoryFixedWindowRateLimiter:
        """Build a limiter granting ``request_limit`` permits per ``time_unit``."""
        config = RateLimiterConfig.from_time_unit(time_unit, request_limit)
        return cls(
            limit=config.limit,
            window_seconds=config.window_seconds,
            clock=clock,
            sleep=sleep,
        )

    @property
    def config(self) -> RateLimiterConfig:
        return self._config

    def state(self) -> RateLimiterState:
        """Return a consistent snapshot of the current window."""
        with self._lock:
            return RateLimiterState(remaining=self._remaining, window_start=self._window_start)

    def _try_consume_locked(self, now: float) -> float | None:
        """Grant a permit if possible; otherwise return seconds until the boundary.

        Must be called with ``self._lock`` held.
        """
        window_end = self._window_start + self._config.window_seconds

        if now >= window_end:
            self._window_start = now
            self._remaining = self._config.limit - 1
            logger.debug(
                "rate_limiter.window_reset",
                extra={"limit": self._config.limit, "remaining": self._remaining},
            )
            return None

        if self._remaining > 0:
            self._remaining -= 1
            return None

        return window_end - now

    def acquire(self, *, timeout: float | None = None) -> None:
        """Block until a permit is available, then consume it.

        Args:
            timeout: Maximum seconds to wait. ``None`` waits as long as needed;
                ``0`` never waits.

        Raises:
            RateLimitTimeout: If the next permit cannot be granted before the
                deadline. No permit is consumed.
        """
        deadline = None if timeout is None else self._clock() + max(0.0, timeout)

        while True:
            with self._lock:
                now = self._clock()
                wait_seconds = self._try_consume_locked(now)

            if wait_seconds is None:
                return

            if deadline is not None and now + wait_seconds > deadline:
                logger.info(
                    "rate_limiter.timeout",
                    extra={"limit": self._config.limit, "retry_after_s": round(wait_seconds, 3)},
                )
                raise RateLimitTimeout(
                    code="rate_limit_timeout",
                    message="No permit available before the timeout expired",
                    details={
                        "limit": self._config.limit,
                        "window_seconds": self._config.window_seconds,
                        "retry_after": wait_seconds,
                    },
                )

            logger.debug(
                "rate_limiter.waiting",
                extra={"limit": self._config.limit, "wait_s": round(wait_seconds, 3)},
            )
            self._sleep(wait_seconds)
