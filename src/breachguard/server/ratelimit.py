"""
Fixed-window request rate limiting keyed by client address.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float  # seconds until the current window ends

    def headers(self) -> dict[str, str]:
        """Standard ``RateLimit-*`` response headers."""
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(math.ceil(self.reset_after)),
        }
        if not self.allowed:
            headers["Retry-After"] = str(math.ceil(self.reset_after))
        return headers


class FixedWindowRateLimiter:
    """Allow at most ``max_requests`` per client in each ``window`` seconds.

    Counters live in memory and are shared by all request threads.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._lock = threading.Lock()
        # client key -> (window start, hits)
        self._hits: dict[str, tuple[float, int]] = {}
        self._last_prune = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """Record a request for ``key`` and decide whether to admit it."""
        now = self._clock()

        with self._lock:
            if now - self._last_prune >= self.window:
                self._prune(now)

            start, count = self._hits.get(key, (now, 0))
            if now - start >= self.window:
                start, count = now, 0

            count += 1
            self._hits[key] = (start, count)

        reset_after = max(0.0, start + self.window - now)
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=reset_after,
        )

    def __len__(self) -> int:
        """Number of clients currently tracked."""
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        """Forget every counter."""
        with self._lock:
            self._hits.clear()

    def _prune(self, now: float) -> None:
        self._last_prune = now
        expired = [k for k, (start, _) in self._hits.items() if now - start >= self.window]
        for key in expired:
            del self._hits[key]
