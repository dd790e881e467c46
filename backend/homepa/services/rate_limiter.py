from __future__ import annotations

import math
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_time: float  # epoch seconds at which the current window ends

    def retry_after(self, now: float | None = None) -> int:
        """Whole seconds until the window resets, never less than one."""
        now = time.time() if now is None else now
        return max(1, math.ceil(self.reset_time - now))


@dataclass(frozen=True)
class RateLimitPolicy:
    max_requests: int
    window_seconds: int


class RateLimiter(ABC):
    """Decides whether a client key may make another request."""

    @abstractmethod
    def check(self, key: str, max_requests: int, window_seconds: float) -> RateLimitDecision:
        ...

    def now(self) -> float:
        return time.time()

    def sweep(self) -> int:
        return 0


class FixedWindowRateLimiter(RateLimiter):
    """In-memory fixed-window counter per client key.

    State is per-process: with several workers each one counts on its own,
    so the effective limit is multiplied by the worker count. Swap in a shared
    implementation of RateLimiter for multi-instance deployments.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[str, Dict[str, float]] = {}

    def _purge_expired(self, now: float) -> int:
        expired = [key for key, window in self._windows.items() if window["reset_time"] < now]
        for key in expired:
            self._windows.pop(key, None)
        return len(expired)

    def check(self, key: str, max_requests: int, window_seconds: float) -> RateLimitDecision:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)

            window = self._windows.get(key)
            if window is None or window["reset_time"] < now:
                window = {"count": 0, "reset_time": now + window_seconds}
                self._windows[key] = window

            window["count"] += 1
            if window["count"] > max_requests:
                return RateLimitDecision(allowed=False, remaining=0, reset_time=window["reset_time"])

            return RateLimitDecision(
                allowed=True,
                remaining=max_requests - int(window["count"]),
                reset_time=window["reset_time"],
            )

    def now(self) -> float:
        return self._clock()

    def sweep(self) -> int:
        with self._lock:
            return self._purge_expired(self._clock())

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


rate_limiter = FixedWindowRateLimiter()
