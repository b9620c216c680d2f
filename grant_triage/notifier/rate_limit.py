"""Per-key request limiter with expiring windows.

Each RateLimiter owns its own counter store, so every deployment (or test)
gets an independent limiter instead of sharing process-wide state.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """Allow at most ``max_requests`` per key within ``window_seconds``.

    The window for a key starts at its first request and expires
    ``window_seconds`` later; expired keys are purged lazily.
    """

    def __init__(
        self,
        max_requests: int = 3,
        window_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def is_limited(self, key: str) -> bool:
        """Record a request for ``key`` and report whether it is over the limit."""
        now = self._clock()
        self._purge(now)

        window = self._windows.get(key)
        if window is None:
            self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
            return False
        if window.count >= self.max_requests:
            return True
        window.count += 1
        return False

    def remaining(self, key: str) -> int:
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now > window.reset_at:
            return self.max_requests
        return max(0, self.max_requests - window.count)

    def _purge(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if now > w.reset_at]
        for key in expired:
            del self._windows[key]

    def __len__(self) -> int:
        return len(self._windows)
