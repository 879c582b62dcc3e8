"""
Sliding-window request and token budget for LLM calls.

The limiter keeps a timestamp per request and an estimated token count per
request inside the last ``window_seconds``. Before a request it waits until
the oldest entry has left the window whenever the request count or the
token budget would be exceeded.
"""

from __future__ import annotations

from collections import deque
import time
from typing import Callable


class TokenRateLimiter:
    """Blocking sliding-window limiter.

    Args:
        max_requests: Requests allowed per window
        max_tokens: Estimated tokens allowed per window
        window_seconds: Window length in seconds
        clock: Monotonic time source
        sleep: Sleep function
        margin_seconds: Extra wait added after the oldest entry expires
    """

    def __init__(
        self,
        max_requests: int = 200,
        max_tokens: int = 150000,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        margin_seconds: float = 1.0,
    ):
        if max_requests <= 0 or max_tokens <= 0 or window_seconds <= 0:
            raise ValueError("Rate limits must be positive")
        self.max_requests = max_requests
        self.max_tokens = max_tokens
        self.window_seconds = window_seconds
        self.margin_seconds = margin_seconds
        self._clock = clock
        self._sleep = sleep
        self._usage: deque[tuple[float, int]] = deque()

    @property
    def tokens_in_window(self) -> int:
        self._evict(self._clock())
        return sum(tokens for _, tokens in self._usage)

    @property
    def requests_in_window(self) -> int:
        self._evict(self._clock())
        return len(self._usage)

    def wait_if_needed(self, estimated_tokens: int = 10000) -> float:
        """Block until a request of ``estimated_tokens`` fits, then record it.

        A single request larger than the whole token budget is let through
        once the window is empty.

        Returns:
            Seconds spent sleeping
        """
        waited = 0.0
        while True:
            now = self._clock()
            self._evict(now)
            if not self._usage:
                break
            over_requests = len(self._usage) >= self.max_requests
            over_tokens = self.tokens_in_window + estimated_tokens > self.max_tokens
            if not over_requests and not over_tokens:
                break
            oldest = self._usage[0][0]
            delay = self.window_seconds - (now - oldest) + self.margin_seconds
            if delay > 0:
                self._sleep(delay)
                waited += delay

        self._usage.append((self._clock(), estimated_tokens))
        return waited

    def _evict(self, now: float) -> None:
        while self._usage and now - self._usage[0][0] >= self.window_seconds:
            self._usage.popleft()
