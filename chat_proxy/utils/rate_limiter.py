"""
Rate limiter utility for per-client request throttling.
"""
import time
from collections import deque
from typing import Callable, Deque, Dict


class RateLimiter:
    """
    Sliding-window rate limiter keyed by client.

    Allows at most ``max_requests`` hits per ``window_seconds`` for each key,
    counting hits over the trailing window rather than fixed buckets.

    Example:
        limiter = RateLimiter(max_requests=100, window_seconds=900)
        if not limiter.hit(client_ip):
            ...  # reject with 429
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 900.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize rate limiter.

        Args:
            max_requests: Maximum number of requests allowed per window
            window_seconds: Length of the trailing window in seconds
            clock: Monotonic time source (injectable for tests)
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._next_sweep = clock() + window_seconds

    def _prune(self, key: str, now: float) -> Deque[float]:
        hits = self._hits.get(key)
        if hits is None:
            return deque()
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if not hits:
            # Idle clients are forgotten once their window has passed
            del self._hits[key]
        return hits

    def hit(self, key: str) -> bool:
        """
        Record a request for ``key``.

        Returns:
            True if the request is allowed, False if the quota is exhausted.
            Rejected requests are not counted.
        """
        now = self._clock()
        if now >= self._next_sweep:
            self._sweep(now)
            self._next_sweep = now + self.window_seconds
        hits = self._prune(key, now)
        if len(hits) >= self.max_requests:
            return False
        hits.append(now)
        self._hits[key] = hits
        return True

    def remaining(self, key: str) -> int:
        hits = self._prune(key, self._clock())
        return max(self.max_requests - len(hits), 0)

    def retry_after(self, key: str) -> float:
        """Seconds until the oldest hit for ``key`` leaves the window."""
        now = self._clock()
        hits = self._prune(key, now)
        if len(hits) < self.max_requests:
            return 0.0
        return max(hits[0] + self.window_seconds - now, 0.0)

    def reset(self):
        """Reset the rate limiter (forget all clients)."""
        self._hits.clear()

    def _sweep(self, now: float):
        for key in list(self._hits):
            self._prune(key, now)

    def __len__(self) -> int:
        """Number of clients with hits inside their window."""
        self._sweep(self._clock())
        return len(self._hits)
