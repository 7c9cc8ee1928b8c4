"""
Rate Limiter

Sliding-window request counter keyed by client address, built on the
``limits`` moving-window strategy.
"""

import logging
import threading
import time
from typing import Dict, Optional

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import MovingWindowRateLimiter

from yt2mp3.core.exceptions import RateLimitedError

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    Per-key sliding-window rate limiter.

    A request is denied when its key already has ``limit`` accepted requests
    in the last ``window`` seconds. Denied requests are not recorded.

    Usage:
        limiter = SlidingWindowRateLimiter(limit=10, window=60)
        limiter.check("203.0.113.7")  # raises RateLimitedError when exhausted
    """

    def __init__(
        self,
        limit: int = 10,
        window: int = 60,
        sweep_threshold: Optional[int] = 10000,
        storage: Optional[Storage] = None,
    ):
        self.limit = limit
        self.window = window
        self.sweep_threshold = sweep_threshold
        self.storage = storage if storage is not None else MemoryStorage()
        self._item = RateLimitItemPerSecond(limit, window)
        self._strategy = MovingWindowRateLimiter(self.storage)
        # key -> time of its newest accepted request
        self._last_hit: Dict[str, float] = {}
        self._lock = threading.Lock()

    @property
    def key_count(self) -> int:
        """Number of client keys currently tracked."""
        with self._lock:
            return len(self._last_hit)

    def check(self, key: str) -> None:
        """
        Record a request for key, or raise if its budget is spent.

        Raises:
            RateLimitedError: key already has ``limit`` requests in the window
        """
        with self._lock:
            if not self._strategy.hit(self._item, key):
                reset_time, _ = self._strategy.get_window_stats(self._item, key)
                logger.warning(f"Rate limit exceeded for {key}")
                raise RateLimitedError(key, retry_after=max(reset_time - time.time(), 0.0))

            now = time.time()
            self._last_hit[key] = now

            if self.sweep_threshold and len(self._last_hit) > self.sweep_threshold:
                self._sweep_locked(now)

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop keys with no requests left in the window. Returns count removed."""
        if now is None:
            now = time.time()
        with self._lock:
            return self._sweep_locked(now)

    def _sweep_locked(self, now: float) -> int:
        cutoff = now - self.window
        stale = [k for k, last in self._last_hit.items() if last < cutoff]
        for k in stale:
            del self._last_hit[k]
            self._strategy.clear(self._item, k)
        if stale:
            logger.debug(f"Rate limiter swept {len(stale)} stale keys")
        return len(stale)

    def reset(self) -> None:
        """Forget all keys."""
        with self._lock:
            for k in self._last_hit:
                self._strategy.clear(self._item, k)
            self._last_hit.clear()
