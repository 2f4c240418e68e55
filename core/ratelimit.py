from __future__ import annotations
"""In-memory token bucket gating outbound API calls.

Usage:
    limiter = configure(capacity=3, refill_interval=1.0)  # 3 tokens max, 1 token / sec
    if limiter.try_acquire():
        ...

Refill is counted in whole intervals only: the fractional part of the elapsed
time is dropped, never carried over to the next call.

Thread-safety: every try_acquire() runs as one critical section under a
threading.Lock, so a limiter can be shared by all threads using one client.
"""
import logging
import math
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Union

from core.errors import ConfigurationError

logger = logging.getLogger("RateLimiter")

NS_PER_SECOND = 1_000_000_000

Clock = Callable[[], int]

@dataclass
class Bucket:
    capacity: int
    tokens: int
    interval_ns: int  # time needed to generate one token
    last: int  # clock reading (ns) of the last refill

def _interval_ns(refill_interval: float | timedelta) -> int:
    if isinstance(refill_interval, timedelta):
        ns = refill_interval // timedelta(microseconds=1) * 1000
    elif isinstance(refill_interval, int) and not isinstance(refill_interval, bool):
        ns = refill_interval * NS_PER_SECOND
    elif isinstance(refill_interval, float):
        if not math.isfinite(refill_interval):
            raise ConfigurationError(f"refill_interval must be finite, got {refill_interval!r}")
        ns = round(refill_interval * NS_PER_SECOND)
    else:
        raise ConfigurationError(f"refill_interval must be seconds or a timedelta, got {refill_interval!r}")
    if ns <= 0:
        raise ConfigurationError(f"refill_interval must be > 0, got {refill_interval!r}", refill_interval=str(refill_interval))
    return ns

class RateLimiter:
    def __init__(self, capacity: int, refill_interval: float | timedelta, clock: Clock = time.monotonic_ns):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ConfigurationError(f"capacity must be an integer, got {capacity!r}")
        if capacity < 1:
            raise ConfigurationError(f"capacity must be >= 1, got {capacity}", capacity=capacity)
        self._clock = clock
        self._lock = threading.Lock()
        self.bucket = Bucket(capacity=capacity, tokens=capacity, interval_ns=_interval_ns(refill_interval), last=clock())

    @property
    def capacity(self) -> int:
        return self.bucket.capacity

    @property
    def refill_interval(self) -> float:
        return self.bucket.interval_ns / NS_PER_SECOND

    @property
    def available(self) -> int:
        """Tokens left as of the last refill (does not apply elapsed time)."""
        with self._lock:
            return self.bucket.tokens

    def _refill(self) -> None:
        now = self._clock()
        # horloge en arrière: pas de temps écoulé, on garde last
        elapsed = max(0, now - self.bucket.last)
        self.bucket.last = max(self.bucket.last, now)
        generated = elapsed // self.bucket.interval_ns
        if generated:
            self.bucket.tokens = min(self.bucket.capacity, self.bucket.tokens + generated)

    def try_acquire(self) -> bool:
        with self._lock:
            self._refill()
            if self.bucket.tokens > 0:
                self.bucket.tokens -= 1
                return True
            return False

    def __repr__(self) -> str:
        return f"RateLimiter(capacity={self.capacity}, refill_interval={self.refill_interval}s, tokens={self.bucket.tokens})"

class NoLimit:
    """Admission policy of a client running without a limiter."""

    def try_acquire(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "NoLimit()"

Admission = Union[NoLimit, RateLimiter]

def configure(capacity: int, refill_interval: float | timedelta, clock: Clock = time.monotonic_ns) -> RateLimiter:
    """Build a validated limiter; raises ConfigurationError on non-positive values."""
    limiter = RateLimiter(capacity, refill_interval, clock=clock)
    logger.debug(f"Rate limiter configured: {limiter!r}")
    return limiter

__all__ = ["Admission", "Bucket", "NoLimit", "RateLimiter", "configure"]
