"""
Simple in-process rate limiting utilities.

Used by the geocoding client to stay within the provider's fair-use policy
(Nominatim asks for at most one request per second per application).
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class TokenBucketRateLimiter:
    """Token bucket limiter for N events per minute (best-effort, thread-safe)."""

    max_per_minute: float
    burst: float | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        rpm = float(self.max_per_minute)
        if rpm <= 0:
            raise ValueError("max_per_minute must be > 0")
        self._capacity = float(self.burst) if self.burst is not None else 1.0
        self._tokens = self._capacity
        self._refill_per_sec = rpm / 60.0
        self._last = time.monotonic()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last
        if elapsed <= 0:
            return
        self._tokens = min(self._capacity, self._tokens + elapsed * self._refill_per_sec)
        self._last = now

    def acquire(self, tokens: float = 1.0) -> None:
        need = float(tokens)
        if need <= 0:
            return
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= need:
                    self._tokens -= need
                    return
                missing = need - self._tokens
            sleep_s = max(0.05, missing / max(1e-6, self._refill_per_sec))
            time.sleep(min(1.0, sleep_s))
