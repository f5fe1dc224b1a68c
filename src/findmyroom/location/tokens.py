"""
Latest-wins guard for overlapping resolutions.

Address fields can change again while an earlier lookup is still in flight. Every
lookup takes a token from `LatestResolution.issue()`; when it completes, only the
holder of the newest token may apply its result.
"""

from __future__ import annotations

import itertools
import threading


class LatestResolution:
    """Monotonic request tokens; only the newest issued token is current."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._latest = 0

    @property
    def latest(self) -> int:
        with self._lock:
            return self._latest

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest
