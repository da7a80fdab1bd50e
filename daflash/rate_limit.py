"""Fixed-window request counting for the login endpoint."""

from __future__ import annotations

import logging
import math
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


class CounterStore(ABC):
    @abstractmethod
    def increment(self, key: str) -> int:
        """Bump ``key`` and return the count including this call."""

    @abstractmethod
    def reset(self) -> None: ...


class InMemoryCounterStore(CounterStore):
    """Process-local store for keys of the form ``identifier:window``.

    Moving to a newer window drops the counts of older ones.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._window = -1
        self._lock = threading.Lock()

    def increment(self, key: str) -> int:
        window = _window_of(key)
        with self._lock:
            if window > self._window:
                self._counts = {k: v for k, v in self._counts.items() if _window_of(k) >= window}
                self._window = window
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count
            return count

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._window = -1


def _window_of(key: str) -> int:
    suffix = key.rpartition(":")[2]
    return int(suffix) if suffix.isdigit() else -1


@dataclass(frozen=True)
class RateLimitResult:
    success: bool
    remaining: int
    reset_in: int  # seconds until the current window closes


class RateLimiter:
    def __init__(
        self,
        store: CounterStore,
        max_requests: int = 10,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_requests < 1 or window_seconds < 1:
            raise ValueError("Rate limit needs at least one request per window of at least one second")
        self.store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock

    def check(self, identifier: str) -> RateLimitResult:
        now = self.clock()
        window = int(now // self.window_seconds)
        count = self.store.increment(f"{identifier}:{window}")
        reset_in = max(math.ceil((window + 1) * self.window_seconds - now), 1)
        if count > self.max_requests:
            logger.warning("Rate limit exceeded for %s (%d/%d)", identifier, count, self.max_requests)
            return RateLimitResult(success=False, remaining=0, reset_in=reset_in)
        return RateLimitResult(success=True, remaining=self.max_requests - count, reset_in=reset_in)


def get_client_ip(headers: Mapping[str, str], peer: str | None = None) -> str:
    """Best guess at the caller's address behind the hosting proxy."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    for header in ("x-real-ip", "x-nf-client-connection-ip"):
        value = headers.get(header)
        if value:
            return value.strip()
    return peer or UNKNOWN_CLIENT
