"""Single-slot, time-limited cache for the station list."""

import logging
import threading
import time
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StationCache(Generic[T]):
    """
    Holds one value and the time it was stored.

    The value is fresh while ``clock() - timestamp < ttl``. There is no
    per-key storage and no eviction besides expiry.
    """

    def __init__(self, ttl: float = 300.0, clock: Callable[[], float] = time.time):
        """
        Initialize the cache.

        Args:
            ttl: Validity window in seconds.
            clock: Returns the current time in seconds; injectable for tests.
        """
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._data: Optional[T] = None
        self._timestamp = 0.0

    def get(self) -> Optional[T]:
        """Return the cached value, or None if empty or expired."""
        with self._lock:
            if self._data is None:
                return None
            age = self._clock() - self._timestamp
            if age >= self.ttl:
                logger.debug(f"Station cache expired ({age:.1f}s old)")
                return None
            return self._data

    def put(self, data: T, timestamp: Optional[float] = None) -> None:
        """
        Replace the cached value and its timestamp together.

        Args:
            data: New value.
            timestamp: Time to record; defaults to clock().
        """
        if timestamp is None:
            timestamp = self._clock()
        with self._lock:
            self._data = data
            self._timestamp = timestamp

    def age(self) -> Optional[float]:
        """Seconds since the value was stored, None if nothing is cached."""
        with self._lock:
            if self._data is None:
                return None
            return self._clock() - self._timestamp
