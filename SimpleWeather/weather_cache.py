"""Bounded LRU cache of weather records with per-entry expiration."""
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, List, Optional

from weather_data import WeatherData


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class CacheEntry:
    data: WeatherData
    fetched_at: float  # monotonic milliseconds


class WeatherCache:
    """
    Per-city weather cache.

    Successful reads and all writes move an entry to the most-recently-used
    position. When a write pushes the size over ``max_cities``, the
    least-recently-used entry is evicted. Expired entries are invisible to
    ``get`` but are only removed by eviction. Safe to share between the
    caller's thread and the background poller.
    """

    def __init__(
        self,
        max_cities: int = 10,
        expiration_ms: float = 600_000,
        time_func: Callable[[], float] = _monotonic_ms
    ):
        """
        Args:
            max_cities: Maximum number of cities kept
            expiration_ms: How long an entry stays fresh, in milliseconds
            time_func: Clock returning monotonic milliseconds
        """
        self.max_cities = max_cities
        self.expiration_ms = expiration_ms
        self._time_func = time_func
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, city: str) -> Optional[WeatherData]:
        """Return the cached record for a city, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(city)
            if entry is None:
                return None
            age = self._time_func() - entry.fetched_at
            if age > self.expiration_ms:
                logging.warning(f"Cache entry for city {city} has expired (age: {age:.0f}ms)")
                return None
            self._entries.move_to_end(city)
            logging.debug(f"Cache hit for city {city} (age: {age:.0f}ms)")
            return entry.data

    def put(self, city: str, data: WeatherData) -> None:
        logging.info(f"Caching weather data for city {city}")
        with self._lock:
            self._entries[city] = CacheEntry(data=data, fetched_at=self._time_func())
            self._entries.move_to_end(city)
            if len(self._entries) > self.max_cities:
                evicted, _ = self._entries.popitem(last=False)
                logging.info(f"Removing oldest cache entry for city {evicted}")

    def keys(self) -> List[str]:
        """Snapshot of cached city names, oldest access first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, city: object) -> bool:
        with self._lock:
            return city in self._entries
