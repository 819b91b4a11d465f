"""Background refresher that keeps cached cities up to date."""
import logging
import threading
import time
from typing import Optional

from weather_cache import WeatherCache
from weather_errors import WeatherSDKError
from weather_fetcher import WeatherFetcherBase


class WeatherPoller:
    """
    Periodically refetches every city currently in the cache.

    Runs one daemon thread. Sweeps never overlap: the next sweep starts one
    interval after the previous one started, or right away if the previous
    sweep took longer than the interval.
    """

    def __init__(self, cache: WeatherCache, fetcher: WeatherFetcherBase, interval_seconds: float):
        self.cache = cache
        self.fetcher = fetcher
        self.interval_seconds = interval_seconds
        self.sweep_count = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Poller already started")
        logging.info(f"Starting weather polling every {self.interval_seconds:.1f}s")
        self._thread = threading.Thread(target=self._run, name="weather-poller", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Signal the worker to stop. Does not wait for a running sweep."""
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        next_run = time.monotonic()
        while not self._stop_event.is_set():
            self.sweep()
            next_run += self.interval_seconds
            now = time.monotonic()
            if next_run < now:
                # Overran the interval: run once more immediately, don't pile up
                next_run = now
            if self._stop_event.wait(next_run - now):
                break
        logging.info("Weather polling stopped")

    def sweep(self) -> None:
        """Refresh every cached city once. Failures are logged and skipped."""
        cities = self.cache.keys()
        logging.debug(f"Polling sweep over {len(cities)} cached cities")
        for city in cities:
            if self._stop_event.is_set():
                break
            try:
                self.cache.put(city, self.fetcher.fetch(city))
            except WeatherSDKError as e:
                logging.error(f"Failed to update weather for city {city}: {e}")
            except Exception:
                logging.exception(f"Unexpected error updating weather for city {city}")
        self.sweep_count += 1
