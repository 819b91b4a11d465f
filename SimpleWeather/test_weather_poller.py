"""Tests for the background poller."""
import threading
import time
from weather_cache import WeatherCache
from weather_data import WeatherData
from weather_errors import TransportError
from weather_fetcher import WeatherFetcherBase
from weather_poller import WeatherPoller


class RecordingFetcher(WeatherFetcherBase):
    """Fetcher that records calls and fails for selected cities."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []
        self.lock = threading.Lock()

    def fetch(self, city):
        with self.lock:
            self.calls.append(city)
            count = self.calls.count(city)
        if city in self.failing:
            raise TransportError(f"boom for {city}")
        return WeatherData(name=city, visibility=count)


def test_sweep_refreshes_every_cached_city():
    cache = WeatherCache(max_cities=5, expiration_ms=60000)
    cache.put("Moscow", WeatherData(name="Moscow"))
    cache.put("Paris", WeatherData(name="Paris"))
    fetcher = RecordingFetcher()

    WeatherPoller(cache, fetcher, interval_seconds=60).sweep()

    assert sorted(fetcher.calls) == ["Moscow", "Paris"]
    assert cache.get("Moscow").visibility == 1
    assert cache.get("Paris").visibility == 1


def test_sweep_continues_after_failure():
    cache = WeatherCache(max_cities=5, expiration_ms=60000)
    for city in ["A", "B", "C"]:
        cache.put(city, WeatherData(name=city))
    stale_b = cache.get("B")
    fetcher = RecordingFetcher(failing={"B"})

    WeatherPoller(cache, fetcher, interval_seconds=60).sweep()

    assert sorted(fetcher.calls) == ["A", "B", "C"]
    assert cache.get("B") is stale_b
    assert cache.get("C").visibility == 1


def test_sweep_survives_unexpected_exception():
    class BrokenFetcher(WeatherFetcherBase):
        def fetch(self, city):
            raise RuntimeError("unexpected")

    cache = WeatherCache(max_cities=5, expiration_ms=60000)
    cache.put("A", WeatherData(name="A"))
    poller = WeatherPoller(cache, BrokenFetcher(), interval_seconds=60)

    poller.sweep()

    assert poller.sweep_count == 1


def test_runs_periodically_until_stopped():
    cache = WeatherCache(max_cities=5, expiration_ms=60000)
    cache.put("Moscow", WeatherData(name="Moscow"))
    fetcher = RecordingFetcher()
    poller = WeatherPoller(cache, fetcher, interval_seconds=0.02)

    poller.start()
    deadline = time.monotonic() + 2
    while poller.sweep_count < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    poller.stop()
    poller.join(timeout=2)

    assert poller.sweep_count >= 3
    assert not poller.running
    sweeps = poller.sweep_count
    time.sleep(0.05)
    assert poller.sweep_count == sweeps


def test_first_sweep_runs_immediately():
    cache = WeatherCache(max_cities=5, expiration_ms=60000)
    cache.put("Moscow", WeatherData(name="Moscow"))
    fetcher = RecordingFetcher()
    poller = WeatherPoller(cache, fetcher, interval_seconds=3600)

    poller.start()
    deadline = time.monotonic() + 2
    while poller.sweep_count < 1 and time.monotonic() < deadline:
        time.sleep(0.01)
    poller.stop()
    poller.join(timeout=2)

    assert fetcher.calls == ["Moscow"]
    assert not poller.running
