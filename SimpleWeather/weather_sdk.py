"""Public entry point: the weather SDK instance."""
import logging
import threading
from typing import List, Optional

from key_registry import get_registry
from openweather_fetcher import OpenWeatherFetcher, check_url_template
from weather_cache import WeatherCache
from weather_config import WeatherConfig, WeatherMode, load_config
from weather_data import WeatherData
from weather_errors import (
    ConfigError,
    DuplicateKeyError,
    InstanceDestroyedError,
    InvalidArgumentError,
)
from weather_fetcher import WeatherFetcherBase
from weather_poller import WeatherPoller


class WeatherSDK:
    """
    Weather client bound to one API key.

    Caches recent results per city. In ON_DEMAND mode a fresh cached record
    is returned without contacting the service. In POLLING mode a background
    thread refreshes every cached city each polling interval, and direct
    ``get_weather`` calls always fetch.

    Only one live instance may exist per API key; call ``destroy()`` (or use
    the instance as a context manager) to release it.
    """

    def __init__(
        self,
        mode: Optional[WeatherMode] = None,
        url_template: Optional[str] = None,
        fetcher: Optional[WeatherFetcherBase] = None,
        api_key: Optional[str] = None,
        config_path: Optional[str] = None
    ):
        """
        Initialize the SDK from the configuration file.

        Args:
            mode: Overrides weather.mode
            url_template: Overrides weather.api.url
            fetcher: Fetcher to use instead of the OpenWeather HTTP fetcher
            api_key: Overrides weather.api.key
            config_path: Config file to read (see weather_config.load_config)

        Raises:
            ConfigError: If configuration is missing or has no API key
            DuplicateKeyError: If a live instance already uses this API key
        """
        config = load_config(config_path)

        self._api_key = api_key or config.api_key
        if not self._api_key:
            logging.error("API key is not provided in config or constructor")
            raise ConfigError("API key must be provided in the configuration file or constructor")

        self._mode = mode if mode is not None else config.mode
        self._url_template = url_template or config.url_template
        check_url_template(self._url_template)
        self._config = config

        self._destroyed = False
        self._lock = threading.Lock()
        self._poller: Optional[WeatherPoller] = None

        self._fetcher = fetcher or OpenWeatherFetcher(
            api_key=self._api_key,
            url_template=self._url_template,
            units=config.units,
            timeout=config.timeout_seconds,
        )
        self._cache = WeatherCache(max_cities=config.max_cities, expiration_ms=config.expiration_ms)

        if not get_registry().add(self._api_key):
            logging.error("SDK instance with this API key already exists")
            raise DuplicateKeyError("SDK instance with this API key already exists")

        if self._mode == WeatherMode.POLLING:
            logging.info(f"Starting polling mode with interval {config.poll_interval_minutes} minutes")
            self._poller = WeatherPoller(self._cache, self._fetcher, config.poll_interval_minutes * 60)
            try:
                self._poller.start()
            except Exception:
                get_registry().remove(self._api_key)
                raise

        logging.info(f"Weather SDK ready (mode={self._mode.name}, max_cities={config.max_cities})")

    @property
    def mode(self) -> WeatherMode:
        return self._mode

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def config(self) -> WeatherConfig:
        return self._config

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def cached_cities(self) -> List[str]:
        self._check_alive()
        return self._cache.keys()

    def get_weather(self, city: str) -> WeatherData:
        """
        Get current weather for a city.

        Returns:
            WeatherData: Cached data in ON_DEMAND mode when still fresh,
            otherwise freshly fetched data

        Raises:
            InstanceDestroyedError: If destroy() has been called
            InvalidArgumentError: If city is None or empty
            WeatherFetchError: If the upstream fetch fails
        """
        self._check_alive()
        if not city:
            logging.warning(f"Invalid city name provided: {city!r}")
            raise InvalidArgumentError("City name cannot be None or empty")

        cached = self._cache.get(city)
        if cached is not None and self._mode == WeatherMode.ON_DEMAND:
            logging.info(f"Returning cached weather data for city {city}")
            return cached

        logging.info(f"Fetching weather data for city {city}")
        data = self._fetcher.fetch(city)
        self._cache.put(city, data)
        return data

    def destroy(self) -> None:
        """Stop polling and release the API key. Safe to call more than once."""
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
        logging.info("Destroying SDK instance")
        if self._poller is not None:
            self._poller.stop()
        get_registry().remove(self._api_key)

    @staticmethod
    def clear_registry() -> None:
        """Forget every registered API key. Intended for tests."""
        get_registry().clear()

    def _check_alive(self) -> None:
        if self._destroyed:
            logging.warning("Attempt to use destroyed SDK instance")
            raise InstanceDestroyedError("SDK instance has been destroyed")

    def __enter__(self) -> "WeatherSDK":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.destroy()
