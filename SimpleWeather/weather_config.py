"""Configuration loading for the weather SDK."""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dotenv import dotenv_values

from openweather_fetcher import DEFAULT_URL_TEMPLATE, check_url_template
from weather_errors import ConfigError

DEFAULT_CONFIG_FILE = "config.properties"
CONFIG_PATH_ENV = "WEATHER_SDK_CONFIG"
API_KEY_ENV = "WEATHER_API_KEY"


class WeatherMode(Enum):
    ON_DEMAND = "ON_DEMAND"  # fetch on cache miss only
    POLLING = "POLLING"  # refresh cached cities in the background

    @classmethod
    def parse(cls, value: str) -> "WeatherMode":
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ConfigError(f"Unknown weather mode: {value!r} (expected ON_DEMAND or POLLING)") from None


@dataclass(frozen=True)
class WeatherConfig:
    api_key: Optional[str]
    url_template: str = DEFAULT_URL_TEMPLATE
    units: str = "metric"
    mode: WeatherMode = WeatherMode.ON_DEMAND
    expiration_ms: int = 600_000
    max_cities: int = 10
    poll_interval_minutes: float = 10
    timeout_seconds: float = 10


def resolve_config_path(path: Optional[str] = None) -> str:
    return path or os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE


def load_config(path: Optional[str] = None) -> WeatherConfig:
    """
    Load SDK configuration from a ``key=value`` properties file.

    Args:
        path: Config file path. Defaults to $WEATHER_SDK_CONFIG, then
            ./config.properties

    Returns:
        WeatherConfig: Parsed configuration. The API key may still be None;
        the SDK validates it after applying constructor overrides.

    Raises:
        ConfigError: If the file is missing or a value cannot be parsed
    """
    path = resolve_config_path(path)
    if not os.path.isfile(path):
        logging.error(f"Configuration file '{path}' not found")
        raise ConfigError(f"Unable to find configuration file: {path}")

    try:
        values = dotenv_values(path)
    except (OSError, UnicodeDecodeError) as e:
        logging.error(f"Failed to load configuration: {e}")
        raise ConfigError(f"Failed to load config: {e}") from e

    def option(name: str, default: str) -> str:
        value = values.get(name)
        return value.strip() if value and value.strip() else default

    api_key = option("weather.api.key", "") or os.getenv(API_KEY_ENV) or None

    config = WeatherConfig(
        api_key=api_key,
        url_template=option("weather.api.url", DEFAULT_URL_TEMPLATE),
        units=option("weather.units", "metric"),
        mode=WeatherMode.parse(option("weather.mode", "ON_DEMAND")),
        expiration_ms=_parse_number("cache.expiration.time", option("cache.expiration.time", "600000"), int),
        max_cities=_parse_number("cache.max.cities", option("cache.max.cities", "10"), int),
        poll_interval_minutes=_parse_number("polling.interval.minutes", option("polling.interval.minutes", "10"), float),
        timeout_seconds=_parse_number("http.timeout.seconds", option("http.timeout.seconds", "10"), float),
    )

    if config.expiration_ms < 0:
        raise ConfigError("cache.expiration.time must not be negative")
    if config.max_cities < 0:
        raise ConfigError("cache.max.cities must not be negative")
    if config.poll_interval_minutes <= 0:
        raise ConfigError("polling.interval.minutes must be positive")
    if config.timeout_seconds <= 0:
        raise ConfigError("http.timeout.seconds must be positive")
    check_url_template(config.url_template)

    logging.info(f"Configuration loaded from {path}: mode={config.mode.name} units={config.units} "
                 f"max_cities={config.max_cities} expiration={config.expiration_ms}ms")
    return config


def _parse_number(name, raw, convert):
    try:
        return convert(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from exc
