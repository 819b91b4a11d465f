"""OpenWeather Current Weather API fetcher implementation."""
import logging
import re
from urllib.parse import quote

import requests

from weather_data import WeatherData
from weather_errors import ConfigError, DecodeError, TransportError
from weather_fetcher import WeatherFetcherBase

DEFAULT_URL_TEMPLATE = "https://api.openweathermap.org/data/2.5/weather?q=%s&appid=%s&units=%s"

_SLOT_PATTERN = re.compile(r"%(%|s)")


def format_url_template(template: str, city: str, api_key: str, units: str) -> str:
    """
    Fill the positional %s slots of a URL template with (city, api_key, units).

    Templates may use fewer than three slots, e.g. with units hard-coded;
    values without a slot are dropped.

    Raises:
        ConfigError: If the template cannot be filled
    """
    values = (city, api_key, units)
    slots = sum(1 for match in _SLOT_PATTERN.finditer(template) if match.group(1) == "s")
    if slots > len(values):
        raise ConfigError(f"URL template has {slots} %s slots, at most {len(values)} are supported: {template!r}")
    try:
        return template % values[:slots]
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid URL template {template!r}: {e}") from e


def check_url_template(template: str) -> None:
    format_url_template(template, "city", "key", "units")


class OpenWeatherFetcher(WeatherFetcherBase):
    """
    Weather fetcher using the OpenWeather Current Weather API.

    The request URL comes from a template with three positional ``%s``
    slots, filled with (city, api_key, units) in that order. Templates with
    fewer slots get the leading values only, so existing configuration
    files keep working.
    """

    def __init__(
        self,
        api_key: str,
        url_template: str = DEFAULT_URL_TEMPLATE,
        units: str = "metric",
        timeout: float = 10
    ):
        """
        Initialize OpenWeather fetcher.

        Args:
            api_key: OpenWeather API key
            url_template: URL with positional slots for (city, api_key, units)
            units: Temperature units ("metric", "imperial", or "standard")
            timeout: HTTP request timeout in seconds
        """
        check_url_template(url_template)
        self.api_key = api_key
        self.url_template = url_template
        self.units = units
        self.timeout = timeout

    def build_url(self, city: str) -> str:
        return format_url_template(self.url_template, quote(city), self.api_key, self.units)

    def fetch(self, city: str) -> WeatherData:
        """
        Fetch current weather for a city from OpenWeather.

        Returns:
            WeatherData: Current weather information

        Raises:
            TransportError: If the request fails or the API answers non-2xx
            DecodeError: If the response cannot be decoded
        """
        url = self.build_url(city)

        try:
            logging.info(f"Making OpenWeather API request for city {city}")
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request for city {city}: {e}")
            raise TransportError(f"Network error: {e}") from e

        logging.info(f"API response status: {response.status_code}")
        if not 200 <= response.status_code < 300:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            weather_data = WeatherData.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse API response for city {city}: {e}")
            raise DecodeError(f"Failed to parse response: {e}") from e

        logging.info(f"Successfully parsed weather data for {weather_data.name or city}: {weather_data.main.temp}°")
        return weather_data

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise TransportError(f"HTTP {response.status_code}: {response.text[:200]}")

        if not isinstance(error_data, dict):
            raise TransportError(f"HTTP {response.status_code}: {str(error_data)[:200]}")

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        logging.error(f"OpenWeather API error response: {error_data}")
        raise TransportError(f"OpenWeather API error {cod}: {message}")
