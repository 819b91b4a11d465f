"""Weather fetcher abstraction - allows swapping the upstream weather API."""
from abc import ABC, abstractmethod
from weather_data import WeatherData


class WeatherFetcherBase(ABC):
    """Abstract base class for weather fetchers."""

    @abstractmethod
    def fetch(self, city: str) -> WeatherData:
        """
        Fetch current weather for a city.

        Implementations must not cache and must not retry.

        Args:
            city: City name, passed to the service verbatim

        Returns:
            WeatherData: Current weather information

        Raises:
            TransportError: If the service could not be reached or refused the request
            DecodeError: If the response body could not be decoded
        """
        pass
