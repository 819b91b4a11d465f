"""Exceptions raised by the weather SDK."""


class WeatherSDKError(Exception):
    """Base class for every error the SDK raises to its caller."""
    pass


class ConfigError(WeatherSDKError):
    """Configuration is missing, unreadable, or lacks an API key."""
    pass


class DuplicateKeyError(WeatherSDKError):
    """Another live SDK instance already owns this API key."""
    pass


class InvalidArgumentError(WeatherSDKError, ValueError):
    """A caller passed an empty or missing city name."""
    pass


class InstanceDestroyedError(WeatherSDKError):
    """The SDK instance was used after destroy()."""
    pass


class WeatherFetchError(WeatherSDKError):
    """Fetching weather from the upstream service failed."""
    pass


class TransportError(WeatherFetchError):
    """Network failure or non-2xx response from the upstream service."""
    pass


class DecodeError(WeatherFetchError):
    """The upstream body could not be decoded into a WeatherData."""
    pass
