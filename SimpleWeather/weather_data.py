"""Weather domain model - immutable records decoded from the upstream payload."""
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class WeatherCondition:
    """One entry of the upstream "weather" array."""
    main: str  # e.g., "Clouds", "Rain", "Clear"
    description: str  # e.g., "broken clouds", "light rain"


@dataclass(frozen=True)
class MainInfo:
    temp: float
    feels_like: float


@dataclass(frozen=True)
class WindInfo:
    speed: float


@dataclass(frozen=True)
class SysInfo:
    sunrise: int  # UNIX timestamp (UTC)
    sunset: int  # UNIX timestamp (UTC)


@dataclass(frozen=True)
class WeatherData:
    """Current conditions for one city, as reported by the weather service."""
    weather: Tuple[WeatherCondition, ...] = field(default_factory=tuple)
    main: MainInfo = MainInfo(temp=0.0, feels_like=0.0)
    visibility: int = 0
    wind: WindInfo = WindInfo(speed=0.0)
    datetime: int = 0  # UNIX timestamp of the measurement ("dt" upstream)
    sys: SysInfo = SysInfo(sunrise=0, sunset=0)
    timezone: int = 0  # Offset from UTC in seconds
    name: str = ""  # City name echoed by the service

    @property
    def condition(self) -> Optional[WeatherCondition]:
        """First reported condition, or None if the service sent none."""
        return self.weather[0] if self.weather else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeatherData":
        """
        Build a WeatherData from a decoded OpenWeather JSON object.

        Only the projected fields are read; anything else in the payload is
        ignored. Absent fields fall back to zero or empty values.

        Raises:
            TypeError, ValueError: If a projected field has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        conditions = tuple(
            WeatherCondition(
                main=str(_value(item, "main", "")),
                description=str(_value(item, "description", "")),
            )
            for item in _list(data, "weather")
        )

        main_data = _object(data, "main")
        wind_data = _object(data, "wind")
        sys_data = _object(data, "sys")

        return cls(
            weather=conditions,
            main=MainInfo(
                temp=float(_value(main_data, "temp", 0.0)),
                feels_like=float(_value(main_data, "feels_like", 0.0)),
            ),
            visibility=int(_value(data, "visibility", 0)),
            wind=WindInfo(speed=float(_value(wind_data, "speed", 0.0))),
            datetime=int(_value(data, "dt", 0)),
            sys=SysInfo(
                sunrise=int(_value(sys_data, "sunrise", 0)),
                sunset=int(_value(sys_data, "sunset", 0)),
            ),
            timezone=int(_value(data, "timezone", 0)),
            name=str(_value(data, "name", "")),
        )


def _object(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def _list(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, Mapping) for v in value):
        raise TypeError(f"'{key}' must be an array of objects")
    return value


def _value(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value
