"""Tests for weather_data module."""
import dataclasses
import pytest
from weather_data import WeatherData, WeatherCondition


@pytest.fixture
def moscow_payload():
    """Projection of a real OpenWeather response plus fields we ignore."""
    return {
        "coord": {"lon": 37.62, "lat": 55.75},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "base": "stations",
        "main": {"temp": -0.76, "feels_like": -3.65, "pressure": 1021, "humidity": 80},
        "visibility": 10000,
        "wind": {"speed": 2.25, "deg": 200},
        "dt": 1740226758,
        "sys": {"country": "RU", "sunrise": 1740199086, "sunset": 1740235699},
        "timezone": 10800,
        "name": "Moscow",
        "cod": 200,
    }


def test_from_dict_maps_projected_fields(moscow_payload):
    weather = WeatherData.from_dict(moscow_payload)

    assert weather.name == "Moscow"
    assert weather.weather == (WeatherCondition(main="Clouds", description="broken clouds"),)
    assert weather.main.temp == pytest.approx(-0.76)
    assert weather.main.feels_like == pytest.approx(-3.65)
    assert weather.visibility == 10000
    assert weather.wind.speed == pytest.approx(2.25)
    assert weather.datetime == 1740226758
    assert weather.sys.sunrise == 1740199086
    assert weather.sys.sunset == 1740235699
    assert weather.timezone == 10800


def test_condition_is_first_entry(moscow_payload):
    moscow_payload["weather"].append({"main": "Mist", "description": "mist"})
    weather = WeatherData.from_dict(moscow_payload)

    assert weather.condition.main == "Clouds"
    assert len(weather.weather) == 2


def test_missing_fields_use_defaults():
    """Absent fields decode to zero values instead of failing."""
    weather = WeatherData.from_dict({"name": "Nowhere"})

    assert weather.name == "Nowhere"
    assert weather.weather == ()
    assert weather.condition is None
    assert weather.main.temp == 0.0
    assert weather.sys.sunrise == 0


def test_record_is_immutable(moscow_payload):
    weather = WeatherData.from_dict(moscow_payload)

    with pytest.raises(dataclasses.FrozenInstanceError):
        weather.name = "Paris"


@pytest.mark.parametrize("payload", [
    [],
    "not an object",
    {"main": [1, 2]},
    {"weather": {"main": "Clouds"}},
    {"main": {"temp": "warm"}},
])
def test_malformed_payload_raises(payload):
    with pytest.raises((TypeError, ValueError)):
        WeatherData.from_dict(payload)


def test_null_fields_use_defaults():
    weather = WeatherData.from_dict({"visibility": None, "main": None, "name": "Oslo"})

    assert weather.visibility == 0
    assert weather.main.temp == 0.0
