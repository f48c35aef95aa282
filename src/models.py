# ABOUTME: Pydantic BaseModels for the Open-Meteo forecast payload served by the API.
# ABOUTME: Field names match the upstream wire names; missing fields fall back to zero/empty defaults.

from pydantic import BaseModel, ConfigDict, Field

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


class _Record(BaseModel):
    """Immutable value record; unknown upstream fields are dropped and non-finite numbers rejected."""

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)


class Coordinates(_Record):
    """Geographic coordinates of a weather query."""

    latitude: float = Field(..., ge=LATITUDE_RANGE[0], le=LATITUDE_RANGE[1])
    longitude: float = Field(..., ge=LONGITUDE_RANGE[0], le=LONGITUDE_RANGE[1])


class CurrentWeatherUnits(_Record):
    """Unit labels for the current conditions (e.g. "iso8601", "seconds", "°C", "km/h")."""

    time: str = ""
    interval: str = ""
    temperature_2m: str = ""
    wind_speed_10m: str = ""


class CurrentWeather(_Record):
    """A single instantaneous reading."""

    time: str = ""
    interval: int = 0
    temperature_2m: float = 0.0
    wind_speed_10m: float = 0.0


class HourlyUnits(_Record):
    time: str = ""
    temperature_2m: str = ""
    relative_humidity_2m: str = ""
    wind_speed_10m: str = ""


class HourlyForecast(_Record):
    """Column-oriented hourly forecast; `time[i]` belongs with `temperature_2m[i]` and so on."""

    time: list[str] = []
    temperature_2m: list[float] = []
    relative_humidity_2m: list[float] = []
    wind_speed_10m: list[float] = []


class WeatherResponse(_Record):
    """Full forecast envelope: location metadata, current conditions and hourly forecast."""

    latitude: float = 0.0
    longitude: float = 0.0
    generationtime_ms: float = 0.0
    utc_offset_seconds: int = 0
    timezone: str = ""
    timezone_abbreviation: str = ""
    elevation: float = 0.0
    current_units: CurrentWeatherUnits = CurrentWeatherUnits()
    current: CurrentWeather = CurrentWeather()
    hourly_units: HourlyUnits = HourlyUnits()
    hourly: HourlyForecast = HourlyForecast()
