# ABOUTME: Shared helpers for the weather proxy test suite.
# ABOUTME: Open-Meteo fixture payload and mock httpx clients used across test modules.

import asyncio
from unittest.mock import AsyncMock

import httpx

BERLIN = {"latitude": 52.52, "longitude": 13.41}


def forecast_payload() -> dict:
    """A trimmed Open-Meteo forecast response for Berlin, plus a field the API does not model."""
    return {
        "latitude": 52.52,
        "longitude": 13.419998,
        "generationtime_ms": 0.0650882720947266,
        "utc_offset_seconds": 0,
        "timezone": "GMT",
        "timezone_abbreviation": "GMT",
        "elevation": 38.0,
        "current_units": {
            "time": "iso8601",
            "interval": "seconds",
            "temperature_2m": "°C",
            "wind_speed_10m": "km/h",
        },
        "current": {
            "time": "2025-06-01T12:00",
            "interval": 900,
            "temperature_2m": 18.3,
            "wind_speed_10m": 11.2,
        },
        "hourly_units": {
            "time": "iso8601",
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "wind_speed_10m": "km/h",
        },
        "hourly": {
            "time": ["2025-06-01T00:00", "2025-06-01T01:00", "2025-06-01T02:00"],
            "temperature_2m": [14.1, 13.6, 13.2],
            "relative_humidity_2m": [71.0, 74.0, 77.0],
            "wind_speed_10m": [8.4, 7.9, 7.2],
        },
        "daily": {"time": ["2025-06-01"]},
    }


def mock_client(status_code: int = 200, json_data=None, content: bytes | None = None) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get() returns a single canned response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    request = httpx.Request("GET", "https://test")
    if content is not None:
        response = httpx.Response(status_code=status_code, content=content, request=request)
    else:
        response = httpx.Response(status_code=status_code, json=json_data, request=request)
    mock.get.return_value = response
    return mock


def hanging_client() -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get() never answers in test time."""
    mock = AsyncMock(spec=httpx.AsyncClient)

    async def _hang(*args, **kwargs):
        await asyncio.sleep(30)

    mock.get.side_effect = _hang
    return mock
