# ABOUTME: Service layer for the Open-Meteo forecast call and response parsing.
# ABOUTME: Returns Ok/Err results tagged by FailureKind instead of raising across the boundary.

import asyncio
from typing import Protocol

import httpx
from pydantic import ValidationError

from src.config import DEFAULT_FORECAST_URL, get_logger
from src.models import WeatherResponse
from src.results import Err, FailureKind, Ok

logger = get_logger(__name__)

FORECAST_URL = DEFAULT_FORECAST_URL

CURRENT_PARAMS = "temperature_2m,wind_speed_10m"
HOURLY_PARAMS = "temperature_2m,relative_humidity_2m,wind_speed_10m"


class WeatherFetcher(Protocol):
    """Capability to fetch the forecast envelope for a pair of coordinates."""

    async def __call__(
        self,
        latitude: float,
        longitude: float,
        cancelled: asyncio.Event | None = None,
    ) -> Ok[WeatherResponse] | Err: ...


class _Cancelled(Exception):
    """The caller's cancellation signal fired before the upstream answered."""


def build_forecast_params(latitude: float, longitude: float) -> dict:
    """Query parameters for the forecast endpoint; coordinates are passed through unformatted."""
    return {
        "latitude": latitude,
        "longitude": longitude,
        "current": CURRENT_PARAMS,
        "hourly": HOURLY_PARAMS,
    }


async def fetch_weather(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    cancelled: asyncio.Event | None = None,
    *,
    forecast_url: str = FORECAST_URL,
) -> Ok[WeatherResponse] | Err:
    """Fetch current conditions and hourly forecast from Open-Meteo.

    Makes exactly one upstream call. If `cancelled` is set before the upstream answers,
    the request is abandoned and a CANCELLED failure is returned.
    """
    logger.info("Fetching weather data for coordinates: Lat %s, Lon %s", latitude, longitude)
    try:
        resp = await _get(client, forecast_url, build_forecast_params(latitude, longitude), cancelled)
        resp.raise_for_status()
    except _Cancelled:
        logger.warning("Request for weather data was cancelled for coordinates: Lat %s, Lon %s", latitude, longitude)
        return Err(kind=FailureKind.CANCELLED, message="Request cancelled by caller")
    except httpx.HTTPError as e:
        logger.error(
            "HTTP request failed while fetching weather data for coordinates: Lat %s, Lon %s: %s",
            latitude,
            longitude,
            e,
        )
        return Err(kind=FailureKind.TRANSPORT, message=str(e), cause=e)
    except Exception as e:
        logger.exception("Unexpected error while fetching weather data for coordinates: Lat %s, Lon %s", latitude, longitude)
        return Err(kind=FailureKind.INTERNAL, message=str(e), cause=e)

    result = parse_weather_response(resp)
    if isinstance(result, Err):
        logger.error(
            "Failed to deserialize weather data for coordinates: Lat %s, Lon %s: %s",
            latitude,
            longitude,
            result.message,
        )
        return result

    logger.info("Successfully retrieved weather data for coordinates: Lat %s, Lon %s", latitude, longitude)
    return result


def parse_weather_response(resp: httpx.Response) -> Ok[WeatherResponse] | Err:
    """Parse an upstream response body into a WeatherResponse.

    Unknown fields are ignored and missing ones take their defaults. A body that is not JSON
    or does not fit the model is a DESERIALIZATION failure; a JSON null is INTERNAL.
    """
    try:
        data = resp.json()
    except ValueError as e:
        return Err(kind=FailureKind.DESERIALIZATION, message=f"Response body is not valid JSON: {e}", cause=e)

    if data is None:
        return Err(kind=FailureKind.INTERNAL, message="Failed to deserialize weather data from the API response.")

    try:
        return Ok(value=WeatherResponse.model_validate(data))
    except ValidationError as e:
        return Err(kind=FailureKind.DESERIALIZATION, message=str(e), cause=e)


async def _get(
    client: httpx.AsyncClient,
    url: str,
    params: dict,
    cancelled: asyncio.Event | None,
) -> httpx.Response:
    """GET `url`, abandoning the request if `cancelled` fires first."""
    if cancelled is None:
        return await client.get(url, params=params)
    if cancelled.is_set():
        raise _Cancelled()

    request = asyncio.ensure_future(client.get(url, params=params))
    waiter = asyncio.ensure_future(cancelled.wait())
    try:
        await asyncio.wait({request, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        abandoned = not request.done()
        if abandoned:
            request.cancel()

    if abandoned:
        raise _Cancelled()
    return request.result()
