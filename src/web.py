# ABOUTME: ASGI web entry point exposing the weather proxy endpoints under /api/weather.
# ABOUTME: Validates coordinates, calls the fetch capability and maps result tags to HTTP statuses.

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager, suppress

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.config import Settings, get_logger, load_settings
from src.deps import WeatherDeps, create_http_client
from src.models import LATITUDE_RANGE, LONGITUDE_RANGE, Coordinates, CurrentWeather, HourlyForecast, WeatherResponse
from src.results import Err, FailureKind, Ok
from src.weather_service import WeatherFetcher

logger = get_logger(__name__)

UNAVAILABLE_MESSAGE = "Weather service is currently unavailable. Please try again later."
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."
INVALID_QUERY_MESSAGE = "Query parameters 'latitude' and 'longitude' must be provided as numbers."

DISCONNECT_POLL_SECONDS = 0.1

_STATUS_BY_KIND = {
    FailureKind.VALIDATION: 400,
    FailureKind.TRANSPORT: 503,
    FailureKind.DESERIALIZATION: 500,
    FailureKind.INTERNAL: 500,
    FailureKind.CANCELLED: 500,
}


def validate_coordinates(latitude: float, longitude: float) -> Ok[Coordinates] | Err:
    """Check latitude first, then longitude; NaN and infinities are out of range."""
    low, high = LATITUDE_RANGE
    if not low <= latitude <= high:
        return Err(kind=FailureKind.VALIDATION, message="Latitude must be between -90 and 90 degrees.")
    low, high = LONGITUDE_RANGE
    if not low <= longitude <= high:
        return Err(kind=FailureKind.VALIDATION, message="Longitude must be between -180 and 180 degrees.")
    return Ok(value=Coordinates(latitude=latitude, longitude=longitude))


async def watch_disconnect(request: Request, cancelled: asyncio.Event, interval: float = DISCONNECT_POLL_SECONDS):
    """Set `cancelled` once the client behind `request` has gone away."""
    while not await request.is_disconnected():
        await asyncio.sleep(interval)
    cancelled.set()


async def cancellation_signal(request: Request) -> AsyncIterator[asyncio.Event]:
    """Per-request cancellation signal, fired when the caller disconnects."""
    cancelled = asyncio.Event()
    watcher = asyncio.create_task(watch_disconnect(request, cancelled))
    try:
        yield cancelled
    finally:
        watcher.cancel()
        with suppress(asyncio.CancelledError):
            await watcher


def get_fetcher(request: Request) -> WeatherFetcher:
    deps: WeatherDeps = request.app.state.deps
    return deps.fetcher()


async def _respond(
    operation: str,
    latitude: float,
    longitude: float,
    fetch: WeatherFetcher,
    cancelled: asyncio.Event,
    select: Callable[[WeatherResponse], BaseModel],
) -> JSONResponse:
    """Run one endpoint: validate, fetch, then translate the result into a response."""
    checked = validate_coordinates(latitude, longitude)
    if isinstance(checked, Err):
        logger.warning("Rejected %s request: %s (lat=%s, lon=%s)", operation, checked.message, latitude, longitude)
        return JSONResponse(status_code=400, content={"detail": checked.message})

    coords = checked.value
    result = await fetch(coords.latitude, coords.longitude, cancelled)

    match result:
        case Ok(value=weather):
            logger.info("Served %s for lat=%s, lon=%s", operation, latitude, longitude)
            return JSONResponse(status_code=200, content=select(weather).model_dump(mode="json"))
        case Err(kind=FailureKind.TRANSPORT):
            logger.error(
                "Upstream unavailable while serving %s for lat=%s, lon=%s: %s",
                operation,
                latitude,
                longitude,
                result.message,
                exc_info=result.cause,
            )
            return JSONResponse(status_code=503, content={"detail": UNAVAILABLE_MESSAGE})
        case Err(kind=kind):
            logger.error(
                "Failed to serve %s for lat=%s, lon=%s (%s): %s",
                operation,
                latitude,
                longitude,
                kind.value,
                result.message,
                exc_info=result.cause,
            )
            return JSONResponse(status_code=_STATUS_BY_KIND[kind], content={"detail": UNEXPECTED_MESSAGE})


router = APIRouter(prefix="/api/weather", tags=["weather"])


@router.get("", response_model=WeatherResponse)
async def get_weather(
    latitude: float = Query(..., description="Latitude between -90 and 90"),
    longitude: float = Query(..., description="Longitude between -180 and 180"),
    fetch: WeatherFetcher = Depends(get_fetcher),
    cancelled: asyncio.Event = Depends(cancellation_signal),
):
    """Full forecast envelope for a location."""
    return await _respond("weather", latitude, longitude, fetch, cancelled, lambda w: w)


@router.get("/current", response_model=CurrentWeather)
async def get_current_weather(
    latitude: float = Query(..., description="Latitude between -90 and 90"),
    longitude: float = Query(..., description="Longitude between -180 and 180"),
    fetch: WeatherFetcher = Depends(get_fetcher),
    cancelled: asyncio.Event = Depends(cancellation_signal),
):
    """Current conditions only."""
    return await _respond("current weather", latitude, longitude, fetch, cancelled, lambda w: w.current)


@router.get("/hourly", response_model=HourlyForecast)
async def get_hourly_forecast(
    latitude: float = Query(..., description="Latitude between -90 and 90"),
    longitude: float = Query(..., description="Longitude between -180 and 180"),
    fetch: WeatherFetcher = Depends(get_fetcher),
    cancelled: asyncio.Event = Depends(cancellation_signal),
):
    """Hourly forecast only."""
    return await _respond("hourly forecast", latitude, longitude, fetch, cancelled, lambda w: w.hourly)


async def _invalid_query(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected request to %s: invalid query parameters %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": INVALID_QUERY_MESSAGE})


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error while serving %s (query: %s)",
        request.url.path,
        request.query_params,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": UNEXPECTED_MESSAGE})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app; the shared HTTP client lives for the app's lifespan."""
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with create_http_client(settings) as client:
            app.state.deps = WeatherDeps(http_client=client, forecast_url=settings.forecast_url)
            yield

    app = FastAPI(title="Weather Proxy API", lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _invalid_query)
    app.add_exception_handler(Exception, _unhandled)
    return app


app = create_app()
