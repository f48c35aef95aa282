# ABOUTME: Dependency container for the weather API using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient and upstream URL the endpoints fetch through.

from functools import partial

import httpx
from pydantic import BaseModel, ConfigDict

from src.config import DEFAULT_FORECAST_URL, Settings
from src.weather_service import WeatherFetcher, fetch_weather


class WeatherDeps(BaseModel):
    """Collaborators shared by all requests, stored on the app state by the lifespan."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    forecast_url: str = DEFAULT_FORECAST_URL

    def fetcher(self) -> WeatherFetcher:
        """Bind the client and URL into the function-shaped fetch capability."""
        return partial(fetch_weather, self.http_client, forecast_url=self.forecast_url)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the pooled httpx client used for upstream calls.

    No retries are configured. Without WEATHER_UPSTREAM_TIMEOUT the client has no timeout,
    so only the request's cancellation signal bounds an upstream call.
    """
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.upstream_timeout))
