# ABOUTME: Runtime settings read from the environment (and an optional .env file).
# ABOUTME: Also owns the logging setup and the module loggers whose failures never reach callers.

import logging
import os
import sys
import traceback

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    """Service settings. Only `forecast_url` affects the API's behaviour."""

    model_config = ConfigDict(frozen=True)

    forecast_url: str = DEFAULT_FORECAST_URL
    upstream_timeout: float | None = None
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from WEATHER_* / LOG_LEVEL environment variables."""
    load_dotenv()
    timeout = os.environ.get("WEATHER_UPSTREAM_TIMEOUT")
    return Settings(
        forecast_url=os.environ.get("WEATHER_FORECAST_URL", DEFAULT_FORECAST_URL),
        upstream_timeout=float(timeout) if timeout else None,
        host=os.environ.get("WEATHER_HOST", "127.0.0.1"),
        port=int(os.environ.get("WEATHER_PORT", "8000")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


class SafeLogger(logging.LoggerAdapter):
    """Logger adapter that reports handler failures on stderr instead of raising them into the caller."""

    def log(self, level, msg, *args, **kwargs):
        try:
            super().log(level, msg, *args, **kwargs)
        except Exception:
            traceback.print_exc(file=sys.stderr)


def get_logger(name: str) -> SafeLogger:
    return SafeLogger(logging.getLogger(name), {})
