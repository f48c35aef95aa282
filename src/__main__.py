# ABOUTME: Command-line entry point: `python -m src` serves the API with uvicorn.
# ABOUTME: Host, port and log level come from the environment via load_settings().

import uvicorn

from src.config import configure_logging, load_settings
from src.web import create_app


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
