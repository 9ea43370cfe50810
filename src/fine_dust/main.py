"""Main entry point for the fine-dust HTTP API."""

import logging
import sys

import uvicorn
from starlette.applications import Starlette

from fine_dust.adapters.app_context import ApplicationContext
from fine_dust.adapters.config import AppConfig, ConfigurationError
from fine_dust.adapters.web import create_app

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def load_config() -> AppConfig:
    """Load configuration, exiting the process when it is unusable."""
    config = AppConfig()

    try:
        config.load_toml_overrides()
        config.require_credentials()
    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level.upper())
    logger.info(
        f"Station strategy: {config.station_strategy}, "
        f"{len(config.regions)} region(s), cache TTL {config.cache_ttl_seconds:g}s"
    )
    return config


def create_server_app() -> Starlette:
    """App factory used by uvicorn when auto-reload re-imports the module."""
    return create_app(ApplicationContext.get_instance(load_config()))


def main() -> None:
    """Main application entry point."""
    config = load_config()
    logger.info(f"Starting server on {config.host}:{config.port}")

    if config.reload:
        # The reloader spawns a worker process, so it needs an import string
        uvicorn.run(
            "fine_dust.main:create_server_app",
            factory=True,
            reload=True,
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )
        return

    app = create_app(ApplicationContext.get_instance(config))
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


def run() -> None:
    """Console script entry point."""
    main()


if __name__ == "__main__":
    main()
