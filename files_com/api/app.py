"""Litestar application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from litestar import Litestar
from litestar.logging import LoggingConfig
from litestar.openapi import OpenAPIConfig
from litestar.openapi.spec import Contact, Server

from files_com.api.dependencies import dependencies, init_services, shutdown_services
from files_com.api.routes import FilesController, HealthController
from files_com.core.config import get_api_settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: Litestar) -> AsyncGenerator[None, None]:  # noqa: ARG001
    """Application lifespan manager.

    Connects the Files.com services on startup and closes them on shutdown.
    """
    settings = get_settings()
    logger.info(f"Starting Files.com bridge (enabled={settings.enable})")

    await init_services(settings)

    try:
        yield
    finally:
        logger.info("Shutting down Files.com bridge")
        await shutdown_services()


def create_app() -> Litestar:
    """Create and configure Litestar application.

    File endpoints are only mounted when the integration is enabled.

    Returns:
        Configured Litestar application instance.
    """
    settings = get_settings()
    api_settings = get_api_settings()

    logging_config = LoggingConfig(
        root={
            "level": "DEBUG" if api_settings.debug else "INFO",
            "handlers": ["console"],
        },
        formatters={
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        handlers={
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
            },
        },
        loggers={
            "files_com": {
                "level": "DEBUG" if api_settings.debug else "INFO",
                "propagate": True,
            },
            "httpx": {
                "level": "WARNING",
                "propagate": False,
            },
        },
    )

    openapi_config = OpenAPIConfig(
        title="Files.com Bridge API",
        version="0.1.0",
        description="REST access to Files.com storage operations",
        contact=Contact(name="API Support"),
        servers=[
            Server(
                url=f"http://{api_settings.api_host}:{api_settings.api_port}",
                description="Local development server",
            ),
        ],
        path="/docs",
    )

    route_handlers: list[type] = [HealthController]
    if settings.enable:
        route_handlers.append(FilesController)

    return Litestar(
        route_handlers=route_handlers,
        dependencies=dependencies,
        lifespan=[lifespan],
        logging_config=logging_config,
        openapi_config=openapi_config,
        debug=api_settings.debug,
    )


# Application instance for uvicorn
app = create_app()
