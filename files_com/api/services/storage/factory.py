"""Configuration validation and service factories."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

from files_com.core.config import FilesComSettings, get_settings

from .api_service import FilesComApiService
from .client import NetworkOptions
from .exceptions import FilesComConfigurationError
from .service import FilesComService

logger = logging.getLogger(__name__)

SettingsFactory = Callable[..., FilesComSettings | None | Awaitable[FilesComSettings | None]]


def validate_configuration(settings: FilesComSettings) -> None:
    """Check that an enabled integration has a site URL and credentials.

    Disabled configurations always pass.

    Raises:
        FilesComConfigurationError: If enabled without a base URL, or without
            an API key and a complete username/password pair.
    """
    if not settings.enable:
        return

    if not settings.base_url:
        raise FilesComConfigurationError("You must provide a baseUrl for Files.com")

    if not settings.api_key and not settings.has_session_credentials:
        raise FilesComConfigurationError(
            "You must provide either an API key or both username and password for Files.com"
        )


@dataclass
class FilesComServices:
    """Facade and raw client built from one configuration."""

    service: FilesComService
    api: FilesComApiService

    async def connect(self) -> None:
        await self.service.connect()
        await self.api.connect()

    async def close(self) -> None:
        await self.service.close()
        await self.api.close()


def create_files_com_service(
    settings: FilesComSettings | None = None,
    *,
    network: NetworkOptions | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FilesComService:
    """Validate settings and build the facade service."""
    settings = settings or get_settings()
    validate_configuration(settings)
    return FilesComService(settings, network=network, transport=transport)


def create_files_com_api_service(
    settings: FilesComSettings | None = None,
    *,
    network: NetworkOptions | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FilesComApiService:
    """Validate settings and build the raw REST client."""
    settings = settings or get_settings()
    validate_configuration(settings)
    return FilesComApiService(settings, network=network, transport=transport)


def create_files_com_services(
    settings: FilesComSettings | None = None,
    **kwargs: Any,
) -> FilesComServices:
    """Build both services from a ready configuration."""
    settings = settings or get_settings()
    return FilesComServices(
        service=create_files_com_service(settings, **kwargs),
        api=create_files_com_api_service(settings, **kwargs),
    )


async def create_files_com_services_async(
    settings_factory: SettingsFactory,
    *args: Any,
    **kwargs: Any,
) -> FilesComServices:
    """Build both services from a sync or async settings factory.

    Positional arguments are passed to the factory; keyword arguments go to
    the service constructors.

    Raises:
        FilesComConfigurationError: If the factory returns no settings or the
            settings are incomplete.
    """
    settings = settings_factory(*args)
    if inspect.isawaitable(settings):
        settings = await settings

    if settings is None:
        raise FilesComConfigurationError("Failed to get configuration for Files.com")

    logger.debug(f"Files.com configuration resolved (enabled={settings.enable})")
    return create_files_com_services(settings, **kwargs)
