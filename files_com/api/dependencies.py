"""Dependency injection providers for Litestar."""

from __future__ import annotations

import logging

from litestar.di import Provide

from files_com.api.services.storage import (
    FilesComApiService,
    FilesComService,
    FilesComServices,
    create_files_com_services,
    validate_configuration,
)
from files_com.core.config import FilesComSettings, get_settings

logger = logging.getLogger(__name__)

# Global singleton instances (created at app startup)
_files_com: FilesComServices | None = None


# -----------------------------------------------------------------------------
# Files.com dependencies
# -----------------------------------------------------------------------------


async def get_files_com_service() -> FilesComService:
    """Provide the Files.com facade.

    Returns:
        Singleton facade service.

    Raises:
        RuntimeError: If services not initialized.
    """
    if _files_com is None:
        raise RuntimeError("Files.com services not initialized")
    return _files_com.service


async def get_files_com_api_service() -> FilesComApiService:
    """Provide the raw Files.com REST client.

    Raises:
        RuntimeError: If services not initialized.
    """
    if _files_com is None:
        raise RuntimeError("Files.com services not initialized")
    return _files_com.api


def provide_settings() -> FilesComSettings:
    return get_settings()


# -----------------------------------------------------------------------------
# Lifecycle management
# -----------------------------------------------------------------------------


async def init_services(settings: FilesComSettings) -> FilesComServices | None:
    """Validate configuration and connect the Files.com services.

    Called during application startup. A disabled integration leaves the
    services uninitialized.

    Raises:
        FilesComConfigurationError: If the enabled configuration is incomplete.
    """
    global _files_com

    validate_configuration(settings)
    if not settings.enable:
        logger.warning("Files.com integration disabled - file endpoints will be unavailable")
        return None

    _files_com = create_files_com_services(settings)
    await _files_com.connect()
    logger.info(f"Files.com services initialized for {settings.base_url}")
    return _files_com


async def shutdown_services() -> None:
    """Cleanup service resources.

    Called during application shutdown.
    """
    global _files_com

    if _files_com is not None:
        await _files_com.close()
        _files_com = None
        logger.info("Files.com services closed")


# Dependency providers for Litestar
dependencies = {
    "files_com": Provide(get_files_com_service),
    "files_com_api": Provide(get_files_com_api_service),
    "settings": Provide(provide_settings, sync_to_thread=False),
}
