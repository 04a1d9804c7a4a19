"""API services module."""

from .storage import (
    FilesComApiService,
    FilesComError,
    FilesComService,
    FilesComServices,
    create_files_com_services,
)

__all__ = [
    "FilesComApiService",
    "FilesComError",
    "FilesComService",
    "FilesComServices",
    "create_files_com_services",
]
