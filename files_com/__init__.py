"""Files.com storage bridge.

Typical use::

    from files_com import ListFilesConfig, create_files_com_service

    async with create_files_com_service() as files:
        entries = await files.list_files(ListFilesConfig(directory_path="inbox"))
"""

from files_com.api.services.storage import (
    ApiResult,
    FileAttributes,
    FileDeleteError,
    FileDownloadError,
    FileDownloadToDiskError,
    FileListError,
    FileListValidationError,
    FileMoveError,
    FileResponse,
    FilesComApiService,
    FilesComConfigurationError,
    FilesComError,
    FilesComService,
    FilesComServices,
    FileUploadError,
    FolderCreateError,
    FolderListError,
    ListFilesConfig,
    NetworkOptions,
    SortBy,
    create_files_com_api_service,
    create_files_com_service,
    create_files_com_services,
    create_files_com_services_async,
    validate_configuration,
)
from files_com.core.config import FilesComSettings, get_settings
from files_com.core.enums import FileType, SortDirection

__all__ = [
    "ApiResult",
    "FileAttributes",
    "FileDeleteError",
    "FileDownloadError",
    "FileDownloadToDiskError",
    "FileListError",
    "FileListValidationError",
    "FileMoveError",
    "FileResponse",
    "FileType",
    "FileUploadError",
    "FilesComApiService",
    "FilesComConfigurationError",
    "FilesComError",
    "FilesComService",
    "FilesComServices",
    "FilesComSettings",
    "FolderCreateError",
    "FolderListError",
    "ListFilesConfig",
    "NetworkOptions",
    "SortBy",
    "SortDirection",
    "create_files_com_api_service",
    "create_files_com_service",
    "create_files_com_services",
    "create_files_com_services_async",
    "get_settings",
    "validate_configuration",
]
