"""Files.com storage service module.

Provides the Files.com facade, the raw REST client and the factories that
validate configuration before building them.
"""

from .api_service import FilesComApiService
from .base import BinarySink, FilesComServiceProtocol
from .client import FilesComClient, NetworkOptions
from .exceptions import (
    FileDeleteError,
    FileDownloadError,
    FileDownloadToDiskError,
    FileListError,
    FileListValidationError,
    FileMoveError,
    FileNotFoundOnRemoteError,
    FilesComAPIError,
    FilesComConfigurationError,
    FilesComError,
    FileUploadError,
    FolderCreateError,
    FolderListError,
)
from .factory import (
    FilesComServices,
    create_files_com_api_service,
    create_files_com_service,
    create_files_com_services,
    create_files_com_services_async,
    validate_configuration,
)
from .result import ApiResult
from .schemas import (
    ErrorResponse,
    FileAttributes,
    FilePreview,
    FileResponse,
    ListFilesConfig,
    SortBy,
)
from .service import FilesComService, sort_files

__all__ = [
    # Protocol
    "BinarySink",
    "FilesComServiceProtocol",
    # Implementation
    "FilesComApiService",
    "FilesComClient",
    "FilesComService",
    "FilesComServices",
    "NetworkOptions",
    "sort_files",
    # Factories
    "create_files_com_api_service",
    "create_files_com_service",
    "create_files_com_services",
    "create_files_com_services_async",
    "validate_configuration",
    # Schemas
    "ApiResult",
    "ErrorResponse",
    "FileAttributes",
    "FilePreview",
    "FileResponse",
    "ListFilesConfig",
    "SortBy",
    # Exceptions
    "FileDeleteError",
    "FileDownloadError",
    "FileDownloadToDiskError",
    "FileListError",
    "FileListValidationError",
    "FileMoveError",
    "FileNotFoundOnRemoteError",
    "FilesComAPIError",
    "FilesComConfigurationError",
    "FilesComError",
    "FileUploadError",
    "FolderCreateError",
    "FolderListError",
]
