"""Files.com storage exceptions."""

from __future__ import annotations


class FilesComError(Exception):
    """Base exception for Files.com operations."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class FilesComConfigurationError(FilesComError):
    """Raised when the integration is enabled with incomplete configuration."""


class FileUploadError(FilesComError):
    """Raised when file upload fails."""


class FileDownloadError(FilesComError):
    """Raised when file download fails."""


class FileDownloadToDiskError(FilesComError):
    """Raised when a file cannot be downloaded to local disk."""


class FileMoveError(FilesComError):
    """Raised when moving a file fails."""


class FileDeleteError(FilesComError):
    """Raised when file deletion fails."""


class FileListError(FilesComError):
    """Raised when listing files fails."""


class FileListValidationError(FileListError):
    """Raised when list parameters are invalid (blank path, unknown sort field)."""


class FolderListError(FilesComError):
    """Raised when listing folders fails."""


class FolderCreateError(FilesComError):
    """Raised when creating a folder fails."""


class FilesComAPIError(FilesComError):
    """Raised when the Files.com API returns an error response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class FileNotFoundOnRemoteError(FilesComAPIError):
    """Raised when the requested path doesn't exist on Files.com."""
