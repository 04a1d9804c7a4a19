"""Files.com service protocol definition."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .schemas import FileResponse, ListFilesConfig


class BinarySink(Protocol):
    """Writable destination for downloaded bytes (sync or async ``write``)."""

    def write(self, data: bytes, /) -> int | None | Awaitable[int | None]: ...


@runtime_checkable
class FilesComServiceProtocol(Protocol):
    """Protocol for the Files.com facade.

    This is the boundary application code depends on. Method names,
    parameter order and the ``None`` result of an empty listing are part
    of the contract.
    """

    async def upload_file(self, content: str | bytes, destination_path: str) -> str:
        """Upload content to a remote path.

        Args:
            content: Text (encoded as UTF-8) or raw bytes.
            destination_path: Remote path including the file name.

        Returns:
            Remote path of the uploaded file.

        Raises:
            FileUploadError: If the upload fails.
        """
        ...

    async def download_file_as_string(self, path: str) -> str:
        """Download a file and return it as text.

        Raises:
            FilesComError: If the file can't be located or downloaded.
        """
        ...

    async def download_file_to_stream(self, path: str, sink: BinarySink) -> None:
        """Download a file and write its bytes to ``sink``.

        Raises:
            FileDownloadError: If the download fails.
        """
        ...

    async def download_file_to_disk(self, path: str, local_dir: str | None = None) -> str:
        """Download a file into a local directory, named after the remote file.

        Args:
            path: Remote file path.
            local_dir: Target directory, created if missing. Defaults to the
                configured local storage path.

        Returns:
            Local path of the written file.

        Raises:
            FileDownloadToDiskError: If the directory is empty, the file is
                missing, or the download fails.
        """
        ...

    async def move_file(self, current_path: str, destination_path: str) -> None:
        """Move a file to a new remote path.

        Raises:
            FileMoveError: If the move fails.
        """
        ...

    async def delete_file(self, path: str) -> None:
        """Delete a remote file.

        Raises:
            FileDeleteError: If deletion fails.
        """
        ...

    async def list_files(self, config: ListFilesConfig) -> list[FileResponse] | None:
        """List files under a directory.

        Returns:
            Filtered and sorted entries, or None if the directory is empty.

        Raises:
            FileListValidationError: If the path is blank or the sort field unknown.
            FileListError: If the listing fails.
        """
        ...

    async def list_directories(self, path: str) -> list[FileResponse]:
        """List only the folders directly under ``path``.

        Raises:
            FolderListError: If the listing fails.
        """
        ...

    async def file_exists(self, path: str) -> bool:
        """Check if a remote path exists."""
        ...

    async def create_directory(self, path: str) -> None:
        """Create a remote folder.

        Raises:
            FolderCreateError: If creation fails.
        """
        ...

    async def close(self) -> None:
        """Close any open connections."""
        ...
