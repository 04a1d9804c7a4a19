"""Files.com facade service implementation."""

from __future__ import annotations

import inspect
import logging
from pathlib import Path
from typing import Any

import aiofiles
import httpx

from files_com.core.config import FilesComSettings
from files_com.core.enums import SortDirection

from .base import BinarySink
from .client import FilesComClient, NetworkOptions
from .exceptions import (
    FileDeleteError,
    FileDownloadError,
    FileDownloadToDiskError,
    FileListError,
    FileListValidationError,
    FileMoveError,
    FileNotFoundOnRemoteError,
    FileUploadError,
    FilesComError,
    FolderCreateError,
    FolderListError,
)
from .local import local_file_name, remove_partial_file
from .schemas import SORTABLE_FIELDS, FileResponse, ListFilesConfig, SortBy

logger = logging.getLogger(__name__)


def sort_files(items: list[FileResponse], sort_by: SortBy) -> list[FileResponse]:
    """Sort entries on one attribute field.

    Entries missing the field keep their listing order after the sorted ones,
    in either direction.
    """
    present = [item for item in items if getattr(item.attributes, sort_by.field) is not None]
    missing = [item for item in items if getattr(item.attributes, sort_by.field) is None]
    present.sort(
        key=lambda item: getattr(item.attributes, sort_by.field),
        reverse=sort_by.direction == SortDirection.DESC,
    )
    return present + missing


class FilesComService:
    """Facade over the Files.com API.

    Exposes upload, download, move, delete and listing operations. Every
    failure surfaces as a typed ``FilesComError`` subclass carrying the
    original exception as ``cause``.
    """

    def __init__(
        self,
        settings: FilesComSettings,
        *,
        network: NetworkOptions | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            settings: Validated Files.com settings.
            network: Retry, timeout and pagination options.
            transport: Optional httpx transport (used by tests).
        """
        self._settings = settings
        self._client = FilesComClient(
            settings.api_root,
            network=network or NetworkOptions(),
            transport=transport,
        )
        if settings.api_key:
            self.authenticate_with_api_key(settings.api_key)

    async def __aenter__(self) -> FilesComService:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def settings(self) -> FilesComSettings:
        return self._settings

    async def connect(self) -> None:
        """Open the HTTP client and create a session if logging in by password."""
        await self._client.connect()
        if (
            not self._settings.api_key
            and self._settings.has_session_credentials
            and self._client.session_id is None
        ):
            await self.authenticate_with_session(
                self._settings.username or "",
                self._settings.password or "",
            )

    async def close(self) -> None:
        await self._client.close()

    def authenticate_with_api_key(self, api_key: str) -> None:
        self._client.set_api_key(api_key)

    async def authenticate_with_session(self, username: str, password: str) -> str:
        """Create a Files.com session and use it for subsequent calls.

        Returns:
            The session id.

        Raises:
            FilesComError: If the session can't be created.
        """
        try:
            session_id = await self._client.create_session(username, password)
        except Exception as e:
            logger.error(f"Files.com session login failed for {username}: {e}")
            raise FilesComError(f"Error creating Files.com session: {e}", cause=e) from e

        self._client.set_session_id(session_id)
        logger.info(f"Authenticated with Files.com session for {username}")
        return session_id

    async def file_exists(self, path: str) -> bool:
        try:
            await self._client.find(path)
            return True
        except FileNotFoundOnRemoteError:
            return False
        except Exception as e:
            logger.error(f"Files.com exists check failed for {path}: {e}")
            raise FilesComError(f"Error checking file at path {path}: {e}", cause=e) from e

    async def create_directory(self, path: str) -> None:
        try:
            await self._client.create_folder(path)
            logger.info(f"Created folder on Files.com: {path}")
        except Exception as e:
            logger.error(f"Files.com folder creation failed for {path}: {e}")
            raise FolderCreateError(f"Error creating folder {path}: {e}", cause=e) from e

    async def list_directories(self, path: str) -> list[FileResponse]:
        try:
            entries = await self._client.list_folder(path)
        except Exception as e:
            logger.error(f"Files.com folder listing failed for {path}: {e}")
            raise FolderListError(f"Error listing folders in {path}: {e}", cause=e) from e

        return [entry for entry in entries if entry.attributes.is_directory]

    async def upload_file(self, content: str | bytes, destination_path: str) -> str:
        data = content.encode("utf-8") if isinstance(content, str) else content
        try:
            uploaded = await self._client.upload(destination_path, data)
        except Exception as e:
            logger.error(f"Files.com upload failed for {destination_path}: {e}")
            raise FileUploadError(
                f"Error uploading file to path {destination_path}: {e}",
                cause=e,
            ) from e

        logger.info(f"Uploaded file to Files.com: {destination_path} ({len(data)} bytes)")
        return uploaded.attributes.path or destination_path

    async def list_files(self, config: ListFilesConfig) -> list[FileResponse] | None:
        """List files in a directory.

        Returns None (not an empty list) when the directory has no entries.
        Zero-size entries are dropped when ``exclude_zero_size`` is set, then
        the result is sorted if ``sort_by`` is given.
        """
        if not config.directory_path:
            raise FileListValidationError("Either path or folder must be provided in the config")

        normalized_path = config.directory_path.strip()
        if not normalized_path:
            raise FileListValidationError("Invalid path or folder provided in the config")

        sort_by = config.sort_by
        if sort_by is not None and sort_by.field not in SORTABLE_FIELDS:
            raise FileListValidationError(f"Cannot sort by unknown field '{sort_by.field}'")

        try:
            items = await self._client.list_folder(normalized_path)
        except Exception as e:
            logger.error(f"Files.com listing failed for {normalized_path}: {e}")
            raise FileListError(
                f"Error listing files from Files.com for path {normalized_path}: {e}",
                cause=e,
            ) from e

        if not items:
            return None

        if config.exclude_zero_size:
            items = [item for item in items if (item.attributes.size or 0) > 0]

        if sort_by is not None:
            items = sort_files(items, sort_by)

        return items

    async def _resolve_download(self, path: str) -> FileResponse:
        """Locate a file and fetch its pre-signed download link."""
        found = await self._client.find(path)
        logger.info(f"file found: {found.attributes.display_name} size: {found.attributes.size}")
        downloadable = await self._client.get_download(found.attributes.path or path)
        if not downloadable.attributes.download_uri:
            raise FilesComError(f"No download link returned for {path}")
        return downloadable

    async def download_file_as_string(self, path: str) -> str:
        try:
            downloadable = await self._resolve_download(path)
            uri = downloadable.attributes.download_uri or ""
            chunks = [chunk async for chunk in self._client.stream(uri)]
            return b"".join(chunks).decode("utf-8")
        except Exception as e:
            logger.error(f"Files.com download failed for {path}: {e}")
            raise FilesComError(
                f"Error downloading file from Files.com for path {path}: {e}",
                cause=e,
            ) from e

    async def download_file_to_stream(self, path: str, sink: BinarySink) -> None:
        logger.info(f"Downloading file from Files.com for identifier {path}")
        try:
            downloadable = await self._resolve_download(path)
            async for chunk in self._client.stream(downloadable.attributes.download_uri or ""):
                written = sink.write(chunk)
                if inspect.isawaitable(written):
                    await written
        except Exception as e:
            logger.error(f"Files.com stream download failed for {path}: {e}")
            raise FileDownloadError(
                f"Error downloading file from Files.com for identifier {path}: {e}",
                cause=e,
            ) from e

        logger.info(f"file downloaded {path}")

    async def download_file_to_disk(self, path: str, local_dir: str | None = None) -> str:
        target_dir = self._settings.local_storage_path if local_dir is None else local_dir
        if not target_dir:
            raise FileDownloadToDiskError("localStoragePath is required")

        local_file_path: Path | None = None
        try:
            directory = Path(target_dir)
            directory.mkdir(parents=True, exist_ok=True)

            logger.info(f"Downloading file from Files.com for path {path}")
            downloadable = await self._resolve_download(path)
            name = local_file_name(downloadable.attributes.display_name, path)
            local_file_path = directory / name

            async with aiofiles.open(local_file_path, "wb") as f:
                async for chunk in self._client.stream(downloadable.attributes.download_uri or ""):
                    await f.write(chunk)
        except Exception as e:
            logger.error(f"Files.com download to disk failed for {path}: {e}")
            await remove_partial_file(local_file_path)
            raise FileDownloadToDiskError(
                f"Error downloading file from Files.com for path {path}: {e}",
                cause=e,
            ) from e

        logger.info(f"File downloaded and saved to {local_file_path}")
        return str(local_file_path)

    async def move_file(self, current_path: str, destination_path: str) -> None:
        try:
            found = await self._client.find(current_path)
            await self._client.move(found.attributes.path or current_path, destination_path)
        except Exception as e:
            logger.error(f"Files.com move failed from {current_path} to {destination_path}: {e}")
            raise FileMoveError(
                f"Error moving file from {current_path} to {destination_path} on Files.com: {e}",
                cause=e,
            ) from e

        logger.info(f"Moved file on Files.com: {current_path} -> {destination_path}")

    async def delete_file(self, path: str) -> None:
        try:
            await self._client.delete(path)
        except Exception as e:
            logger.error(f"Files.com delete failed for {path}: {e}")
            raise FileDeleteError(f"Error deleting file with identifier {path}: {e}", cause=e) from e

        logger.info(f"Deleted file from Files.com: {path}")
