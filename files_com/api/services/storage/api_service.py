"""Direct REST client for Files.com endpoints not covered by the facade."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import aiofiles
import httpx

from files_com.core.config import FilesComSettings
from files_com.core.enums import FileAction

from .client import DEFAULT_API_ROOT, FilesComClient, NetworkOptions, quote_path
from .exceptions import FileDownloadError, FileMoveError, FileUploadError, FolderListError
from .local import local_file_name, remove_partial_file
from .result import ApiResult
from .schemas import FileResponse, decode_file, decode_file_list

logger = logging.getLogger(__name__)

# Constants
DEFAULT_DOWNLOAD_DIR = "/usr/src/app/xml-downloads"
CSV_CONTENT_TYPE = "text/csv"
MAX_UPLOAD_SIZE = 200 * 1024 * 1024  # 200MB


class FilesComApiService:
    """Raw REST client rooted at the public Files.com API.

    Authenticates with the configured API key only. Listing and moving
    report failures through ``ApiResult``; everything else raises.
    """

    def __init__(
        self,
        settings: FilesComSettings,
        *,
        network: NetworkOptions | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._client = FilesComClient(
            DEFAULT_API_ROOT,
            api_key=settings.api_key,
            network=network or NetworkOptions(),
            transport=transport,
        )

    async def __aenter__(self) -> FilesComApiService:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def connect(self) -> None:
        await self._client.connect()

    async def close(self) -> None:
        await self._client.close()

    async def _request_file(self, path: str) -> FileResponse:
        response = await self._client.request("GET", f"/files/{quote_path(path)}")
        return decode_file(response.content)

    async def download_to_stream(self, path: str) -> AsyncIterator[bytes]:
        """Fetch file metadata, then return an iterator over the file bytes.

        Raises:
            ValueError: If ``path`` is empty.
            FileDownloadError: If the metadata request fails. Failures while
                iterating are raised from the iterator.
        """
        if not path:
            raise ValueError(f"{type(self).__name__} is missing a file path")

        try:
            file = await self._request_file(path)
        except Exception as e:
            logger.error(f"Error downloading file: {e}")
            raise FileDownloadError(f"Error downloading file {path}: {e}", cause=e) from e

        return self._iter_bytes(path, file.attributes.download_uri or "")

    async def _iter_bytes(self, path: str, uri: str) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._client.stream(uri):
                yield chunk
        except Exception as e:
            logger.error(f"Error downloading file: {e}")
            raise FileDownloadError(f"Error downloading file {path}: {e}", cause=e) from e

    async def download(self, path: str, local_dir: str = DEFAULT_DOWNLOAD_DIR) -> str:
        """Download a file into ``local_dir`` under its remote display name.

        Returns once the local file is fully written and closed.
        """
        if not path:
            raise ValueError(f"{type(self).__name__} is missing a file path or file name")

        local_file_path: Path | None = None
        try:
            file = await self._request_file(path)
            local_file_path = Path(local_dir) / local_file_name(file.attributes.display_name, path)
            async with aiofiles.open(local_file_path, "wb") as f:
                async for chunk in self._client.stream(file.attributes.download_uri or ""):
                    await f.write(chunk)
        except Exception as e:
            logger.error(f"Error downloading file: {e}")
            await remove_partial_file(local_file_path)
            raise FileDownloadError(f"Error downloading file {path}: {e}", cause=e) from e

        return str(local_file_path)

    async def list_folders_by_path(self, path: str) -> ApiResult[list[FileResponse]]:
        """List a folder's contents in a single request."""
        if not path:
            raise ValueError(f"{type(self).__name__} is missing a file path")

        try:
            response = await self._client.request("GET", f"/folders/{quote_path(path)}")
            return ApiResult.success(decode_file_list(response.content))
        except Exception as e:
            logger.error(f"Error listing folder {path}: {e}")
            return ApiResult.failure(
                FolderListError(f"Error listing folder {path}: {e}", cause=e)
            )

    async def move_file(self, name: str, from_path: str, to_path: str) -> ApiResult[str]:
        """Move ``from_path/name`` into ``to_path``.

        Returns:
            Result holding the destination path on success.
        """
        source = f"{from_path.rstrip('/')}/{name}"
        destination = f"{to_path.rstrip('/')}/{name}"
        try:
            await self._client.request(
                "POST",
                f"/file_actions/move/{quote_path(source)}",
                json={"destination": destination},
            )
            logger.info(f"Moved {source} to {destination}")
            return ApiResult.success(destination)
        except Exception as e:
            logger.error(f"Error moving {source} to {destination}: {e}")
            return ApiResult.failure(
                FileMoveError(f"Error moving file from {source} to {destination}: {e}", cause=e)
            )

    async def upload_csv_file(self, content: str, destination_path: str, name: str) -> FileResponse:
        """Upload CSV text in three steps: open an upload, PUT the bytes, finalize.

        A failure at any step aborts the remaining steps.

        Raises:
            FileUploadError: If any step fails.
        """
        data = content.encode("utf-8")
        if len(data) > MAX_UPLOAD_SIZE:
            raise FileUploadError(
                f"File size {len(data)} bytes exceeds maximum {MAX_UPLOAD_SIZE} bytes"
            )

        remote_path = f"{destination_path.rstrip('/')}/{name}"
        endpoint = f"/files/{quote_path(remote_path)}"
        try:
            response = await self._client.request(
                "POST", endpoint, json={"action": FileAction.PUT.value}
            )
            intent = response.json()
            if isinstance(intent, list):
                intent = intent[0]

            await self._client.request(
                "PUT",
                intent["upload_uri"],
                authenticated=False,
                content=data,
                headers={
                    "Content-Length": str(len(data)),
                    "Content-Type": CSV_CONTENT_TYPE,
                },
            )

            response = await self._client.request(
                "POST",
                endpoint,
                json={"action": FileAction.END.value, "ref": intent.get("ref")},
            )
        except Exception as e:
            logger.error(f"Error uploading CSV file: {e}")
            raise FileUploadError(
                f"Error uploading CSV file {name} to {destination_path}: {e}",
                cause=e,
            ) from e

        logger.info(f"Uploaded CSV file {name} to {destination_path} ({len(data)} bytes)")
        return decode_file(response.content)
