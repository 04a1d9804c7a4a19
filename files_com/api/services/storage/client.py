"""Async HTTP client for the Files.com REST API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from files_com.core.enums import FileAction

from .exceptions import FilesComAPIError, FilesComError, FileNotFoundOnRemoteError
from .schemas import FileResponse, decode_file, decode_file_list

logger = logging.getLogger(__name__)

# Constants
DEFAULT_API_ROOT = "https://app.files.com/api/rest/v1"
API_KEY_HEADER = "X-FilesAPI-Key"
SESSION_HEADER = "X-FilesAPI-Auth"
CURSOR_HEADERS = ("X-Files-Cursor-Next", "X-Files-Cursor")
DEFAULT_PAGE_SIZE = 1000


@dataclass(frozen=True)
class NetworkOptions:
    """Static network behaviour applied to every request."""

    max_network_retries: int = 3
    min_network_retry_delay: float = 0.5  # seconds
    max_network_retry_delay: float = 1.5  # seconds
    network_timeout: float = 30.0  # seconds
    auto_paginate: bool = True

    def retry_delay(self, attempt: int) -> float:
        """Exponential backoff clamped to the configured bounds."""
        return min(self.min_network_retry_delay * (2**attempt), self.max_network_retry_delay)


def quote_path(path: str) -> str:
    """Encode a remote path for use in an endpoint URL."""
    return quote(path.strip("/"), safe="/")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        for key in ("error", "message", "title", "detail"):
            if body.get(key):
                return str(body[key])
    return response.text


class FilesComClient:
    """Async HTTP client for Files.com.

    Handles authentication headers, retries with backoff on transport
    errors and 5xx responses, and cursor pagination of folder listings.
    """

    def __init__(
        self,
        api_root: str = DEFAULT_API_ROOT,
        *,
        api_key: str | None = None,
        network: NetworkOptions | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_root = api_root.rstrip("/")
        self._network = network or NetworkOptions()
        self._transport = transport
        self._api_key = api_key
        self._session_id: str | None = None
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> FilesComClient:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def connect(self) -> None:
        """Initialize HTTP client connection."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._api_root,
                timeout=httpx.Timeout(self._network.network_timeout),
                transport=self._transport,
            )
            logger.info(f"Files.com client connected to {self._api_root}")

    async def close(self) -> None:
        """Close HTTP client connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Files.com client disconnected")

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, raising if not connected."""
        if self._client is None:
            raise FilesComError("Client not connected. Call connect() first.")
        return self._client

    @property
    def api_root(self) -> str:
        return self._api_root

    @property
    def network(self) -> NetworkOptions:
        return self._network

    @property
    def session_id(self) -> str | None:
        return self._session_id

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    def set_session_id(self, session_id: str) -> None:
        self._session_id = session_id

    def auth_headers(self) -> dict[str, str]:
        """Headers identifying the caller; the API key wins over a session."""
        if self._api_key:
            return {API_KEY_HEADER: self._api_key}
        if self._session_id:
            return {SESSION_HEADER: self._session_id}
        return {}

    async def request(
        self,
        method: str,
        url: str,
        *,
        authenticated: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a request with retry logic.

        Relative URLs resolve against the API root. Unauthenticated requests
        are used for pre-signed upload and download URIs.

        Raises:
            FileNotFoundOnRemoteError: On a 404 response.
            FilesComAPIError: On any other error response or transport failure.
        """
        headers = kwargs.pop("headers", {})
        if authenticated:
            headers.update(self.auth_headers())

        retries = self._network.max_network_retries
        for attempt in range(retries + 1):
            try:
                response = await self.client.request(method, url, headers=headers, **kwargs)
            except httpx.RequestError as e:
                if attempt < retries:
                    logger.warning(f"Request failed: {e}, retry {attempt + 1}/{retries}")
                    await asyncio.sleep(self._network.retry_delay(attempt))
                    continue
                raise FilesComAPIError(f"Request to {url} failed: {e}", cause=e) from e

            if response.status_code >= 500 and attempt < retries:
                logger.warning(
                    f"API returned {response.status_code}, retry {attempt + 1}/{retries}"
                )
                await asyncio.sleep(self._network.retry_delay(attempt))
                continue

            if response.status_code == 404:
                raise FileNotFoundOnRemoteError(
                    f"Not found: {url}",
                    status_code=response.status_code,
                )
            if response.is_error:
                message = _error_message(response)
                logger.error(f"Files.com {method} {url} failed: {response.status_code} - {message}")
                raise FilesComAPIError(message, status_code=response.status_code)
            return response

        # Loop always returns or raises
        raise FilesComAPIError(f"Request to {url} failed")

    async def stream(self, url: str) -> AsyncIterator[bytes]:
        """Stream the body of a pre-signed URL in chunks."""
        try:
            async with self.client.stream("GET", url) as response:
                if response.status_code == 404:
                    raise FileNotFoundOnRemoteError(
                        f"Not found: {url}", status_code=response.status_code
                    )
                if response.is_error:
                    await response.aread()
                    raise FilesComAPIError(
                        _error_message(response), status_code=response.status_code
                    )
                async for chunk in response.aiter_bytes():
                    yield chunk
        except httpx.RequestError as e:
            raise FilesComAPIError(f"Streaming {url} failed: {e}", cause=e) from e

    # -------------------------------------------------------------------------
    # Resource helpers
    # -------------------------------------------------------------------------

    async def create_session(self, username: str, password: str) -> str:
        """Create a login session and return its id."""
        response = await self.request(
            "POST",
            "/sessions",
            authenticated=False,
            json={"username": username, "password": password},
        )
        session_id = response.json().get("id")
        if not session_id:
            raise FilesComAPIError("Session response did not include an id")
        return str(session_id)

    async def list_folder(self, path: str, per_page: int = DEFAULT_PAGE_SIZE) -> list[FileResponse]:
        """List all entries in a folder, following cursors when auto-paginating."""
        entries: list[FileResponse] = []
        cursor: str | None = None

        while True:
            params: dict[str, Any] = {"per_page": per_page}
            if cursor:
                params["cursor"] = cursor

            response = await self.request("GET", f"/folders/{quote_path(path)}", params=params)
            entries.extend(decode_file_list(response.content))

            cursor = next(
                (response.headers[h] for h in CURSOR_HEADERS if response.headers.get(h)),
                None,
            )
            if not cursor or not self._network.auto_paginate:
                break

        return entries

    async def find(self, path: str) -> FileResponse:
        """Get file metadata without a download link."""
        response = await self.request("GET", f"/file_actions/metadata/{quote_path(path)}")
        return decode_file(response.content)

    async def get_download(self, path: str) -> FileResponse:
        """Get file metadata including a pre-signed ``download_uri``."""
        response = await self.request("GET", f"/files/{quote_path(path)}")
        return decode_file(response.content)

    async def move(self, path: str, destination: str) -> None:
        await self.request(
            "POST",
            f"/file_actions/move/{quote_path(path)}",
            json={"destination": destination},
        )

    async def delete(self, path: str) -> None:
        await self.request("DELETE", f"/files/{quote_path(path)}")

    async def create_folder(self, path: str) -> FileResponse:
        response = await self.request("POST", f"/folders/{quote_path(path)}")
        return decode_file(response.content)

    async def upload(self, path: str, data: bytes) -> FileResponse:
        """Upload bytes in a single part: begin, PUT, then finalize."""
        response = await self.request(
            "POST",
            f"/file_actions/begin_upload/{quote_path(path)}",
            json={"size": len(data)},
        )
        parts = response.json()
        part = parts[0] if isinstance(parts, list) else parts

        await self.request(
            part.get("http_method", "PUT").upper(),
            part["upload_uri"],
            authenticated=False,
            content=data,
            headers={"Content-Length": str(len(data)), **(part.get("headers") or {})},
        )

        response = await self.request(
            "POST",
            f"/files/{quote_path(path)}",
            json={"action": FileAction.END.value, "ref": part["ref"]},
        )
        return decode_file(response.content)
