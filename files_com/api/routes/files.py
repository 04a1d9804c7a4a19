"""File API routes backed by the Files.com facade."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Annotated

import msgspec
from litestar import Controller, Response, delete, get, post
from litestar.enums import MediaType
from litestar.params import Parameter
from litestar.status_codes import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_502_BAD_GATEWAY,
)

from files_com.api.services.storage import (
    ErrorResponse,
    FileAttributes,
    FileListValidationError,
    FileNotFoundOnRemoteError,
    FilesComError,
    FilesComService,
    ListFilesConfig,
    SortBy,
)
from files_com.core.config import FilesComSettings
from files_com.core.enums import SortDirection

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Request / response schemas
# -----------------------------------------------------------------------------


class FileListResponse(msgspec.Struct, kw_only=True):
    """Listing result; ``items`` is null for an empty directory."""

    items: list[FileAttributes] | None
    count: int


class MoveRequest(msgspec.Struct, kw_only=True):
    current_path: str
    destination_path: str


class MessageResponse(msgspec.Struct, kw_only=True):
    message: str


def _error_response(error: FilesComError, title: str) -> Response[ErrorResponse]:
    if isinstance(error, FileListValidationError):
        status_code = HTTP_400_BAD_REQUEST
    elif isinstance(error.cause, FileNotFoundOnRemoteError):
        status_code = HTTP_404_NOT_FOUND
    else:
        status_code = HTTP_502_BAD_GATEWAY
    return Response(
        content=ErrorResponse(error=title, detail=str(error)),
        status_code=status_code,
    )


RemotePath = Annotated[str, Parameter(description="Remote Files.com path")]


# -----------------------------------------------------------------------------
# Controller
# -----------------------------------------------------------------------------


class FilesController(Controller):
    """Files.com file endpoints."""

    path = "/api/v1/files"
    tags: Sequence[str] | None = ["Files"]

    @get("/")
    async def list_files(
        self,
        files_com: FilesComService,
        path: RemotePath,
        sort_field: Annotated[
            str | None,
            Parameter(description="FileAttributes field to sort on"),
        ] = None,
        direction: Annotated[
            SortDirection,
            Parameter(description="Sort direction"),
        ] = SortDirection.ASC,
        exclude_zero_size: Annotated[
            bool,
            Parameter(description="Drop empty files"),
        ] = False,
    ) -> Response[FileListResponse | ErrorResponse]:
        """List files in a remote directory."""
        config = ListFilesConfig(
            directory_path=path,
            sort_by=SortBy(field=sort_field, direction=direction) if sort_field else None,
            exclude_zero_size=exclude_zero_size,
        )
        try:
            items = await files_com.list_files(config)
        except FilesComError as e:
            logger.warning(f"Listing failed: {e}")
            return _error_response(e, "List failed")

        return Response(
            content=FileListResponse(
                items=None if items is None else [item.attributes for item in items],
                count=len(items or []),
            ),
            status_code=HTTP_200_OK,
        )

    @get("/directories")
    async def list_directories(
        self,
        files_com: FilesComService,
        path: RemotePath,
    ) -> Response[FileListResponse | ErrorResponse]:
        """List folders directly under a remote path."""
        try:
            directories = await files_com.list_directories(path)
        except FilesComError as e:
            logger.warning(f"Folder listing failed: {e}")
            return _error_response(e, "Folder list failed")

        return Response(
            content=FileListResponse(
                items=[item.attributes for item in directories],
                count=len(directories),
            ),
            status_code=HTTP_200_OK,
        )

    @get("/content")
    async def download_content(
        self,
        files_com: FilesComService,
        path: RemotePath,
    ) -> Response[str | ErrorResponse]:
        """Download a remote file as text."""
        try:
            text = await files_com.download_file_as_string(path)
        except FilesComError as e:
            logger.warning(f"Download failed: {e}")
            return _error_response(e, "Download failed")

        return Response(content=text, media_type=MediaType.TEXT, status_code=HTTP_200_OK)

    @post("/move", status_code=HTTP_200_OK)
    async def move_file(
        self,
        files_com: FilesComService,
        data: MoveRequest,
    ) -> Response[MessageResponse | ErrorResponse]:
        """Move a remote file."""
        try:
            await files_com.move_file(data.current_path, data.destination_path)
        except FilesComError as e:
            logger.warning(f"Move failed: {e}")
            return _error_response(e, "Move failed")

        return Response(
            content=MessageResponse(message=f"Moved to {data.destination_path}"),
            status_code=HTTP_200_OK,
        )

    @delete("/", status_code=HTTP_200_OK)
    async def delete_file(
        self,
        files_com: FilesComService,
        path: RemotePath,
    ) -> Response[MessageResponse | ErrorResponse]:
        """Delete a remote file."""
        try:
            await files_com.delete_file(path)
        except FilesComError as e:
            logger.warning(f"Delete failed: {e}")
            return _error_response(e, "Delete failed")

        return Response(
            content=MessageResponse(message=f"Deleted {path}"),
            status_code=HTTP_200_OK,
        )


class HealthController(Controller):
    """Service health endpoint."""

    path = "/health"
    tags: Sequence[str] | None = ["Health"]

    @get("/")
    async def health(self, settings: FilesComSettings) -> dict[str, object]:
        """Report whether the Files.com integration is enabled."""
        return {"status": "ok", "files_com_enabled": settings.enable}
