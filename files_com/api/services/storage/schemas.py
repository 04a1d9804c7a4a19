"""Files.com storage DTOs using msgspec."""

from __future__ import annotations

from typing import Any

import msgspec

from files_com.core.enums import FileType, SortDirection


class FilePreview(msgspec.Struct, frozen=True, kw_only=True):
    """Preview rendition attached to a file."""

    id: int | None = None
    status: str | None = None  # "complete" once rendered
    download_uri: str | None = None
    type: str | None = None
    size: int | str | None = None


class FileAttributes(msgspec.Struct, frozen=True, kw_only=True):
    """File metadata as returned by the Files.com API.

    Unknown fields in API payloads are ignored on decode.
    """

    path: str = ""  # "path/file.txt"
    display_name: str = ""  # "file.txt"
    type: str = FileType.FILE.value
    size: int | None = 0
    created_at: str | None = None  # "2000-01-01T01:00:00Z"
    mtime: str | None = None
    provided_mtime: str | None = None
    crc32: str | None = None
    md5: str | None = None
    mime_type: str | None = None
    region: str | None = None
    permissions: str | None = None  # "rwd"
    subfolders_locked: bool | None = msgspec.field(default=None, name="subfolders_locked?")
    download_uri: str | None = None
    priority_color: str | None = None
    preview_id: int | None = None
    preview: FilePreview | None = None

    @property
    def is_directory(self) -> bool:
        """Check if this entry is a folder."""
        return self.type == FileType.DIRECTORY.value


# Nested preview records have no ordering
SORTABLE_FIELDS = frozenset(FileAttributes.__struct_fields__) - {"preview"}


class FileResponse(msgspec.Struct, kw_only=True):
    """A file entry plus free-form options."""

    attributes: FileAttributes
    options: dict[str, Any] = msgspec.field(default_factory=dict)

    @classmethod
    def from_attributes(cls, attributes: FileAttributes) -> FileResponse:
        """Wrap decoded attributes with empty options."""
        return cls(attributes=attributes)


class SortBy(msgspec.Struct, kw_only=True):
    """Sort configuration for listings."""

    field: str  # Any FileAttributes field name
    direction: SortDirection = SortDirection.ASC


class ListFilesConfig(msgspec.Struct, kw_only=True):
    """Options shaping a single list call."""

    directory_path: str
    sort_by: SortBy | None = None
    exclude_zero_size: bool = False


class ErrorResponse(msgspec.Struct, kw_only=True):
    """Error response."""

    error: str
    detail: str | None = None


def decode_file(content: bytes) -> FileResponse:
    """Decode a single file payload."""
    return FileResponse.from_attributes(msgspec.json.decode(content, type=FileAttributes))


def decode_file_list(content: bytes) -> list[FileResponse]:
    """Decode a folder listing payload."""
    items = msgspec.json.decode(content, type=list[FileAttributes])
    return [FileResponse.from_attributes(item) for item in items]
