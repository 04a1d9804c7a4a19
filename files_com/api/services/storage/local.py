"""Local filesystem helpers for downloads."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

import aiofiles.os as aioos

from .exceptions import FilesComError

logger = logging.getLogger(__name__)


def local_file_name(display_name: str | None, path: str) -> str:
    """Final component of a remote name, safe to join onto a local directory.

    Falls back to the last segment of ``path`` when the display name has no
    usable component.

    Raises:
        FilesComError: If neither name yields a usable file name.
    """
    for candidate in (display_name, path):
        name = PurePosixPath((candidate or "").replace("\\", "/")).name
        if name not in ("", ".", ".."):
            return name
    raise FilesComError(f"No usable local file name for {path}")


async def remove_partial_file(local_file_path: Path | None) -> None:
    """Delete a download left incomplete by a failed transfer."""
    if local_file_path is None or not await aioos.path.exists(local_file_path):
        return
    await aioos.unlink(local_file_path)
    logger.warning(f"Removed partial download {local_file_path}")
