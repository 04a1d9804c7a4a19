"""Tests for local download helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from files_com.api.services.storage import FilesComError
from files_com.api.services.storage.local import local_file_name, remove_partial_file


class TestLocalFileName:
    """Tests for reducing remote names to a local file name."""

    @pytest.mark.parametrize(
        ("display_name", "expected"),
        [
            ("report.csv", "report.csv"),
            ("/abs/x", "x"),
            ("../../etc/passwd", "passwd"),
            ("nested/dir/report.csv", "report.csv"),
            ("..\\..\\win.ini", "win.ini"),
        ],
    )
    def test_keeps_final_component(self, display_name: str, expected: str) -> None:
        assert local_file_name(display_name, "inbox/fallback.csv") == expected

    @pytest.mark.parametrize("display_name", [None, "", ".", "..", "a/.."])
    def test_falls_back_to_remote_path(self, display_name: str | None) -> None:
        assert local_file_name(display_name, "inbox/fallback.csv") == "fallback.csv"

    def test_no_usable_name(self) -> None:
        with pytest.raises(FilesComError, match="No usable local file name"):
            local_file_name("..", "/")


class TestRemovePartialFile:
    @pytest.mark.asyncio
    async def test_removes_existing_file(self, tmp_path: Path) -> None:
        partial = tmp_path / "partial.bin"
        partial.write_bytes(b"half")

        await remove_partial_file(partial)

        assert not partial.exists()

    @pytest.mark.asyncio
    async def test_missing_or_unset_path(self, tmp_path: Path) -> None:
        await remove_partial_file(None)
        await remove_partial_file(tmp_path / "never-written.bin")

        assert list(tmp_path.iterdir()) == []
