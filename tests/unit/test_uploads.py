"""Tests for geminigate.api.uploads — scoped temporary upload storage.

``stored_upload`` is an async context manager; each test drives it with
``asyncio.run`` so no async test plugin is needed.
"""

from __future__ import annotations

import asyncio
import io
from pathlib import Path

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from geminigate.api.uploads import StoredUpload, stored_upload


def _make_upload(
    content: bytes = b"file contents",
    filename: str = "sample.txt",
    content_type: str | None = "text/plain",
) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(file=io.BytesIO(content), filename=filename, headers=headers)


class TestStoredUpload:
    """Behaviour inside the ``async with`` block."""

    def test_file_written_inside_block(self, temp_dir: Path):
        seen: dict = {}

        async def run():
            async with stored_upload(_make_upload(b"abc"), temp_dir) as stored:
                seen["exists"] = stored.path.exists()
                seen["content"] = stored.path.read_bytes()

        asyncio.run(run())
        assert seen == {"exists": True, "content": b"abc"}

    def test_metadata(self, temp_dir: Path):
        seen: list[StoredUpload] = []

        async def run():
            async with stored_upload(_make_upload(filename="cat.png", content_type="image/png"), temp_dir) as stored:
                seen.append(stored)

        asyncio.run(run())
        assert seen[0].mime_type == "image/png"
        assert seen[0].filename == "cat.png"
        assert seen[0].path.parent == temp_dir

    def test_generated_name_not_client_name(self, temp_dir: Path):
        """The client-supplied name never reaches the file system."""
        seen: list[Path] = []

        async def run():
            async with stored_upload(_make_upload(filename="../../etc/passwd"), temp_dir) as stored:
                seen.append(stored.path)

        asyncio.run(run())
        assert seen[0].parent == temp_dir
        assert "passwd" not in seen[0].name

    def test_unique_names(self, temp_dir: Path):
        seen: list[Path] = []

        async def run():
            async with stored_upload(_make_upload(), temp_dir) as first:
                async with stored_upload(_make_upload(), temp_dir) as second:
                    seen.extend([first.path, second.path])

        asyncio.run(run())
        assert seen[0] != seen[1]

    def test_missing_content_type_defaults(self, temp_dir: Path):
        seen: list[str] = []

        async def run():
            async with stored_upload(_make_upload(content_type=None), temp_dir) as stored:
                seen.append(stored.mime_type)

        asyncio.run(run())
        assert seen == ["application/octet-stream"]

    def test_read_bytes(self, temp_dir: Path):
        seen: list[bytes] = []

        async def run():
            async with stored_upload(_make_upload(b"\x00\x01binary"), temp_dir) as stored:
                seen.append(await stored.read_bytes())

        asyncio.run(run())
        assert seen == [b"\x00\x01binary"]

    def test_creates_uploads_dir(self, temp_dir: Path):
        target = temp_dir / "nested" / "uploads"

        async def run():
            async with stored_upload(_make_upload(), target):
                pass

        asyncio.run(run())
        assert target.is_dir()


class TestCleanup:
    """The temporary file is removed on every exit path."""

    def test_removed_after_normal_exit(self, temp_dir: Path):
        seen: list[Path] = []

        async def run():
            async with stored_upload(_make_upload(), temp_dir) as stored:
                seen.append(stored.path)

        asyncio.run(run())
        assert not seen[0].exists()
        assert list(temp_dir.iterdir()) == []

    def test_removed_after_exception(self, temp_dir: Path):
        seen: list[Path] = []

        async def run():
            async with stored_upload(_make_upload(), temp_dir) as stored:
                seen.append(stored.path)
                raise RuntimeError("provider exploded")

        with pytest.raises(RuntimeError, match="provider exploded"):
            asyncio.run(run())
        assert not seen[0].exists()

    def test_file_already_gone_is_fine(self, temp_dir: Path):
        """If the body removed the file itself, exit does not fail."""

        async def run():
            async with stored_upload(_make_upload(), temp_dir) as stored:
                stored.path.unlink()

        asyncio.run(run())
        assert list(temp_dir.iterdir()) == []
