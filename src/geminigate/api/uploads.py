"""Scoped, disk-backed storage for multipart uploads.

Each upload is written to the uploads directory under a unique generated
name and deleted again when the request that owns it finishes, whatever
the outcome.  Route handlers use :func:`stored_upload` as an
``async with`` block around their whole body:

    async with stored_upload(image, config.uploads_dir) as stored:
        text = await provider.generate_from_file(stored.path, stored.mime_type, prompt)

Deletion runs in the ``finally`` clause of the context manager.  A failure
while deleting is not caught.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from geminigate.api.payloads import DEFAULT_MIME_TYPE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredUpload:
    """An upload persisted to local disk for the lifetime of one request.

    Attributes:
        path: Location of the temporary file.
        mime_type: Content type reported by the client.
        filename: Original client-side file name (informational only).
    """

    path: Path
    mime_type: str
    filename: str | None = None

    async def read_bytes(self) -> bytes:
        """Read the whole file into memory without blocking the event loop."""
        return await run_in_threadpool(self.path.read_bytes)


def _write_upload(upload: UploadFile, dest: Path) -> None:
    upload.file.seek(0)
    with open(dest, "wb") as handle:
        shutil.copyfileobj(upload.file, handle)


@asynccontextmanager
async def stored_upload(upload: UploadFile, uploads_dir: Path) -> AsyncIterator[StoredUpload]:
    """Persist *upload* under *uploads_dir* and delete it on exit.

    Args:
        upload: The multipart file received by FastAPI.
        uploads_dir: Directory for temporary uploads.  Created if missing.

    Yields:
        A :class:`StoredUpload` describing the file on disk.
    """
    uploads_dir.mkdir(parents=True, exist_ok=True)
    dest = uploads_dir / uuid.uuid4().hex

    try:
        await run_in_threadpool(_write_upload, upload, dest)
        logger.debug(f"Stored upload {upload.filename!r} at {dest}")
        yield StoredUpload(
            path=dest,
            mime_type=upload.content_type or DEFAULT_MIME_TYPE,
            filename=upload.filename,
        )
    finally:
        if dest.exists():
            dest.unlink()
            logger.debug(f"Removed temporary upload {dest}")
