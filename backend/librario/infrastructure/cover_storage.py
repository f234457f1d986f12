"""Cover Storage — persists uploaded book covers and returns their public URL.

Invariants:
    - Stored name is "<epoch-ms>-<original name with whitespace as _>"
    - Files land under <media_dir>/portadas and are served from <media_url_prefix>/portadas
    - Only the extensions listed in Settings.cover_extensions are accepted
    - delete() only touches files inside the covers folder

Design Decisions:
    - Local disk behind StaticFiles instead of a cloud bucket: same URL contract,
      no third-party credentials needed to run the API
    - File write runs in a worker thread so the event loop is not blocked
"""

import asyncio
import logging
import os
import re
import time
from pathlib import Path

from fastapi import UploadFile

from librario.config import Settings
from librario.core.enforce_fields import check_cover_extension

logger = logging.getLogger(__name__)

COVERS_FOLDER = "portadas"
_WHITESPACE = re.compile(r"\s+")


class CoverStorage:
    """Writes cover images to a directory exposed as static files."""

    def __init__(
        self, root: Path, url_prefix: str, extensions: list[str],
    ):
        self.root = root
        self.directory = root / COVERS_FOLDER
        self.url_prefix = url_prefix.rstrip("/")
        self.extensions = extensions

    @classmethod
    def from_settings(cls, settings: Settings) -> "CoverStorage":
        return cls(
            Path(settings.media_dir),
            settings.media_url_prefix,
            settings.cover_extensions,
        )

    def check(self, upload: UploadFile) -> None:
        """Reject covers whose extension is not allowed (422)."""
        check_cover_extension(upload.filename, self.extensions)

    @staticmethod
    def stored_name(original: str) -> str:
        clean = _WHITESPACE.sub("_", Path(original).name)
        return f"{int(time.time() * 1000)}-{clean}"

    async def save(self, upload: UploadFile) -> str:
        """Store the upload and return its public URL."""
        self.check(upload)
        name = self.stored_name(upload.filename or "")
        content = await upload.read()
        await asyncio.to_thread(self._write, name, content)
        logger.info(f"Stored cover {name} ({len(content)} bytes)")
        return f"{self.url_prefix}/{COVERS_FOLDER}/{name}"

    def _write(self, name: str, content: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / name).write_bytes(content)

    async def delete(self, url: str) -> None:
        """Remove a cover previously returned by save()."""
        name = Path(url).name
        if name in ("", ".."):
            return
        await asyncio.to_thread((self.directory / name).unlink, missing_ok=True)
        logger.info(f"Removed cover {name}")

    def is_writable(self) -> bool:
        """Media root exists and new covers can be created under it."""
        target = self.directory if self.directory.exists() else self.root
        return target.is_dir() and os.access(target, os.W_OK)
