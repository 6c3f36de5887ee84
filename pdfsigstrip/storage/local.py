"""Filesystem storage used for local development."""

from __future__ import annotations

import logging
from pathlib import Path

from ..exceptions import ObjectNotFoundError, StorageError
from .base import ObjectLocator

LOGGER = logging.getLogger("pdfsigstrip.storage")


class FilesystemStorage:
    """Stores each bucket as a sub-directory of ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser().resolve()

    def path_for(self, locator: ObjectLocator) -> Path:
        bucket_dir = (self.root / locator.bucket).resolve()
        target = (bucket_dir / locator.key.lstrip("/")).resolve()
        if not bucket_dir.is_relative_to(self.root) or bucket_dir == self.root:
            raise StorageError(f"Bucket {locator.bucket!r} escapes storage root {self.root}")
        if not target.is_relative_to(bucket_dir) or target == bucket_dir:
            raise StorageError(f"Key {locator.key!r} escapes bucket {locator.bucket!r}")
        return target

    def fetch(self, locator: ObjectLocator) -> bytes:
        path = self.path_for(locator)
        LOGGER.info("Reading %s from %s", locator.uri, path)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise ObjectNotFoundError(f"Object not found: {locator.uri}") from exc
        except OSError as exc:
            raise StorageError(f"Unable to read {locator.uri}: {exc}") from exc

    def store(self, locator: ObjectLocator, data: bytes) -> None:
        path = self.path_for(locator)
        LOGGER.info("Writing %s to %s", locator.uri, path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Unable to write {locator.uri}: {exc}") from exc


__all__ = ["FilesystemStorage"]
