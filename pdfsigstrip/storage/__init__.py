"""Object transfer collaborators for :mod:`pdfsigstrip`."""

from __future__ import annotations

from ..config import Settings
from .base import OUTPUT_FOLDER, ObjectLocator, ObjectStorage, build_output_key
from .local import FilesystemStorage
from .s3 import S3Storage, create_s3_client


def create_storage(settings: Settings) -> ObjectStorage:
    """Return the storage backend selected by ``settings.storage_backend``."""

    if settings.storage_backend == "local":
        return FilesystemStorage(settings.local_root)
    return S3Storage.from_settings(settings)


__all__ = [
    "OUTPUT_FOLDER",
    "ObjectLocator",
    "ObjectStorage",
    "FilesystemStorage",
    "S3Storage",
    "build_output_key",
    "create_s3_client",
    "create_storage",
]
