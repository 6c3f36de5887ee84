"""Remove digital signatures from PDF documents."""

from __future__ import annotations

from pathlib import Path

__version__ = "0.1.0"

from . import core, storage, stripper
from .config import Settings, load_settings
from .core import PdfDocumentModel, load_document, serialize_document
from .exceptions import (
    ConfigurationError,
    EncryptedPDFError,
    InvalidPDFError,
    InvalidRequestError,
    ObjectNotFoundError,
    PdfSigStripError,
    PdfWriteError,
    ProcessingError,
    StorageError,
)
from .service import RemovalResult, SignatureRemovalService
from .storage import FilesystemStorage, ObjectLocator, S3Storage, build_output_key, create_storage
from .stripper import (
    SignatureInfo,
    StripReport,
    get_signature_info,
    has_signatures,
    remove_signatures,
    remove_signatures_from_bytes,
    strip,
    strip_signatures,
)

__all__ = [
    "core",
    "storage",
    "stripper",
    "Settings",
    "load_settings",
    "PdfDocumentModel",
    "load_document",
    "serialize_document",
    "strip",
    "strip_signatures",
    "remove_signatures",
    "remove_signatures_from_bytes",
    "get_signature_info",
    "has_signatures",
    "StripReport",
    "SignatureInfo",
    "ObjectLocator",
    "FilesystemStorage",
    "S3Storage",
    "build_output_key",
    "create_storage",
    "SignatureRemovalService",
    "RemovalResult",
    "PdfSigStripError",
    "InvalidPDFError",
    "EncryptedPDFError",
    "PdfWriteError",
    "StorageError",
    "ObjectNotFoundError",
    "InvalidRequestError",
    "ProcessingError",
    "ConfigurationError",
    "strip_document",
]


def strip_document(input: str | Path, output: str | Path) -> Path:
    """Convenience wrapper around :func:`stripper.remove_signatures`."""

    return remove_signatures(input, output)
