"""Custom exceptions raised by :mod:`pdfsigstrip`."""

from __future__ import annotations


class PdfSigStripError(Exception):
    """Base exception for all errors raised by :mod:`pdfsigstrip`."""


class InvalidPDFError(PdfSigStripError):
    """Raised when the input bytes cannot be parsed as a PDF document."""


class EncryptedPDFError(PdfSigStripError):
    """Raised when a PDF requires a password to be opened."""


class PdfWriteError(PdfSigStripError):
    """Raised when a processed document cannot be serialized or written."""


class StorageError(PdfSigStripError):
    """Raised when an object cannot be transferred to or from storage."""


class ObjectNotFoundError(StorageError):
    """Raised when the requested object does not exist in storage."""


class InvalidRequestError(PdfSigStripError):
    """Raised when a removal request is missing required identifiers."""


class ProcessingError(PdfSigStripError):
    """Raised when a removal request fails after validation."""


class ConfigurationError(PdfSigStripError):
    """Raised when the environment configuration is invalid."""


__all__ = [
    "PdfSigStripError",
    "InvalidPDFError",
    "EncryptedPDFError",
    "PdfWriteError",
    "StorageError",
    "ObjectNotFoundError",
    "InvalidRequestError",
    "ProcessingError",
    "ConfigurationError",
]
