"""Document model, parsing and shared helpers for :mod:`pdfsigstrip`."""

from __future__ import annotations

from .model import ObjectKey, PdfArray, PdfDictionary, PdfDocumentModel, PdfPage
from .parser import load_document, serialize_document

__all__ = [
    "ObjectKey",
    "PdfArray",
    "PdfDictionary",
    "PdfDocumentModel",
    "PdfPage",
    "load_document",
    "serialize_document",
]
