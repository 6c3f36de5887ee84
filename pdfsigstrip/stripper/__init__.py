"""Signature removal for the :mod:`pdfsigstrip` toolkit."""

from __future__ import annotations

from .api import remove_signatures, remove_signatures_from_bytes, strip_bytes, strip_file
from .info import SignatureInfo, describe_document, get_signature_info, has_signatures
from .signatures import (
    StripReport,
    clear_signature_flags,
    is_signature_field,
    is_signature_widget,
    remove_signature_annotations,
    remove_signature_fields,
    strip,
    strip_signatures,
)

__all__ = [
    "StripReport",
    "SignatureInfo",
    "strip",
    "strip_signatures",
    "strip_bytes",
    "strip_file",
    "remove_signatures",
    "remove_signatures_from_bytes",
    "remove_signature_fields",
    "remove_signature_annotations",
    "clear_signature_flags",
    "is_signature_field",
    "is_signature_widget",
    "describe_document",
    "get_signature_info",
    "has_signatures",
]
