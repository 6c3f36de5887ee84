"""Parse PDF bytes into a :class:`PdfDocumentModel` and serialize it back."""

from __future__ import annotations

import io
import logging

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..exceptions import EncryptedPDFError, InvalidPDFError, PdfWriteError
from .model import PdfDocumentModel

LOGGER = logging.getLogger("pdfsigstrip.core")


def _open_reader(data: bytes) -> PdfReader:
    if not data:
        raise InvalidPDFError("PDF input is empty")

    try:
        reader = PdfReader(io.BytesIO(data))
    except PdfReadError as exc:
        raise InvalidPDFError(f"Corrupted or invalid PDF: {exc}") from exc
    except Exception as exc:  # pragma: no cover - pypdf exceptions vary
        raise InvalidPDFError(f"Unexpected error reading PDF: {exc}") from exc

    if reader.is_encrypted:
        # Owner-restricted documents open with the empty user password.
        LOGGER.debug("Attempting to decrypt encrypted PDF with an empty password")
        try:
            status = reader.decrypt("")
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            raise EncryptedPDFError(f"Unable to decrypt PDF: {exc}") from exc
        if status == 0:
            raise EncryptedPDFError("PDF is protected by a user password")

    return reader


def _copy_reader_contents(reader: PdfReader) -> PdfWriter:
    writer = PdfWriter()
    writer.clone_reader_document_root(reader)

    metadata = reader.metadata
    if metadata:
        writer.add_metadata(
            {
                key: str(value.get_object())
                for key, value in metadata.items()
                if isinstance(key, str) and value is not None
            }
        )

    return writer


def load_document(data: bytes) -> PdfDocumentModel:
    """Parse ``data`` and return a mutable document model."""

    reader = _open_reader(data)
    try:
        writer = _copy_reader_contents(reader)
    except PdfReadError as exc:
        raise InvalidPDFError(f"Corrupted or invalid PDF: {exc}") from exc
    except Exception as exc:  # pragma: no cover - pypdf exceptions vary
        raise InvalidPDFError(f"Unable to load PDF object graph: {exc}") from exc

    document = PdfDocumentModel(writer, source=data)
    LOGGER.debug("Loaded PDF with %d page(s)", document.page_count)
    return document


def serialize_document(document: PdfDocumentModel) -> bytes:
    """Return the bytes of ``document``.

    A document whose objects were never modified is returned as the exact
    bytes it was parsed from.
    """

    if document.source is not None and not document.is_modified:
        LOGGER.debug("Document unchanged; returning original bytes")
        return document.source

    buffer = io.BytesIO()
    try:
        document.writer.write(buffer)
    except Exception as exc:  # pragma: no cover - pypdf exceptions vary
        raise PdfWriteError(f"Unable to serialize PDF: {exc}") from exc
    LOGGER.debug("Serialized %d modified object(s)", len(document.modified_keys))
    return buffer.getvalue()


__all__ = ["load_document", "serialize_document"]
