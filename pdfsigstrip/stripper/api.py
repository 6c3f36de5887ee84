"""File and bytes level helpers around the signature stripper."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.parser import load_document, serialize_document
from ..core.utils import resolve_path
from ..exceptions import InvalidPDFError, PdfWriteError
from .signatures import StripReport, strip_signatures

LOGGER = logging.getLogger("pdfsigstrip.stripper")

PathLike = str | Path


def _read_pdf(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise InvalidPDFError(f"PDF not found: {path}") from exc
    except OSError as exc:
        raise InvalidPDFError(f"Unable to read PDF: {path}. Error: {exc}") from exc


def strip_bytes(data: bytes) -> tuple[bytes, StripReport]:
    """Strip signatures from ``data`` and return the new bytes with a report."""

    document = load_document(data)
    report = strip_signatures(document)
    LOGGER.info("Processed PDF with %d page(s)", report.page_count)
    return serialize_document(document), report


def remove_signatures_from_bytes(data: bytes) -> bytes:
    """Return a copy of the PDF ``data`` with its digital signatures removed."""

    output, _ = strip_bytes(data)
    return output


def strip_file(input: PathLike, output: PathLike) -> StripReport:
    """Strip signatures from ``input`` and write the result to ``output``."""

    input_path = resolve_path(input)
    output_path = resolve_path(output)

    LOGGER.debug("Removing signatures from %s into %s", input_path, output_path)
    result, report = strip_bytes(_read_pdf(input_path))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        output_path.write_bytes(result)
    except OSError as exc:
        raise PdfWriteError(f"Unable to write PDF to {output_path}") from exc

    return report


def remove_signatures(input: PathLike, output: PathLike) -> Path:
    """Write an unsigned copy of ``input`` to ``output`` and return its path."""

    strip_file(input, output)
    return resolve_path(output)


__all__ = [
    "PathLike",
    "strip_bytes",
    "strip_file",
    "remove_signatures",
    "remove_signatures_from_bytes",
]
