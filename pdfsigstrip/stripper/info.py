"""Read-only inspection of the signature artifacts in a PDF."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from ..core.model import PdfDocumentModel
from ..core.parser import load_document
from ..core.utils import resolve_path
from .api import PathLike, _read_pdf
from .signatures import field_name, is_signature_field, is_signature_widget

LOGGER = logging.getLogger("pdfsigstrip.stripper")


@dataclass(frozen=True)
class SignatureInfo:
    """Signature artifacts found in a PDF document."""

    path: Path | None
    num_pages: int
    signature_fields: tuple[str, ...] = field(default_factory=tuple)
    signature_widgets: int = 0
    sig_flags: int | None = None

    @property
    def is_signed(self) -> bool:
        return bool(self.signature_fields or self.signature_widgets or self.sig_flags is not None)


def describe_document(document: PdfDocumentModel, *, path: Path | None = None) -> SignatureInfo:
    """Collect :class:`SignatureInfo` from an already loaded document."""

    names: list[str] = []
    sig_flags: int | None = None

    acro_form = document.acro_form
    if acro_form is not None:
        sig_flags = acro_form.get_int("/SigFlags")
        fields = acro_form.get_array("/Fields")
        for index in range(len(fields) if fields is not None else 0):
            form_field = fields.get_dictionary(index)
            if form_field is not None and is_signature_field(form_field):
                names.append(field_name(form_field))

    widgets = sum(
        1
        for page in document.pages
        for annotation in page.annotations()
        if is_signature_widget(annotation)
    )

    return SignatureInfo(
        path=path,
        num_pages=document.page_count,
        signature_fields=tuple(names),
        signature_widgets=widgets,
        sig_flags=sig_flags,
    )


def get_signature_info(path: PathLike) -> SignatureInfo:
    """Return :class:`SignatureInfo` describing the PDF located at *path*."""

    pdf_path = resolve_path(path)
    LOGGER.debug("Gathering signature info for %s", pdf_path)
    info = describe_document(load_document(_read_pdf(pdf_path)), path=pdf_path)
    LOGGER.info(
        "Signature info: path=%s, pages=%s, fields=%s, widgets=%s",
        info.path,
        info.num_pages,
        len(info.signature_fields),
        info.signature_widgets,
    )
    return info


def has_signatures(path: PathLike) -> bool:
    """Return ``True`` if the PDF at *path* carries any signature artifact."""

    return get_signature_info(path).is_signed


__all__ = ["SignatureInfo", "describe_document", "get_signature_info", "has_signatures"]
