"""Removal of digital-signature artifacts from a :class:`PdfDocumentModel`.

Stripping runs three passes in a fixed order:

1. signature fields are dropped from ``/AcroForm /Fields``;
2. signature widget annotations are dropped from every page;
3. ``/AcroForm /SigFlags`` is removed.

Pass 2 relies on the ``/FT`` and ``/Parent`` links of fields that pass 1
already detached from ``/Fields``; those objects stay reachable through the
document arena so the lookup still succeeds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..core.model import PdfDictionary, PdfDocumentModel

LOGGER = logging.getLogger("pdfsigstrip.stripper")

SIGNATURE_FIELD_TYPE = "/Sig"
WIDGET_SUBTYPE = "/Widget"
SIGNATURE_VALUE_KEYS = ("/V", "/SV", "/Lock")
UNNAMED_FIELD = "(unnamed)"


@dataclass
class StripReport:
    """Summary of what :func:`strip_signatures` removed from a document."""

    page_count: int = 0
    removed_fields: list[str] = field(default_factory=list)
    annotations_removed: int = 0
    sig_flags_cleared: bool = False

    @property
    def fields_removed(self) -> int:
        return len(self.removed_fields)

    @property
    def changed(self) -> bool:
        return bool(self.removed_fields or self.annotations_removed or self.sig_flags_cleared)

    def as_dict(self) -> dict[str, object]:
        return {
            "page_count": self.page_count,
            "removed_fields": list(self.removed_fields),
            "fields_removed": self.fields_removed,
            "annotations_removed": self.annotations_removed,
            "sig_flags_cleared": self.sig_flags_cleared,
        }


def is_signature_field(dictionary: PdfDictionary) -> bool:
    return dictionary.get_name("/FT") == SIGNATURE_FIELD_TYPE


def is_widget_annotation(annotation: PdfDictionary) -> bool:
    return annotation.get_name("/Subtype") == WIDGET_SUBTYPE


def is_signature_widget(annotation: PdfDictionary) -> bool:
    """Return ``True`` for widgets that belong to a signature field.

    A widget qualifies when its own ``/FT`` is ``/Sig`` (merged field and
    widget) or when its ``/Parent`` field has ``/FT /Sig``.
    """

    if not is_widget_annotation(annotation):
        return False
    if is_signature_field(annotation):
        return True
    parent = annotation.get_dictionary("/Parent")
    return parent is not None and is_signature_field(parent)


def field_name(dictionary: PdfDictionary) -> str:
    return dictionary.get_string("/T") or UNNAMED_FIELD


def _clear_field_value(signature_field: PdfDictionary) -> None:
    # The same object may still be referenced from outside /Fields.
    for key in SIGNATURE_VALUE_KEYS:
        signature_field.remove(key)


def remove_signature_fields(document: PdfDocumentModel) -> list[str]:
    """Drop signature fields from ``/AcroForm /Fields`` and return their names."""

    acro_form = document.acro_form
    if acro_form is None:
        LOGGER.info("No AcroForm found - document has no form fields")
        return []

    fields = acro_form.get_array("/Fields")
    if fields is None or len(fields) == 0:
        LOGGER.info("No form fields found")
        return []

    marked: list[int] = []
    names: list[str] = []
    for index in range(len(fields)):
        form_field = fields.get_dictionary(index)
        if form_field is None:
            LOGGER.debug("Skipping non-dictionary entry %s in AcroForm /Fields", index)
            continue
        if not is_signature_field(form_field):
            continue

        name = field_name(form_field)
        LOGGER.info("Found signature field to remove: %s", name)
        _clear_field_value(form_field)
        marked.append(index)
        names.append(name)

    if not marked:
        return []

    for index in reversed(marked):
        fields.remove_at(index)
    acro_form.put("/Fields", fields)
    LOGGER.info("Removed %d signature field(s)", len(marked))
    return names


def remove_signature_annotations(document: PdfDocumentModel) -> int:
    """Drop signature widgets from every page and return how many were removed."""

    total_removed = 0
    for page in document.pages:
        targets = [annotation for annotation in page.annotations() if is_signature_widget(annotation)]
        if not targets:
            continue
        removed = page.remove_annotations(targets)
        LOGGER.debug("Removed %d signature annotation(s) from page %d", removed, page.number)
        total_removed += removed

    if total_removed > 0:
        LOGGER.info("Removed %d signature annotation(s) from pages", total_removed)
    return total_removed


def clear_signature_flags(document: PdfDocumentModel) -> bool:
    """Remove ``/SigFlags`` from the AcroForm, whatever its value."""

    acro_form = document.acro_form
    if acro_form is None or not acro_form.contains("/SigFlags"):
        return False

    acro_form.remove("/SigFlags")
    LOGGER.info("Cleared AcroForm SigFlags")
    return True


def strip_signatures(document: PdfDocumentModel) -> StripReport:
    """Remove every signature artifact from ``document`` in place."""

    report = StripReport(page_count=document.page_count)
    report.removed_fields = remove_signature_fields(document)
    report.annotations_removed = remove_signature_annotations(document)
    report.sig_flags_cleared = clear_signature_flags(document)
    return report


def strip(document: PdfDocumentModel) -> PdfDocumentModel:
    """Strip ``document`` and return it; repeated calls are no-ops."""

    strip_signatures(document)
    return document


__all__ = [
    "StripReport",
    "strip",
    "strip_signatures",
    "remove_signature_fields",
    "remove_signature_annotations",
    "clear_signature_flags",
    "is_signature_field",
    "is_signature_widget",
    "is_widget_annotation",
]
