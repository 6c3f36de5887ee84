from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

FormPdfFactory = Callable[..., bytes]


def _rect() -> ArrayObject:
    return ArrayObject([FloatObject(10), FloatObject(10), FloatObject(110), FloatObject(40)])


def _signature_value(writer: PdfWriter):
    return writer._add_object(
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Sig"),
                NameObject("/Filter"): NameObject("/Adobe.PPKLite"),
                NameObject("/SubFilter"): NameObject("/adbe.pkcs7.detached"),
                NameObject("/ByteRange"): ArrayObject([NumberObject(0)] * 4),
                NameObject("/Contents"): ByteStringObject(b"\x00" * 16),
            }
        )
    )


def build_form_pdf(
    fields: Sequence[tuple[str, str]] = (("/Tx", "Name"), ("/Sig", "Signature1")),
    *,
    pages: int = 1,
    widget_page: int = 1,
    merged_widgets: bool = False,
    text_widgets: bool = True,
    sig_flags: int | None = 3,
    acro_form: bool = True,
    link_annotation: bool = False,
) -> bytes:
    """Build a PDF whose AcroForm lists ``fields`` as ``(field type, name)`` pairs.

    Every signature field gets a widget on ``widget_page``; text fields get
    one too unless ``text_widgets`` is false. ``merged_widgets`` folds each
    widget into its field dictionary instead of using a ``/Parent`` kid.
    A link annotation carrying a stray ``/FT /Sig`` is appended when
    ``link_annotation`` is set.
    """

    writer = PdfWriter()
    page_objects = [writer.add_blank_page(width=200, height=200) for _ in range(pages)]
    target_page = page_objects[widget_page - 1]

    field_refs = []
    annotation_refs = []
    for field_type, name in fields:
        field = DictionaryObject(
            {
                NameObject("/FT"): NameObject(field_type),
                NameObject("/T"): TextStringObject(name),
            }
        )
        if field_type == "/Sig":
            field[NameObject("/V")] = _signature_value(writer)
            field[NameObject("/Lock")] = writer._add_object(
                DictionaryObject(
                    {
                        NameObject("/Type"): NameObject("/SigFieldLock"),
                        NameObject("/Action"): NameObject("/All"),
                    }
                )
            )
            field[NameObject("/SV")] = DictionaryObject(
                {NameObject("/Filter"): NameObject("/Adobe.PPKLite")}
            )
        else:
            field[NameObject("/V")] = TextStringObject(f"{name}-value")
        field_ref = writer._add_object(field)
        field_refs.append(field_ref)

        if field_type != "/Sig" and not text_widgets:
            continue

        widget_fields = {
            NameObject("/Type"): NameObject("/Annot"),
            NameObject("/Subtype"): NameObject("/Widget"),
            NameObject("/Rect"): _rect(),
            NameObject("/P"): target_page.indirect_reference,
        }
        if merged_widgets:
            field.update(widget_fields)
            annotation_refs.append(field_ref)
        else:
            widget = DictionaryObject(widget_fields)
            widget[NameObject("/Parent")] = field_ref
            widget_ref = writer._add_object(widget)
            field[NameObject("/Kids")] = ArrayObject([widget_ref])
            annotation_refs.append(widget_ref)

    if link_annotation:
        annotation_refs.append(
            writer._add_object(
                DictionaryObject(
                    {
                        NameObject("/Type"): NameObject("/Annot"),
                        NameObject("/Subtype"): NameObject("/Link"),
                        NameObject("/Rect"): _rect(),
                        NameObject("/FT"): NameObject("/Sig"),
                    }
                )
            )
        )

    if annotation_refs:
        target_page[NameObject("/Annots")] = ArrayObject(annotation_refs)

    if acro_form:
        form = DictionaryObject({NameObject("/Fields"): ArrayObject(field_refs)})
        if sig_flags is not None:
            form[NameObject("/SigFlags")] = NumberObject(sig_flags)
        writer._root_object[NameObject("/AcroForm")] = writer._add_object(form)

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def form_pdf_factory() -> FormPdfFactory:
    return build_form_pdf


@pytest.fixture()
def signed_pdf_bytes() -> bytes:
    return build_form_pdf()


@pytest.fixture()
def signed_pdf(tmp_path: Path, signed_pdf_bytes: bytes) -> Path:
    pdf_path = tmp_path / "assinado.pdf"
    pdf_path.write_bytes(signed_pdf_bytes)
    return pdf_path


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdfsigstrip-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path
