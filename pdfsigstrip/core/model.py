"""Document access layer over the pypdf object graph.

Every dictionary and array reachable from the catalog is exposed through a
wrapper stored in a per-document arena keyed by :class:`ObjectKey`.
Wrappers resolve indirect references lazily through the arena, so removing
an object from one container never breaks lookups made from another one
(for example a widget's ``/Parent`` after its field left ``/Fields``).

Mutations go through :meth:`PdfDictionary.put`, :meth:`PdfDictionary.remove`
and :meth:`PdfArray.remove_at`, which set the object's dirty flag themselves.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterator, NamedTuple, Union

from pypdf import PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NullObject,
    PdfObject,
)

LOGGER = logging.getLogger("pdfsigstrip.core")


class ObjectKey(NamedTuple):
    """Stable identifier of an object inside a :class:`PdfDocumentModel`.

    Indirect objects use their object and generation numbers. Direct objects
    receive negative synthetic numbers that are unique per document.
    """

    number: int
    generation: int = 0

    @property
    def is_direct(self) -> bool:
        return self.number < 0


class PdfObjectWrapper:
    """Common state for dictionaries and arrays held in the arena."""

    def __init__(
        self,
        document: "PdfDocumentModel",
        key: ObjectKey,
        raw: PdfObject,
        reference: IndirectObject | None = None,
    ) -> None:
        self.document = document
        self.key = key
        self.raw = raw
        self.reference = reference
        self.modified = False

    def mark_modified(self) -> None:
        self.modified = True

    def as_pdf_object(self) -> PdfObject:
        """Return the value to store in a container: the reference if any."""

        return self.reference if self.reference is not None else self.raw

    def __repr__(self) -> str:
        state = " modified" if self.modified else ""
        return f"<{type(self).__name__} {self.key.number} {self.key.generation}{state}>"


Wrapped = Union["PdfDictionary", "PdfArray"]


def _as_name(key: str) -> NameObject:
    return NameObject(key if key.startswith("/") else f"/{key}")


class PdfDictionary(PdfObjectWrapper):
    raw: DictionaryObject

    def contains(self, key: str) -> bool:
        return _as_name(key) in self.raw

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def keys(self) -> list[str]:
        return [str(key) for key in self.raw.keys()]

    def get(self, key: str) -> PdfObject | None:
        """Return the resolved value stored under ``key`` or ``None``."""

        value = self.raw.get(_as_name(key))
        return self.document.resolve(value)

    def get_name(self, key: str) -> str | None:
        value = self.get(key)
        if isinstance(value, NameObject):
            return str(value)
        return None

    def get_string(self, key: str) -> str | None:
        value = self.get(key)
        if isinstance(value, NameObject):
            return None
        if isinstance(value, str):
            return str(value)
        if isinstance(value, bytes):
            return value.decode("latin-1")
        return None

    def get_int(self, key: str) -> int | None:
        value = self.get(key)
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return int(value)
        return None

    def get_dictionary(self, key: str) -> "PdfDictionary | None":
        wrapped = self.document.wrap(self.raw.get(_as_name(key)))
        return wrapped if isinstance(wrapped, PdfDictionary) else None

    def get_array(self, key: str) -> "PdfArray | None":
        wrapped = self.document.wrap(self.raw.get(_as_name(key)))
        return wrapped if isinstance(wrapped, PdfArray) else None

    def put(self, key: str, value: "PdfObject | PdfObjectWrapper") -> None:
        if isinstance(value, PdfObjectWrapper):
            value = value.as_pdf_object()
        self.raw[_as_name(key)] = value
        self.mark_modified()

    def remove(self, key: str) -> bool:
        """Delete ``key`` and return ``True`` if it was present."""

        name = _as_name(key)
        if name not in self.raw:
            return False
        del self.raw[name]
        self.mark_modified()
        return True


class PdfArray(PdfObjectWrapper):
    raw: ArrayObject

    def size(self) -> int:
        return len(self.raw)

    def __len__(self) -> int:
        return len(self.raw)

    def get(self, index: int) -> PdfObject | None:
        return self.document.resolve(self.raw[index])

    def get_dictionary(self, index: int) -> PdfDictionary | None:
        wrapped = self.document.wrap(self.raw[index])
        return wrapped if isinstance(wrapped, PdfDictionary) else None

    def remove_at(self, index: int) -> None:
        del self.raw[index]
        self.mark_modified()

    def __iter__(self) -> Iterator[PdfObject | None]:
        for index in range(len(self.raw)):
            yield self.get(index)


class PdfPage:
    """A page of the document and its ordered annotation sequence."""

    def __init__(self, number: int, dictionary: PdfDictionary) -> None:
        self.number = number
        self.dictionary = dictionary

    def annotations(self) -> list[PdfDictionary]:
        annots = self.dictionary.get_array("/Annots")
        if annots is None:
            return []

        result: list[PdfDictionary] = []
        for index in range(len(annots)):
            annotation = annots.get_dictionary(index)
            if annotation is None:
                LOGGER.debug("Skipping unresolvable annotation %s on page %s", index, self.number)
                continue
            result.append(annotation)
        return result

    def remove_annotations(self, annotations: list[PdfDictionary]) -> int:
        """Remove ``annotations`` from the page, keeping the order of the rest."""

        annots = self.dictionary.get_array("/Annots")
        targets = {annotation.key for annotation in annotations}
        if annots is None or not targets:
            return 0

        removed = 0
        for index in reversed(range(len(annots))):
            entry = annots.get_dictionary(index)
            if entry is not None and entry.key in targets:
                annots.remove_at(index)
                removed += 1

        if removed:
            if len(annots) == 0:
                self.dictionary.remove("/Annots")
            else:
                self.dictionary.put("/Annots", annots)
        return removed

    def __repr__(self) -> str:
        return f"<PdfPage {self.number}>"


class PdfDocumentModel:
    """Arena of wrapped objects built on top of a pypdf :class:`PdfWriter`."""

    def __init__(self, writer: PdfWriter, *, source: bytes | None = None) -> None:
        self.writer = writer
        self.source = source
        self._arena: dict[ObjectKey, PdfObjectWrapper] = {}
        self._direct_keys: dict[int, ObjectKey] = {}
        self._synthetic_numbers = itertools.count(-1, -1)
        self._pages: list[PdfPage] | None = None

    # -- arena -------------------------------------------------------------

    def resolve(self, value: PdfObject | None) -> PdfObject | None:
        """Follow ``value`` if it is a reference; ``None`` for null or broken links."""

        if isinstance(value, IndirectObject):
            try:
                value = value.get_object()
            except (PyPdfError, ValueError, KeyError, IndexError) as exc:
                LOGGER.debug("Unable to resolve reference %r: %s", value, exc)
                return None
        if value is None or isinstance(value, NullObject):
            return None
        return value

    def _key_for(self, raw: PdfObject, reference: IndirectObject | None) -> ObjectKey:
        if reference is not None:
            return ObjectKey(reference.idnum, reference.generation)
        key = self._direct_keys.get(id(raw))
        if key is None:
            key = ObjectKey(next(self._synthetic_numbers))
            self._direct_keys[id(raw)] = key
        return key

    def wrap(
        self,
        value: PdfObject | None,
        reference: IndirectObject | None = None,
    ) -> Wrapped | None:
        """Return the arena wrapper for ``value`` or ``None`` for non-containers."""

        if isinstance(value, IndirectObject):
            reference = value
        raw = self.resolve(value)
        if isinstance(raw, DictionaryObject):
            wrapper_class: type[PdfObjectWrapper] = PdfDictionary
        elif isinstance(raw, ArrayObject):
            wrapper_class = PdfArray
        else:
            return None

        key = self._key_for(raw, reference)
        wrapper = self._arena.get(key)
        if wrapper is None:
            wrapper = wrapper_class(self, key, raw, reference)
            self._arena[key] = wrapper
        return wrapper  # type: ignore[return-value]

    def lookup(self, key: ObjectKey) -> PdfObjectWrapper | None:
        return self._arena.get(key)

    @property
    def modified_keys(self) -> set[ObjectKey]:
        return {key for key, wrapper in self._arena.items() if wrapper.modified}

    @property
    def is_modified(self) -> bool:
        return any(wrapper.modified for wrapper in self._arena.values())

    # -- structure -----------------------------------------------------------

    @property
    def catalog(self) -> PdfDictionary:
        root = self.writer._root_object  # type: ignore[attr-defined]
        catalog = self.wrap(root, getattr(root, "indirect_reference", None))
        if not isinstance(catalog, PdfDictionary):  # pragma: no cover - pypdf guarantees a catalog
            raise TypeError("Document catalog is not a dictionary")
        return catalog

    @property
    def acro_form(self) -> PdfDictionary | None:
        return self.catalog.get_dictionary("/AcroForm")

    @property
    def pages(self) -> list[PdfPage]:
        if self._pages is None:
            self._pages = self._collect_pages()
        return list(self._pages)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_page(self, number: int) -> PdfPage:
        """Return the page with 1-indexed ``number``."""

        pages = self.pages
        if number < 1 or number > len(pages):
            raise IndexError(f"Page {number} is out of range (1-{len(pages)})")
        return pages[number - 1]

    def _collect_pages(self) -> list[PdfPage]:
        root = self.catalog.get_dictionary("/Pages")
        if root is None:
            return []

        pages: list[PdfPage] = []
        visited: set[ObjectKey] = set()
        stack: list[PdfDictionary] = [root]
        while stack:
            node = stack.pop()
            if node.key in visited:
                LOGGER.debug("Skipping page tree cycle at %r", node)
                continue
            visited.add(node.key)

            kids = node.get_array("/Kids")
            if node.get_name("/Type") == "/Page" or kids is None:
                pages.append(PdfPage(len(pages) + 1, node))
                continue

            children = [kids.get_dictionary(index) for index in range(len(kids))]
            stack.extend(child for child in reversed(children) if child is not None)
        return pages


__all__ = [
    "ObjectKey",
    "PdfObjectWrapper",
    "PdfDictionary",
    "PdfArray",
    "PdfPage",
    "PdfDocumentModel",
]
