"""Request orchestration: fetch, strip and store a signed PDF."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory

from .exceptions import InvalidRequestError, PdfSigStripError, ProcessingError
from .storage.base import ObjectLocator, ObjectStorage
from .stripper.api import strip_file
from .stripper.signatures import StripReport

LOGGER = logging.getLogger("pdfsigstrip.service")

TEMP_PREFIX = "pdfsigstrip-"


@dataclass(frozen=True)
class RemovalResult:
    """Outcome of a successful removal request."""

    source: ObjectLocator
    output: ObjectLocator
    report: StripReport


def _require(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise InvalidRequestError(f"Parameter '{name}' is required")
    return value


def build_locator(bucket: str | None, path: str | None) -> ObjectLocator:
    """Validate the request identifiers and return the source locator."""

    return ObjectLocator(_require(bucket, "bucket"), _require(path, "path"))


class SignatureRemovalService:
    """Runs one removal request against an :class:`ObjectStorage`.

    Working copies live in a temporary directory that is removed on every
    exit path. Nothing is uploaded unless stripping succeeded.
    """

    def __init__(self, storage: ObjectStorage, *, temp_dir: str | Path | None = None) -> None:
        self._storage = storage
        self._temp_dir = str(temp_dir) if temp_dir is not None else None

    def process(self, bucket: str | None, path: str | None) -> RemovalResult:
        LOGGER.info("Request received - bucket: %s, path: %s", bucket, path)
        source = build_locator(bucket, path)
        output = source.output_locator()

        try:
            with TemporaryDirectory(prefix=TEMP_PREFIX, dir=self._temp_dir) as work_dir:
                input_path = Path(work_dir) / f"input-{source.filename or 'document.pdf'}"
                output_path = Path(work_dir) / "output.pdf"

                input_path.write_bytes(self._storage.fetch(source))
                report = strip_file(input_path, output_path)
                self._storage.store(output, output_path.read_bytes())
        except (PdfSigStripError, OSError) as exc:
            LOGGER.error("Failed to process PDF %s: %s", source.uri, exc)
            raise ProcessingError(str(exc)) from exc

        LOGGER.info("Done - output: %s", output.uri)
        return RemovalResult(source=source, output=output, report=report)


__all__ = ["RemovalResult", "SignatureRemovalService", "build_locator"]
