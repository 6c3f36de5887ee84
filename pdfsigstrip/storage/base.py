"""Storage protocol and object locators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

OUTPUT_FOLDER = "sem-certificado"


def build_output_key(key: str) -> str:
    """Insert ``sem-certificado`` before the last component of ``key``.

    ``docs/assinado.pdf`` becomes ``docs/sem-certificado/assinado.pdf`` and a
    key without any ``/`` gets the folder prepended.
    """

    directory, separator, filename = key.rpartition("/")
    if not separator:
        return f"{OUTPUT_FOLDER}/{key}"
    return f"{directory}/{OUTPUT_FOLDER}/{filename}"


@dataclass(frozen=True)
class ObjectLocator:
    """Identifies an object by container (bucket) and key."""

    bucket: str
    key: str

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"

    @property
    def filename(self) -> str:
        return self.key.rpartition("/")[2]

    def output_locator(self) -> "ObjectLocator":
        return ObjectLocator(self.bucket, build_output_key(self.key))

    def __str__(self) -> str:
        return self.uri


class ObjectStorage(Protocol):
    """Protocol for the object transfer collaborator."""

    def fetch(self, locator: ObjectLocator) -> bytes:
        """Return the bytes stored at ``locator``."""

    def store(self, locator: ObjectLocator, data: bytes) -> None:
        """Persist ``data`` at ``locator``."""


__all__ = ["OUTPUT_FOLDER", "ObjectLocator", "ObjectStorage", "build_output_key"]
