"""FastAPI application exposing signature removal for stored PDFs."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from pdfsigstrip import __version__
from pdfsigstrip.config import Settings, load_settings
from pdfsigstrip.core.utils import configure_logging, get_logger
from pdfsigstrip.exceptions import InvalidRequestError, ProcessingError
from pdfsigstrip.service import SignatureRemovalService
from pdfsigstrip.storage import ObjectStorage, create_storage

API_PREFIX = "/api/v1"

LOGGER = get_logger("pdfsigstrip.api")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""

    return load_settings()


@lru_cache
def get_storage() -> ObjectStorage:
    """Return the storage backend configured for this process."""

    return create_storage(get_settings())


configure_logging(get_settings().log_level)

app = FastAPI(title="pdfsigstrip API", version=__version__)


class RemoveSignatureRequest(BaseModel):
    """Identifies the signed PDF to process."""

    bucket: str | None = Field(None, description="Bucket holding the signed PDF.")
    path: str | None = Field(None, description="Object key of the signed PDF.")


class RemoveSignatureResponse(BaseModel):
    """Location of the unsigned copy inside the same bucket."""

    output: str


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post(
    f"{API_PREFIX}/remove-signature",
    response_model=RemoveSignatureResponse,
    summary="Remove digital signatures from a stored PDF",
    response_description="Object key of the unsigned copy.",
)
async def remove_signature(
    payload: RemoveSignatureRequest,
    storage: ObjectStorage = Depends(get_storage),
) -> RemoveSignatureResponse:
    """Download ``payload.path``, strip its signatures and upload the copy.

    The copy is stored in the same bucket under a ``sem-certificado`` folder
    next to the original, e.g. ``docs/assinado.pdf`` becomes
    ``docs/sem-certificado/assinado.pdf``.
    """

    service = SignatureRemovalService(storage)
    try:
        result = await run_in_threadpool(service.process, payload.bucket, payload.path)
    except InvalidRequestError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ProcessingError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to process PDF: {exc}") from exc

    LOGGER.info(
        "Removed %d field(s) and %d annotation(s) from %s",
        result.report.fields_removed,
        result.report.annotations_removed,
        result.source.uri,
    )
    return RemoveSignatureResponse(output=result.output.key)


__all__ = ["app", "get_settings", "get_storage"]
