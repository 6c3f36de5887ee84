"""Environment driven configuration for pdfsigstrip."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .exceptions import ConfigurationError

STORAGE_BACKENDS = ("s3", "local")
DEFAULT_AWS_REGION = "sa-east-1"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean value, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the storage collaborators and logging."""

    storage_backend: str = "s3"
    local_root: Path = Path("./storage")
    aws_region: str = DEFAULT_AWS_REGION
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_endpoint: str = ""
    aws_production: bool = True
    log_level: str = "INFO"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (defaults to ``os.environ``)."""

    env = os.environ if environ is None else environ

    backend = env.get("PDFSIGSTRIP_STORAGE", "s3").strip().lower() or "s3"
    if backend not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"PDFSIGSTRIP_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}"
        )

    return Settings(
        storage_backend=backend,
        local_root=Path(env.get("PDFSIGSTRIP_LOCAL_ROOT", "./storage")).expanduser(),
        aws_region=env.get("AWS_REGION", "").strip() or DEFAULT_AWS_REGION,
        aws_access_key_id=env.get("AWS_ACCESS_KEY_ID", ""),
        aws_secret_access_key=env.get("AWS_SECRET_ACCESS_KEY", ""),
        aws_endpoint=env.get("AWS_S3_ENDPOINT", "").strip(),
        aws_production=_parse_bool("AWS_PRODUCTION", env.get("AWS_PRODUCTION"), True),
        log_level=env.get("PDFSIGSTRIP_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


__all__ = ["Settings", "load_settings", "STORAGE_BACKENDS", "DEFAULT_AWS_REGION"]
