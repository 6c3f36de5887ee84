from __future__ import annotations

import io
from pathlib import Path

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from pdfsigstrip.config import Settings
from pdfsigstrip.exceptions import ConfigurationError, ObjectNotFoundError, StorageError
from pdfsigstrip.storage import (
    FilesystemStorage,
    ObjectLocator,
    S3Storage,
    build_output_key,
    create_s3_client,
    create_storage,
)


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("docs/assinado.pdf", "docs/sem-certificado/assinado.pdf"),
        ("assinado.pdf", "sem-certificado/assinado.pdf"),
        ("a/b/c.pdf", "a/b/sem-certificado/c.pdf"),
        ("/x.pdf", "/sem-certificado/x.pdf"),
    ],
)
def test_build_output_key(key: str, expected: str) -> None:
    assert build_output_key(key) == expected


def test_object_locator_helpers() -> None:
    locator = ObjectLocator("contracts", "2024/assinado.pdf")

    assert locator.uri == "s3://contracts/2024/assinado.pdf"
    assert str(locator) == locator.uri
    assert locator.filename == "assinado.pdf"
    assert locator.output_locator() == ObjectLocator("contracts", "2024/sem-certificado/assinado.pdf")


class _Body(io.BytesIO):
    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.was_closed = False

    def close(self) -> None:
        self.was_closed = True
        super().close()


class FakeS3Client:
    def __init__(self, objects: dict[tuple[str, str], bytes] | None = None) -> None:
        self.objects = dict(objects or {})
        self.bodies: list[_Body] = []
        self.put_calls: list[dict] = []
        self.fail_with: Exception | None = None

    def get_object(self, *, Bucket: str, Key: str) -> dict:
        if self.fail_with is not None:
            raise self.fail_with
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject",
            )
        body = _Body(self.objects[(Bucket, Key)])
        self.bodies.append(body)
        return {"Body": body}

    def put_object(self, **kwargs) -> dict:
        if self.fail_with is not None:
            raise self.fail_with
        self.put_calls.append(kwargs)
        self.objects[(kwargs["Bucket"], kwargs["Key"])] = kwargs["Body"]
        return {}


def test_s3_fetch_reads_and_closes_body() -> None:
    client = FakeS3Client({("bucket", "docs/a.pdf"): b"%PDF-data"})
    storage = S3Storage(client)

    assert storage.fetch(ObjectLocator("bucket", "docs/a.pdf")) == b"%PDF-data"
    assert client.bodies[0].was_closed is True


def test_s3_fetch_missing_object() -> None:
    storage = S3Storage(FakeS3Client())

    with pytest.raises(ObjectNotFoundError):
        storage.fetch(ObjectLocator("bucket", "missing.pdf"))


def test_s3_fetch_access_denied_is_storage_error() -> None:
    client = FakeS3Client()
    client.fail_with = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject")

    with pytest.raises(StorageError) as excinfo:
        S3Storage(client).fetch(ObjectLocator("bucket", "a.pdf"))

    assert not isinstance(excinfo.value, ObjectNotFoundError)


def test_s3_fetch_connection_error() -> None:
    client = FakeS3Client()
    client.fail_with = EndpointConnectionError(endpoint_url="http://localhost:9000")

    with pytest.raises(StorageError):
        S3Storage(client).fetch(ObjectLocator("bucket", "a.pdf"))


def test_s3_store_uploads_pdf() -> None:
    client = FakeS3Client()

    S3Storage(client).store(ObjectLocator("bucket", "sem-certificado/a.pdf"), b"%PDF")

    assert client.put_calls == [
        {
            "Bucket": "bucket",
            "Key": "sem-certificado/a.pdf",
            "Body": b"%PDF",
            "ContentType": "application/pdf",
        }
    ]


def test_s3_store_failure() -> None:
    client = FakeS3Client()
    client.fail_with = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")

    with pytest.raises(StorageError):
        S3Storage(client).store(ObjectLocator("bucket", "a.pdf"), b"%PDF")


def test_create_s3_client_requires_keys_outside_production() -> None:
    settings = Settings(aws_production=False)

    with pytest.raises(ConfigurationError):
        create_s3_client(settings)


def test_create_s3_client_with_custom_endpoint() -> None:
    settings = Settings(
        aws_production=False,
        aws_access_key_id="test",
        aws_secret_access_key="test",
        aws_endpoint="http://localhost:4566",
        aws_region="us-east-1",
    )

    client = create_s3_client(settings)

    assert client.meta.endpoint_url == "http://localhost:4566"
    assert client.meta.region_name == "us-east-1"
    assert client.meta.config.s3["addressing_style"] == "path"


def test_filesystem_storage_round_trip(tmp_path: Path) -> None:
    storage = FilesystemStorage(tmp_path)
    locator = ObjectLocator("bucket", "docs/sem-certificado/a.pdf")

    storage.store(locator, b"%PDF")

    assert (tmp_path / "bucket" / "docs" / "sem-certificado" / "a.pdf").read_bytes() == b"%PDF"
    assert storage.fetch(locator) == b"%PDF"


def test_filesystem_storage_missing_object(tmp_path: Path) -> None:
    with pytest.raises(ObjectNotFoundError):
        FilesystemStorage(tmp_path).fetch(ObjectLocator("bucket", "missing.pdf"))


@pytest.mark.parametrize(
    ("bucket", "key"),
    [("bucket", "../../etc/passwd"), ("..", "a.pdf"), ("bucket", "")],
)
def test_filesystem_storage_rejects_escaping_paths(tmp_path: Path, bucket: str, key: str) -> None:
    storage = FilesystemStorage(tmp_path / "root")

    with pytest.raises(StorageError):
        storage.path_for(ObjectLocator(bucket, key))


def test_filesystem_storage_strips_leading_slash(tmp_path: Path) -> None:
    storage = FilesystemStorage(tmp_path)

    assert storage.path_for(ObjectLocator("bucket", "/x.pdf")) == tmp_path.resolve() / "bucket" / "x.pdf"


def test_create_storage_selects_backend(tmp_path: Path) -> None:
    local = create_storage(Settings(storage_backend="local", local_root=tmp_path))

    assert isinstance(local, FilesystemStorage)
    assert local.root == tmp_path.resolve()
