from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from s3_reader import ObjectInfo, ObjectNotFetchedError, S3ObjectUri

if TYPE_CHECKING:
    from collections.abc import Generator


class FakeObjectStore:
    """In-memory ObjectStore that records every remote call."""

    def __init__(
        self,
        objects: dict[str, bytes] | None = None,
        *,
        truncate_to: int | None = None,
        overrun: bytes = b"",
    ):
        self.objects = objects or {}
        self.truncate_to = truncate_to
        self.overrun = overrun
        self.head_calls: list[S3ObjectUri] = []
        self.range_calls: list[tuple[S3ObjectUri, int, int]] = []
        self.last_modified = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)

    def _data(self, uri: S3ObjectUri) -> bytes:
        try:
            return self.objects[str(uri)]
        except KeyError:
            raise ObjectNotFetchedError("NoSuchKey The specified key does not exist.") from None

    def head(self, uri: S3ObjectUri) -> ObjectInfo:
        self.head_calls.append(uri)
        return ObjectInfo(
            content_length=len(self._data(uri)), last_modified=self.last_modified
        )

    def get_range(self, uri: S3ObjectUri, start: int, end: int) -> bytes:
        self.range_calls.append((uri, start, end))
        data = self._data(uri)[start : end + 1]
        if self.truncate_to is not None:
            data = data[: self.truncate_to]
        return data + self.overrun


@pytest.fixture
def uri() -> S3ObjectUri:
    return S3ObjectUri.parse("s3://bucket-a/path/to/file.bin")


@pytest.fixture
def content() -> bytes:
    return bytes(range(150))


@pytest.fixture
def store(uri: S3ObjectUri, content: bytes) -> FakeObjectStore:
    return FakeObjectStore({str(uri): content})


@pytest.fixture
def reader_env_vars() -> Generator[dict[str, str]]:
    """Set up environment variables for a custom S3 endpoint."""
    env_vars = {
        "S3_READER_ENDPOINT": "http://127.0.0.1:9000",
        "S3_READER_ACCESS_KEY_ID": "minio",
        "S3_READER_SECRET_ACCESS_KEY": "minio123",
        "S3_READER_REGION": "eu-central-1",
        "S3_READER_ADDRESSING_STYLE": "path",
    }

    # Set environment variables
    original_values = {}
    for key, value in env_vars.items():
        original_values[key] = os.environ.get(key)
        os.environ[key] = value

    yield env_vars

    # Restore original values
    for key, original_value in original_values.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture
def clean_env() -> Generator[None]:
    """Hide every variable ClientSettings reads."""
    keys = [
        "S3_READER_ENDPOINT",
        "AWS_ENDPOINT_URL",
        "S3_READER_ACCESS_KEY_ID",
        "AWS_ACCESS_KEY_ID",
        "S3_READER_SECRET_ACCESS_KEY",
        "AWS_SECRET_ACCESS_KEY",
        "S3_READER_SESSION_TOKEN",
        "AWS_SESSION_TOKEN",
        "S3_READER_REGION",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "S3_READER_ADDRESSING_STYLE",
        "S3_READER_MAX_ATTEMPTS",
    ]
    original_values = {key: os.environ.pop(key, None) for key in keys}
    yield
    for key, original_value in original_values.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture
def store_factory() -> type[FakeObjectStore]:
    return FakeObjectStore
