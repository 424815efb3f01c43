from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from boto3.session import Session
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from .errors import InvalidContentError, ObjectNotFetchedError
from .settings import ClientSettings, load_settings_from_env

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from botocore.client import BaseClient

    from .uri import S3ObjectUri

LOG = logging.getLogger("s3_reader.store")


@dataclass(frozen=True)
class ObjectInfo:
    """Result of a metadata probe."""

    content_length: int
    last_modified: datetime | None = None

    @classmethod
    def from_head(cls, result: Mapping[str, Any]) -> ObjectInfo:
        try:
            content_length = int(result["ContentLength"])
        except (KeyError, TypeError, ValueError) as error:
            msg = f"HEAD response has no usable ContentLength: {error!r}"
            raise InvalidContentError(msg) from error
        return cls(
            content_length=content_length,
            last_modified=result.get("LastModified"),
        )


@runtime_checkable
class ObjectStore(Protocol):
    """Remote capability a reader needs: a metadata probe and range fetches."""

    def head(self, uri: S3ObjectUri) -> ObjectInfo:
        """Return the size and modification time of the object.

        Raise ObjectNotFetchedError on any remote failure.
        """
        ...

    def get_range(self, uri: S3ObjectUri, start: int, end: int) -> bytes:
        """Return the bytes at offsets `start` through `end`, both inclusive.

        The payload may be shorter than requested when the object ends first.
        """
        ...


def _describe(error: Exception) -> str:
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "Unknown")
        message = error.response.get("Error", {}).get("Message", "")
        return f"{code} {message}".strip()
    return str(error)


class S3ObjectStore:
    """`ObjectStore` backed by a single long-lived boto3 S3 client."""

    def __init__(self, client: BaseClient):
        self._client = client

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> S3ObjectStore:
        session = Session(
            aws_access_key_id=settings.access_key,
            aws_secret_access_key=settings.secret_key,
            aws_session_token=settings.session_token,
            region_name=settings.region,
        )
        client = session.client(
            "s3",
            endpoint_url=settings.endpoint,
            config=BotoConfig(
                signature_version="s3v4",
                retries={"max_attempts": settings.max_attempts},
                s3={"addressing_style": settings.addressing_style},
            ),
        )
        LOG.debug(
            "S3 client ready (endpoint=%s, region=%s)",
            settings.endpoint or "aws",
            settings.region or "default",
        )
        return cls(client)

    @classmethod
    def from_env(cls) -> S3ObjectStore:
        """Create an S3ObjectStore from environment variables.

        Returns:
            S3ObjectStore whose client is configured from environment variables.
        """
        return cls.from_settings(load_settings_from_env())

    @property
    def client(self) -> BaseClient:
        return self._client

    def head(self, uri: S3ObjectUri) -> ObjectInfo:
        LOG.debug("HEAD %s", uri)
        try:
            result = self._client.head_object(Bucket=uri.bucket, Key=uri.key)
        except (ClientError, BotoCoreError) as error:
            LOG.warning("head failed for %s: %s", uri, error)
            raise ObjectNotFetchedError(_describe(error)) from error
        return ObjectInfo.from_head(result)

    def get_range(self, uri: S3ObjectUri, start: int, end: int) -> bytes:
        request_range = f"bytes={start}-{end}"
        LOG.debug("GET %s range=%s", uri, request_range)
        try:
            result = self._client.get_object(
                Bucket=uri.bucket, Key=uri.key, Range=request_range
            )
        except (ClientError, BotoCoreError) as error:
            LOG.warning("range read failed for %s (%s): %s", uri, request_range, error)
            raise ObjectNotFetchedError(_describe(error)) from error

        body = result["Body"]
        try:
            return body.read()
        except BotoCoreError as error:
            LOG.warning("could not drain body of %s (%s): %s", uri, request_range, error)
            raise InvalidContentError(str(error)) from error
        finally:
            body.close()
