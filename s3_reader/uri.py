from __future__ import annotations

from dataclasses import dataclass

from .errors import MissingKeyError, MissingSchemeError

SCHEME = "s3://"


@dataclass(frozen=True)
class S3ObjectUri:
    """The bucket and key of an S3 object.

    Parsing is deliberately permissive: bucket names are not validated and
    keys are kept verbatim (no percent-decoding), so anything S3 accepts can
    be addressed.

    >>> uri = S3ObjectUri.parse("s3://mybucket/path/to/file.xls")
    >>> uri.bucket, uri.key
    ('mybucket', 'path/to/file.xls')
    """

    bucket: str
    key: str

    @classmethod
    def parse(cls, uri: str) -> S3ObjectUri:
        if not uri.startswith(SCHEME):
            raise MissingSchemeError(uri)
        bucket, sep, key = uri[len(SCHEME) :].partition("/")
        if not sep:
            raise MissingKeyError(uri)
        return cls(bucket=bucket, key=key)

    def __str__(self) -> str:
        return f"{SCHEME}{self.bucket}/{self.key}"
