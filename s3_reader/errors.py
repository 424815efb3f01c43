from __future__ import annotations


class S3ReaderError(Exception):
    """Base class for every error raised by s3_reader."""


class MissingSchemeError(S3ReaderError, ValueError):
    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"missing s3:// scheme in URI {uri!r}")


class MissingKeyError(S3ReaderError, ValueError):
    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"missing bucket or object in URI {uri!r}")


class ObjectNotFetchedError(S3ReaderError, OSError):
    """A remote call against the object failed (missing, forbidden, offline)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"object could not be fetched: {detail}")


class InvalidContentError(S3ReaderError, OSError):
    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = "could not read from body of object"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidRangeError(S3ReaderError, OSError):
    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        super().__init__(f"invalid read range {start}-{end}")


class NegativePositionError(S3ReaderError, OSError):
    def __init__(self, position: int):
        self.position = position
        super().__init__(f"position cannot be negative ({position})")
