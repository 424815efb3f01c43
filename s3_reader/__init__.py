"""Seekable, read-only file objects over S3 objects."""

from .errors import (
    InvalidContentError,
    InvalidRangeError,
    MissingKeyError,
    MissingSchemeError,
    NegativePositionError,
    ObjectNotFetchedError,
    S3ReaderError,
)
from .reader import S3Reader
from .settings import ClientSettings
from .store import ObjectInfo, ObjectStore, S3ObjectStore
from .uri import S3ObjectUri

__all__ = [
    "ClientSettings",
    "InvalidContentError",
    "InvalidRangeError",
    "MissingKeyError",
    "MissingSchemeError",
    "NegativePositionError",
    "ObjectInfo",
    "ObjectNotFetchedError",
    "ObjectStore",
    "S3ObjectStore",
    "S3ObjectUri",
    "S3Reader",
    "S3ReaderError",
]
