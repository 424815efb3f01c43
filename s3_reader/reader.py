from __future__ import annotations

import io
import logging
from io import SEEK_SET
from typing import TYPE_CHECKING, Any

from anyio import to_thread

from .errors import InvalidRangeError
from .seek import check_seek_args, seek_position
from .store import S3ObjectStore
from .uri import S3ObjectUri

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from typing import TextIO

    from .store import ObjectInfo, ObjectStore

LOG = logging.getLogger("s3_reader.reader")


async def _run_sync(func: Callable[..., Any], /, *args: Any) -> Any:
    return await to_thread.run_sync(func, *args)


class S3Reader(io.RawIOBase):
    """Read-only, seekable file object over a single S3 object.

    Every ``read``/``readinto``/``readall`` issues at most one ranged GET no
    matter how large the buffer is; object storage has high per-request
    latency, so one large fetch beats many small ones. Nothing is cached
    between calls apart from the object header.

    The reader is not thread-safe. Callers sharing one across threads must
    serialise access themselves.

    Example::

        reader = S3Reader.open("s3://my-bucket/path/to/huge/file")
        reader.seek(100)
        chunk = reader.read(1024)
    """

    def __init__(self, uri: S3ObjectUri | str, store: ObjectStore | None = None):
        """Create a reader without touching the network.

        Use :meth:`open` to make sure the object actually exists.
        """
        super().__init__()
        self._uri = uri if isinstance(uri, S3ObjectUri) else S3ObjectUri.parse(uri)
        self._store = store if store is not None else S3ObjectStore.from_env()
        self._pos = 0
        self._header: ObjectInfo | None = None

    @classmethod
    def open(cls, uri: S3ObjectUri | str, store: ObjectStore | None = None) -> S3Reader:
        """Create a reader and fetch the object's header.

        Raises ObjectNotFetchedError when the object is missing or unreachable,
        so a reader returned from here always knows its length.
        """
        reader = cls(uri, store)
        reader.fetch_header()
        return reader

    @classmethod
    async def aopen(
        cls, uri: S3ObjectUri | str, store: ObjectStore | None = None
    ) -> S3Reader:
        if store is None:
            store = await _run_sync(S3ObjectStore.from_env)
        reader = cls(uri, store)
        await reader.afetch_header()
        return reader

    @property
    def uri(self) -> S3ObjectUri:
        return self._uri

    @property
    def name(self) -> str:
        return str(self._uri)

    @property
    def store(self) -> ObjectStore:
        return self._store

    @property
    def header(self) -> ObjectInfo | None:
        return self._header

    @property
    def length(self) -> int | None:
        """Object size if already known, without any remote call."""
        if self._header is None:
            return None
        return self._header.content_length

    @property
    def last_modified(self) -> datetime | None:
        if self._header is None:
            return None
        return self._header.last_modified

    def fetch_header(self) -> ObjectInfo:
        self._header = self._store.head(self._uri)
        LOG.debug("header of %s: %d bytes", self._uri, self._header.content_length)
        return self._header

    async def afetch_header(self) -> ObjectInfo:
        self._header = await _run_sync(self._store.head, self._uri)
        LOG.debug("header of %s: %d bytes", self._uri, self._header.content_length)
        return self._header

    def ensure_length(self) -> int:
        """Return the object size, fetching the header on first use."""
        if self._header is None:
            self.fetch_header()
        assert self._header is not None
        return self._header.content_length

    async def aensure_length(self) -> int:
        if self._header is None:
            await self.afetch_header()
        assert self._header is not None
        return self._header.content_length

    def _check_range(self, start: int, end: int, length: int) -> None:
        if start < 0 or end < start or start > length:
            raise InvalidRangeError(start, end)

    def _fetch(self, start: int, end: int) -> bytes:
        LOG.debug("Reading range %d-%d of %s", start, end, self._uri)
        return self._store.get_range(self._uri, start, end)

    def read_range(self, start: int, end: int) -> bytes:
        """Return the bytes from ``start`` through ``end``, both inclusive.

        Leaves the cursor where it is; use :meth:`seek` and :meth:`read` to
        keep track of a position.
        """
        self._check_range(start, end, self.ensure_length())
        return self._fetch(start, end)

    async def aread_range(self, start: int, end: int) -> bytes:
        self._check_range(start, end, await self.aensure_length())
        return await _run_sync(self._fetch, start, end)

    def _ensure_open(self) -> None:
        if self.closed:
            msg = "I/O operation on closed file."
            raise ValueError(msg)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def tell(self) -> int:
        self._ensure_open()
        return self._pos

    def seek(self, offset: int, whence: int = SEEK_SET, /) -> int:
        self._ensure_open()
        offset = check_seek_args(offset, whence)
        self._pos = seek_position(self.ensure_length(), self._pos, offset, whence)
        LOG.debug("seek %s to %d", self._uri, self._pos)
        return self._pos

    def readinto(self, buffer: Any) -> int:
        self._ensure_open()
        length = self.ensure_length()
        if self._pos >= length:
            return 0
        with memoryview(buffer) as view, view.cast("B") as target:
            size = target.nbytes
            if size == 0:
                return 0
            end = min(self._pos + size, length) - 1
            data = self.read_range(self._pos, end)
            # the store may hand back fewer or more bytes than asked for
            count = min(len(data), size)
            target[:count] = data[:count]
        self._pos += count
        return count

    def read_to_end(self, buffer: bytearray) -> int:
        """Append everything from the cursor to the end of the object to ``buffer``.

        Fetched in a single request. Returns the number of bytes appended.
        """
        self._ensure_open()
        length = self.ensure_length()
        if self._pos >= length:
            return 0
        data = self.read_range(self._pos, length - 1)
        count = min(len(data), length - self._pos)
        buffer += data[:count]
        self._pos += count
        return count

    def readall(self) -> bytes:
        buffer = bytearray()
        self.read_to_end(buffer)
        return bytes(buffer)

    def read_to_string(self, out: TextIO) -> int:
        """Write the rest of the object to the text stream ``out``.

        Bytes map one-to-one onto code points (latin-1); no decoding or
        validation is attempted. Returns the number of characters written.
        """
        buffer = bytearray()
        self.read_to_end(buffer)
        text = buffer.decode("latin-1")
        out.write(text)
        return len(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uri={str(self._uri)!r}, pos={self._pos})"
