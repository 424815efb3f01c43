"""Cursor arithmetic for seeking within an object of known length."""

from __future__ import annotations

import operator
from io import SEEK_CUR, SEEK_END, SEEK_SET

from .errors import NegativePositionError


def check_seek_args(offset: int, whence: int) -> int:
    """Validate ``whence`` and return ``offset`` converted to a plain int.

    Accepts anything implementing ``__index__`` except ``bool``.
    """
    if isinstance(offset, bool):
        msg = "offset must be an integer, not bool"
        raise TypeError(msg)
    try:
        offset = operator.index(offset)
    except TypeError:
        msg = f"offset must be an integer, not {type(offset).__name__}"
        raise TypeError(msg) from None
    if whence not in (SEEK_SET, SEEK_CUR, SEEK_END):
        msg = f"invalid whence ({whence}, should be {SEEK_SET}, {SEEK_CUR} or {SEEK_END})"
        raise ValueError(msg)
    return offset


def seek_position(length: int, cursor: int, offset: int, whence: int = SEEK_SET) -> int:
    """Return the cursor a seek would move to, always within ``[0, length]``.

    Seeking past the end clamps to ``length`` from every anchor. Seeking
    before the start raises NegativePositionError. No I/O happens here, the
    caller resolves ``length`` first.
    """
    offset = check_seek_args(offset, whence)

    if whence == SEEK_SET:
        anchor = 0
    elif whence == SEEK_CUR:
        anchor = cursor
    else:
        anchor = length

    if offset >= 0:
        return min(anchor + offset, length)
    if -offset > anchor:
        raise NegativePositionError(anchor + offset)
    return anchor + offset
