"""
Byte Cursor
============

Seekable, bounded, big-endian reader over a binary byte source.

The COFF variant handled by coffdump lays its records out as fixed-width,
big-endian, non-padded C structures, so every integer read here is a
fixed-width :mod:`struct` unpack with the ``>`` byte-order prefix.  There is
no variable-length encoding anywhere in the format.

Usage::

    with open(path, "rb") as fh:
        cursor = ByteCursor(fh)
        cursor.seek_absolute(0x40)
        magic = cursor.read_u16()
"""

from __future__ import annotations

import io
import os
import struct
from typing import BinaryIO

from coffdump.core.errors import OutOfRangeError, ReadError, TruncatedError


_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_I16 = struct.Struct(">h")
_U32 = struct.Struct(">I")


class ByteCursor:
    """Absolute-offset cursor over a finite, seekable byte source.

    Args:
        source: An open binary stream (must support ``seek``/``tell``) or a
                ``bytes``-like object, which is wrapped in :class:`io.BytesIO`.
    """

    def __init__(self, source: BinaryIO | bytes | bytearray | memoryview) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self._stream: BinaryIO = source
        try:
            self._size: int = self._stream.seek(0, os.SEEK_END)
            self._stream.seek(0, os.SEEK_SET)
        except OSError as exc:
            raise ReadError(f"Byte source is not seekable: {exc}") from exc
        self._position: int = 0

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def position(self) -> int:
        """Current absolute offset."""
        return self._position

    @property
    def size(self) -> int:
        """Total length of the byte source."""
        return self._size

    @property
    def remaining(self) -> int:
        """Number of bytes between the cursor and the end of the source."""
        return max(self._size - self._position, 0)

    # ------------------------------------------------------------------ #
    #  Positioning
    # ------------------------------------------------------------------ #

    def seek_absolute(self, offset: int) -> None:
        """Move the cursor to *offset*.

        Seeking exactly to the end of the source is allowed; the next read
        will then fail with :class:`TruncatedError`.

        Raises:
            OutOfRangeError: If *offset* is negative or past the end.
            ReadError: If the underlying stream fails to seek.
        """
        if offset < 0 or offset > self._size:
            raise OutOfRangeError(offset, self._size)
        try:
            self._stream.seek(offset, os.SEEK_SET)
        except OSError as exc:
            raise ReadError(f"Seek failed: {exc}", offset=offset) from exc
        self._position = offset

    # ------------------------------------------------------------------ #
    #  Reads
    # ------------------------------------------------------------------ #

    def read_exact(self, n: int) -> bytes:
        """Read exactly *n* bytes and advance the cursor by *n*.

        A short read leaves the cursor where it was.

        Raises:
            TruncatedError: If fewer than *n* bytes remain.
            ReadError: If the underlying stream fails.
        """
        available = self.remaining
        if available < n:
            raise TruncatedError(n, available, offset=self._position)
        try:
            data = self._stream.read(n)
        except OSError as exc:
            raise ReadError(f"Read failed: {exc}", offset=self._position) from exc
        if len(data) != n:
            # Source shrank underneath us.
            self._stream.seek(self._position, os.SEEK_SET)
            raise TruncatedError(n, len(data), offset=self._position)
        self._position += n
        return data

    def read_struct(self, layout: struct.Struct) -> tuple:
        """Read ``layout.size`` bytes and unpack them with *layout*."""
        return layout.unpack(self.read_exact(layout.size))

    def read_u8(self) -> int:
        return self.read_struct(_U8)[0]

    def read_u16(self) -> int:
        return self.read_struct(_U16)[0]

    def read_i16(self) -> int:
        return self.read_struct(_I16)[0]

    def read_u32(self) -> int:
        return self.read_struct(_U32)[0]

    def __repr__(self) -> str:
        return f"ByteCursor(position=0x{self._position:x}, size={self._size})"
