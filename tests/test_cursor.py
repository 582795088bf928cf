from __future__ import annotations

import io

import pytest

from coffdump.core.cursor import ByteCursor
from coffdump.core.errors import OutOfRangeError, TruncatedError


def test_reads_big_endian_integers():
    cursor = ByteCursor(bytes([0x01, 0x50, 0xDE, 0xAD, 0xBE, 0xEF, 0xFF, 0xFE, 0x7F]))
    assert cursor.read_u16() == 0x0150
    assert cursor.read_u32() == 0xDEADBEEF
    assert cursor.read_i16() == -2
    assert cursor.read_u8() == 0x7F
    assert cursor.position == 9
    assert cursor.remaining == 0


def test_read_exact_advances_by_length():
    cursor = ByteCursor(b"abcdef")
    assert cursor.read_exact(4) == b"abcd"
    assert cursor.position == 4
    assert cursor.read_exact(2) == b"ef"


def test_short_read_raises_and_keeps_position():
    cursor = ByteCursor(b"\x00" * 19)
    cursor.read_exact(3)
    with pytest.raises(TruncatedError) as info:
        cursor.read_exact(20)
    assert info.value.expected == 20
    assert info.value.available == 16
    assert info.value.offset == 3
    assert cursor.position == 3


def test_seek_to_end_is_legal_but_read_fails():
    cursor = ByteCursor(b"\x01\x02\x03\x04")
    cursor.seek_absolute(4)
    assert cursor.remaining == 0
    with pytest.raises(TruncatedError):
        cursor.read_u8()


@pytest.mark.parametrize("target", [5, 1 << 20, -1])
def test_seek_outside_source_raises(target):
    cursor = ByteCursor(b"\x01\x02\x03\x04")
    with pytest.raises(OutOfRangeError) as info:
        cursor.seek_absolute(target)
    assert info.value.target == target
    assert info.value.size == 4
    assert cursor.position == 0


def test_wraps_binary_stream():
    stream = io.BytesIO(b"\x00\x00\x00\x2a tail")
    cursor = ByteCursor(stream)
    assert cursor.size == 9
    cursor.seek_absolute(0)
    assert cursor.read_u32() == 42


def test_error_message_carries_context():
    cursor = ByteCursor(b"\x00")
    with pytest.raises(TruncatedError) as info:
        cursor.read_u32()
    text = str(info.value)
    assert "expected 4 bytes" in text
    assert "1 available" in text
    assert "offset=0x0" in text
