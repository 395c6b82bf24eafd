import io
import logging

import pytest

from psd_import.errors import FatalFormatError, UnexpectedEndOfInput
from psd_import.psd.bin_utils import (
    is_readable,
    pack,
    padding_size,
    read_bytes,
    read_fmt,
    read_length_block,
    read_pascal_string,
    trimmed_repr,
    unpack,
)

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "fmt, data, expected",
    [
        ("B", b"\xff", (255,)),
        ("b", b"\xff", (-1,)),
        ("H", b"\x01\x02", (0x0102,)),
        ("h", b"\xff\xfe", (-2,)),
        ("I", b"\x00\x00\x01\x00", (256,)),
        ("i", b"\xff\xff\xff\xff", (-1,)),
        ("hI", b"\xff\xff\x00\x00\x00\x0a", (-1, 10)),
    ],
)
def test_read_fmt(fmt: str, data: bytes, expected: tuple) -> None:
    with io.BytesIO(data) as f:
        assert read_fmt(fmt, f) == expected
        assert f.tell() == len(data)


def test_pack_unpack() -> None:
    assert pack("hI", -1, 10) == b"\xff\xff\x00\x00\x00\x0a"
    assert unpack("H", b"\x00\x01") == (1,)


def test_read_bytes_past_end() -> None:
    with io.BytesIO(b"\x01\x02\x03") as f:
        f.seek(1)
        with pytest.raises(UnexpectedEndOfInput) as excinfo:
            read_bytes(f, 4)
    assert excinfo.value.expected == 4
    assert excinfo.value.actual == 2
    assert excinfo.value.offset == 1
    assert isinstance(excinfo.value, FatalFormatError)


def test_read_fmt_past_end() -> None:
    with io.BytesIO(b"\x00\x01") as f:
        with pytest.raises(UnexpectedEndOfInput):
            read_fmt("I", f)


@pytest.mark.parametrize(
    "data, padding, expected, position",
    [
        (b"\x00\x00\x00\x03abc\x00", 1, b"abc", 7),
        (b"\x00\x00\x00\x03abc\x00", 2, b"abc", 8),
        (b"\x00\x00\x00\x00", 4, b"", 4),
    ],
)
def test_read_length_block(
    data: bytes, padding: int, expected: bytes, position: int
) -> None:
    with io.BytesIO(data) as f:
        assert read_length_block(f, padding=padding) == expected
        assert f.tell() == position


def test_read_length_block_with_pad_byte() -> None:
    with io.BytesIO(b"\x00\x00\x00\x00\x02ab") as f:
        assert read_length_block(f, fmt="xI") == b"ab"


@pytest.mark.parametrize(
    "data, expected, position",
    [
        (b"\x00\x00\x00\x00", b"", 4),
        (b"\x03abc", b"abc", 4),
        (b"\x04abcd\x00\x00\x00", b"abcd", 8),
        (b"\x05Layer\x00\x00", b"Layer", 8),
    ],
)
def test_read_pascal_string(data: bytes, expected: bytes, position: int) -> None:
    with io.BytesIO(data) as f:
        assert read_pascal_string(f, padding=4) == expected
        assert f.tell() == position


@pytest.mark.parametrize(
    "size, divisor, expected",
    [(0, 2, 0), (1, 2, 1), (2, 2, 0), (5, 4, 3), (8, 4, 0)],
)
def test_padding_size(size: int, divisor: int, expected: int) -> None:
    assert padding_size(size, divisor) == expected


def test_is_readable() -> None:
    with io.BytesIO(b"\x00" * 12) as f:
        assert is_readable(f, 12)
        assert f.tell() == 0
        f.seek(1)
        assert not is_readable(f, 12)
        assert f.tell() == 1


def test_trimmed_repr() -> None:
    assert trimmed_repr(b"abc") == repr(b"abc")
    assert trimmed_repr(b"a" * 30, trim_length=4) == repr(b"aaaa ... =30")
