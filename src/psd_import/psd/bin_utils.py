"""
Binary reading helpers.

All values are big-endian. Functions take a seekable binary file-like object
and advance it; ``fp.tell()`` and ``fp.seek()`` provide the absolute and
relative offsets used for length bookkeeping. Reading past the end of the
input raises :py:class:`~psd_import.errors.UnexpectedEndOfInput`.
"""

import struct
from typing import Any, BinaryIO

from psd_import.errors import UnexpectedEndOfInput


def pack(fmt: str, *args: Any) -> bytes:
    fmt = ">" + fmt
    return struct.pack(fmt, *args)


def unpack(fmt: str, data: bytes) -> tuple[Any, ...]:
    fmt = ">" + fmt
    return struct.unpack(fmt, data)


def read_bytes(fp: BinaryIO, size: int) -> bytes:
    """
    Reads exactly ``size`` bytes from ``fp``.
    """
    if size < 0:
        raise ValueError("Negative read size %d" % size)
    offset = fp.tell()
    data = fp.read(size)
    if len(data) != size:
        raise UnexpectedEndOfInput(size, len(data), offset)
    return data


def read_fmt(fmt: str, fp: BinaryIO) -> tuple[Any, ...]:
    """
    Reads data from ``fp`` according to ``fmt``.
    """
    fmt = ">" + fmt
    return struct.unpack(fmt, read_bytes(fp, struct.calcsize(fmt)))


def read_length_block(fp: BinaryIO, fmt: str = "I", padding: int = 1) -> bytes:
    """
    Read a block of data with a length marker at the beginning.

    :param fp: file-like
    :param fmt: format of the length marker
    :param padding: divisor of the byte alignment of the block
    :return: bytes object
    """
    length = read_fmt(fmt, fp)[0]
    data = read_bytes(fp, length)
    read_padding(fp, length, padding)
    return data


def read_padding(fp: BinaryIO, size: int, divisor: int = 2) -> bytes:
    """
    Read padding bytes for the given byte size.

    :param fp: file-like object
    :param size: size of the data preceding the padding
    :param divisor: divisor of the byte alignment
    :return: padding bytes
    """
    return read_bytes(fp, padding_size(size, divisor))


def padding_size(size: int, divisor: int) -> int:
    """Number of bytes needed to align ``size`` to ``divisor``."""
    remainder = size % divisor
    if remainder:
        return divisor - remainder
    return 0


def read_pascal_string(fp: BinaryIO, padding: int = 1) -> bytes:
    """
    Reads a length-prefixed string.

    The length byte and the characters together are padded to a multiple of
    ``padding``. The raw bytes are returned; the legacy encoding of layer
    names is not reliable enough to decode here.
    """
    length = read_fmt("B", fp)[0]
    data = read_bytes(fp, length)
    read_padding(fp, length + 1, padding)
    return data


def is_readable(fp: BinaryIO, size: int = 1) -> bool:
    """
    Check if the file-like object has at least ``size`` bytes left.

    :param fp: file-like object
    :param size: byte size
    :return: bool
    """
    read_size = len(fp.read(size))
    fp.seek(-read_size, 1)
    return read_size == size


def trimmed_repr(data: bytes, trim_length: int = 20) -> str:
    if len(data) > trim_length:
        return repr(data[:trim_length] + b" ... =" + str(len(data)).encode("ascii"))
    return repr(data)
