"""
Layer name encodings.

Unicode layer names are stored as big-endian UTF-16 code units and converted
to UTF-8 here. Surrogate pairs are not combined: every unit in the surrogate
range becomes ``?``, so characters outside the Basic Multilingual Plane are
lost.

Legacy Pascal names carry no reliable encoding, so every name goes through
:py:func:`sanitize_utf8` before it reaches the layer tree.
"""

import logging

logger = logging.getLogger(__name__)

PLACEHOLDER = b"?"
REPLACEMENT = b"_"


def utf16be_to_utf8(data: bytes) -> bytes:
    """
    Convert UTF-16BE code units to UTF-8 bytes.

    A dangling odd byte at the end is dropped.
    """
    result = bytearray()
    for i in range(0, len(data) - 1, 2):
        code = (data[i] << 8) | data[i + 1]
        if 0xD800 <= code <= 0xDFFF:
            result += PLACEHOLDER
        elif code <= 0x7F:
            result.append(code)
        elif code <= 0x7FF:
            result.append(0xC0 | (code >> 6))
            result.append(0x80 | (code & 0x3F))
        else:
            result.append(0xE0 | (code >> 12))
            result.append(0x80 | ((code >> 6) & 0x3F))
            result.append(0x80 | (code & 0x3F))
    return bytes(result)


def _sequence_length(data: bytes, i: int) -> int:
    """Length of the valid UTF-8 sequence at ``i``, or 0 when invalid."""
    lead = data[i]
    if lead <= 0x7F:
        return 1
    if 0xC2 <= lead <= 0xDF:
        size = 2
    elif 0xE0 <= lead <= 0xEF:
        size = 3
    elif 0xF0 <= lead <= 0xF4:
        size = 4
    else:
        return 0
    if i + size > len(data):
        return 0
    if all(0x80 <= data[j] <= 0xBF for j in range(i + 1, i + size)):
        return size
    return 0


def is_valid_utf8(data: bytes) -> bool:
    i = 0
    while i < len(data):
        size = _sequence_length(data, i)
        if not size:
            return False
        i += size
    return True


def sanitize_utf8(data: bytes) -> bytes:
    """
    Return ``data`` unchanged when it is valid UTF-8.

    Otherwise every byte from 0x80 upwards is replaced by ``_``, including
    the bytes of sequences that were valid on their own.
    """
    if is_valid_utf8(data):
        return data
    logger.warning(
        "Invalid UTF-8 detected, replacing non-ASCII bytes: %r" % data[:20]
    )
    return bytes(b if b < 0x80 else REPLACEMENT[0] for b in data)


def decode_name(data: bytes) -> str:
    """Sanitize a raw layer name and decode it to ``str``."""
    # The byte grammar above admits overlong and surrogate forms that the
    # strict codec rejects.
    return sanitize_utf8(data).decode("utf-8", "replace")
