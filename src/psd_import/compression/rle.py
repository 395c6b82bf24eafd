"""
PackBits run-length codec.

Every run starts with a header byte ``n``:

- ``0 <= n <= 127``: copy the next ``n + 1`` bytes literally
- ``n == 128``: no-op
- ``129 <= n <= 255``: repeat the next byte ``257 - n`` times

Example::

    Input:  [A, A, A, B, C, C, C, C]
    Output: [254, A, 0, B, 253, C]

The decoder is lenient: a run that is cut short by the end of the data is
dropped and everything decoded up to that point is returned.
"""

import logging

logger = logging.getLogger(__name__)

NOOP = 128
MAX_RUN = 128


def decode(data: bytes) -> bytes:
    """decode(data) -> bytes

    Decode the whole of ``data`` as one PackBits stream.
    """
    length = len(data)
    result = bytearray()
    i = 0
    while i < length:
        header = data[i]
        i += 1
        if header < NOOP:
            count = header + 1
            if i + count > length:
                logger.warning(
                    "RLE literal run truncated: need %d bytes, %d left"
                    % (count, length - i)
                )
                break
            result += data[i : i + count]
            i += count
        elif header > NOOP:
            if i >= length:
                logger.warning("RLE repeat run truncated at offset %d" % (i - 1))
                break
            result += data[i : i + 1] * (257 - header)
            i += 1
    return bytes(result)


def encode(data: bytes) -> bytes:
    """encode(data) -> bytes

    PackBits encoder. Runs of three or more equal bytes become repeat runs,
    everything else is stored in literal runs of at most 128 bytes.
    """
    length = len(data)
    result = bytearray()
    literal_start = 0
    i = 0
    while i < length:
        run = 1
        while i + run < length and run < MAX_RUN and data[i + run] == data[i]:
            run += 1
        if run >= 3:
            _flush_literal(result, data, literal_start, i)
            result.append(257 - run)
            result.append(data[i])
            i += run
            literal_start = i
        else:
            i += run
            if i - literal_start >= MAX_RUN:
                _flush_literal(result, data, literal_start, literal_start + MAX_RUN)
                literal_start += MAX_RUN
    _flush_literal(result, data, literal_start, length)
    return bytes(result)


def _flush_literal(result: bytearray, data: bytes, start: int, end: int) -> None:
    while start < end:
        chunk = data[start : min(end, start + MAX_RUN)]
        result.append(len(chunk) - 1)
        result += chunk
        start += len(chunk)
