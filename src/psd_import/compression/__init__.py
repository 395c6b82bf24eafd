"""
Channel data compression.

Layer channel data starts with a 16-bit compression tag. Two methods are
supported:

- **RAW** (``Compression.RAW``): uncompressed bytes
- **RLE** (``Compression.RLE``): PackBits, preceded by a table of 16-bit
  per-scanline byte counts

The scanline table is skipped but not consulted: the rows are decoded as one
contiguous PackBits stream, see :py:mod:`psd_import.compression.rle`.

Example usage::

    from psd_import.compression import decompress, encode_rle
    from psd_import.constants import Compression

    encoded = encode_rle(raw_pixels, width=100, height=100)
    raw_pixels = decompress(encoded, Compression.RLE, height=100)
"""

import io
import logging

from psd_import.compression import rle
from psd_import.constants import Compression
from psd_import.psd.bin_utils import pack

logger = logging.getLogger(__name__)


def decompress(data: bytes, compression: int, height: int) -> bytes:
    """Decompress channel data.

    :param data: channel bytes following the compression tag.
    :param compression: compression tag, see
            :py:class:`~psd_import.constants.Compression`.
    :param height: height of the layer in scanlines.
    :return: decompressed bytes, possibly shorter than the layer area.
    """
    if compression == Compression.RLE:
        return decode_rle(data, height)
    if compression != Compression.RAW:
        logger.warning(
            "Unsupported compression %d, reading %d bytes as raw data"
            % (compression, len(data))
        )
    return data


def decode_rle(data: bytes, height: int) -> bytes:
    if height <= 0:
        logger.debug("Skipping RLE channel of an empty layer")
        return b""
    table_size = 2 * height
    if len(data) < table_size:
        logger.warning(
            "RLE channel too short for its scanline table: %d < %d"
            % (len(data), table_size)
        )
        return b""
    rows = data[table_size:]
    # Writers pad odd-length rows with a no-op byte.
    if rows and len(rows) % 2 == 0 and rows[-1] == rle.NOOP:
        rows = rows[:-1]
    return rle.decode(rows)


def encode_rle(data: bytes, width: int, height: int) -> bytes:
    """Encode 8-bit channel data as PackBits rows with a scanline table."""
    rows = [rle.encode(data[y * width : (y + 1) * width]) for y in range(height)]
    with io.BytesIO() as fp:
        for row in rows:
            fp.write(pack("H", len(row)))
        for row in rows:
            fp.write(row)
        return fp.getvalue()
