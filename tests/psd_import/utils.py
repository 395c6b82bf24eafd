"""
Builders for synthetic PSD byte streams.
"""

import logging
import struct
from typing import Any, Optional, Sequence

from psd_import.compression import encode_rle
from psd_import.constants import Compression

logging.basicConfig(level=logging.DEBUG)

#: 2x2 RGBA pixels, one plane per channel ID.
RGBA_PLANES = {
    0: bytes([10, 20, 30, 40]),
    1: bytes([50, 60, 70, 80]),
    2: bytes([90, 100, 110, 120]),
    -1: bytes([255, 255, 255, 255]),
}


def pack(fmt: str, *args: Any) -> bytes:
    return struct.pack(">" + fmt, *args)


def make_header(
    channels: int = 4,
    height: int = 2,
    width: int = 2,
    depth: int = 8,
    color_mode: int = 3,
    signature: bytes = b"8BPS",
    version: int = 1,
) -> bytes:
    return pack(
        "4sH6xHIIHH", signature, version, channels, height, width, depth, color_mode
    )


def make_pascal_string(name: bytes, padding: int = 4) -> bytes:
    data = pack("B", len(name)) + name
    return data + b"\x00" * (-len(data) % padding)


def make_tagged_block(key: bytes, payload: bytes, signature: bytes = b"8BIM") -> bytes:
    return pack("4s4sI", signature, key, len(payload)) + payload + b"\x00" * (
        len(payload) % 2
    )


def make_divider(kind: int) -> bytes:
    return make_tagged_block(b"lsct", pack("I", kind))


def make_unicode_name(name: str) -> bytes:
    units = name.encode("utf-16-be")
    return make_tagged_block(b"luni", pack("I", len(units) // 2) + units)


def make_channel(
    plane: bytes, width: int, height: int, compression: int = Compression.RAW
) -> bytes:
    if compression == Compression.RLE:
        return pack("H", compression) + encode_rle(plane, width, height)
    return pack("H", compression) + plane


def make_layer(
    name: bytes = b"",
    bbox: Sequence[int] = (0, 0, 0, 0),
    channels: Optional[dict] = None,
    compression: int = Compression.RAW,
    blend_mode: bytes = b"norm",
    opacity: int = 255,
    flags: int = 0,
    blocks: bytes = b"",
    signature: bytes = b"8BIM",
) -> tuple[bytes, bytes]:
    """
    Build a layer record and its channel image data.

    :param bbox: (top, left, bottom, right) as stored in the record.
    :param channels: dict of channel ID to uncompressed plane.
    :return: (record bytes, channel data bytes)
    """
    top, left, bottom, right = bbox
    width, height = right - left, bottom - top
    data = [
        (channel_id, make_channel(plane, width, height, compression))
        for channel_id, plane in (channels or {}).items()
    ]
    extra = pack("I", 0) + pack("I", 0) + make_pascal_string(name) + blocks
    return (
        pack("4iH", top, left, bottom, right, len(data))
        + b"".join(pack("hI", channel_id, len(payload)) for channel_id, payload in data)
        + pack("4s4sBB", signature, blend_mode, opacity, 0)
        + pack("B", flags)
        + pack("xI", len(extra))
        + extra,
        b"".join(payload for _, payload in data),
    )


def make_group_open(name: bytes = b"", kind: int = 1, flags: int = 0) -> tuple[bytes, bytes]:
    return make_layer(name, flags=flags, blocks=make_divider(kind))


def make_group_close() -> tuple[bytes, bytes]:
    return make_layer(b"</Layer group>", blocks=make_divider(3))


def make_layer_info(layers: Sequence[tuple[bytes, bytes]], count: Optional[int] = None) -> bytes:
    body = (
        pack("h", len(layers) if count is None else count)
        + b"".join(record for record, _ in layers)
        + b"".join(data for _, data in layers)
    )
    return pack("I", len(body)) + body


def make_psd(
    layers: Sequence[tuple[bytes, bytes]] = (),
    header: Optional[bytes] = None,
    color_mode_data: bytes = b"",
    image_resources: bytes = b"",
) -> bytes:
    if layers:
        layer_info = make_layer_info(layers)
        layer_and_mask = pack("I", len(layer_info)) + layer_info
    else:
        layer_and_mask = pack("I", 0)
    return (
        (header if header is not None else make_header())
        + pack("I", len(color_mode_data))
        + color_mode_data
        + pack("I", len(image_resources))
        + image_resources
        + layer_and_mask
    )
