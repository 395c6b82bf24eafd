"""
Channel decoding and pixel compositing.

Channel planes are decoded into the canonical R, G, B, A order and then
interleaved into a single RGBA array per layer.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from psd_import.constants import ChannelID
from psd_import.errors import FatalFormatError
from psd_import.psd.document import PSD
from psd_import.psd.layer_and_mask import ChannelData, LayerRecord

logger = logging.getLogger(__name__)

#: Channel IDs mapped to the R, G, B and A planes.
CHANNEL_IDS = frozenset(ChannelID)

#: Value used for R, G, B and A where a plane is shorter than the layer.
DEFAULT_PIXEL = (0, 0, 0, 255)


def get_channel_planes(
    record: LayerRecord, channels: Sequence[ChannelData]
) -> list[bytes]:
    """
    Decode the channels of a layer into ``[R, G, B, A]`` planes.

    Missing channels are empty bytes. Channels other than the color channels
    and the transparency mask are ignored.
    """
    planes = {}
    for info, channel in zip(record.channel_info, channels):
        if info.id not in CHANNEL_IDS:
            logger.debug("Ignoring channel %d of %r" % (info.id, record.name))
            continue
        planes[info.id] = channel.get_data(record.height)

    return [
        planes.get(ChannelID.CHANNEL_0, b""),
        planes.get(ChannelID.CHANNEL_1, b""),
        planes.get(ChannelID.CHANNEL_2, b""),
        planes.get(
            ChannelID.TRANSPARENCY_MASK,
            planes.get(ChannelID.TRANSPARENCY_MASK_ALIAS, b""),
        ),
    ]


def decode_layers(psd: PSD) -> list[tuple[LayerRecord, list[bytes]]]:
    """
    Decode the channel planes of every layer, in file order.

    All planes are held in memory at once.
    """
    return [
        (record, get_channel_planes(record, channels))
        for record, channels in psd.iter_layers()
    ]


def composite_planes(
    planes: Sequence[bytes], width: int, height: int
) -> Optional[np.ndarray]:
    """
    Interleave ``[R, G, B, A]`` planes into a ``(height, width, 4)`` array.

    Pixels past the end of a short plane get the value of
    :py:data:`DEFAULT_PIXEL`. An empty alpha plane makes the layer opaque.

    :return: uint8 array, or None when the layer has no pixels.
    :raises FatalFormatError: if the layer is too large to allocate.
    """
    if width <= 0 or height <= 0 or len(planes) < 4:
        return None

    size = width * height
    try:
        pixels = np.empty((size, 4), dtype=np.uint8)
    except (ValueError, MemoryError) as e:
        raise FatalFormatError(
            "Layer of %dx%d pixels cannot be allocated: %s" % (width, height, e)
        ) from e
    for index, (plane, default) in enumerate(zip(planes[:3], DEFAULT_PIXEL)):
        _fill_channel(pixels[:, index], plane, default)

    alpha = planes[3]
    if len(alpha) == 0:
        pixels[:, 3] = 255
    else:
        _fill_channel(pixels[:, 3], alpha, DEFAULT_PIXEL[3])

    return pixels.reshape((height, width, 4))


def _fill_channel(target: np.ndarray, plane: bytes, default: int) -> None:
    size = len(target)
    if len(plane) != size:
        logger.debug("Channel has %d bytes, expected %d" % (len(plane), size))
    count = min(len(plane), size)
    if count:
        target[:count] = np.frombuffer(plane, np.uint8, count)
    target[count:] = default
