import io
import logging

import numpy as np
import pytest

from psd_import.api.numpy_io import composite_planes, decode_layers, get_channel_planes
from psd_import.constants import Compression
from psd_import.errors import FatalFormatError
from psd_import.psd.document import PSD
from psd_import.psd.layer_and_mask import ChannelData, ChannelInfo, LayerRecord

from ..utils import make_layer, make_psd

logger = logging.getLogger(__name__)


def _record(channel_ids: list, bbox: tuple = (0, 0, 1, 2)) -> LayerRecord:
    top, left, bottom, right = bbox
    return LayerRecord(
        top=top,
        left=left,
        bottom=bottom,
        right=right,
        channel_info=[ChannelInfo(channel_id, 0) for channel_id in channel_ids],
    )


def _raw(data: bytes) -> ChannelData:
    return ChannelData(b"\x00\x00" + data)


def test_get_channel_planes_reorders() -> None:
    record = _record([-1, 2, 1, 0])
    channels = [_raw(b"\xff\xfe"), _raw(b"BB"), _raw(b"GG"), _raw(b"RR")]
    assert get_channel_planes(record, channels) == [b"RR", b"GG", b"BB", b"\xff\xfe"]


def test_get_channel_planes_missing_and_unknown() -> None:
    record = _record([0, -2, 5])
    channels = [_raw(b"RR"), _raw(b"MM"), _raw(b"XX")]
    assert get_channel_planes(record, channels) == [b"RR", b"", b"", b""]


def test_get_channel_planes_alpha_alias() -> None:
    record = _record([0xFFFF])
    assert get_channel_planes(record, [_raw(b"AA")])[3] == b"AA"


def test_get_channel_planes_alpha_precedence() -> None:
    record = _record([-1, 0xFFFF])
    channels = [_raw(b"\x01\x01"), _raw(b"\x02\x02")]
    assert get_channel_planes(record, channels)[3] == b"\x01\x01"
    record = _record([0xFFFF, -1])
    channels = [_raw(b"\x02\x02"), _raw(b"\x01\x01")]
    assert get_channel_planes(record, channels)[3] == b"\x01\x01"


def test_composite_planes_empty_alpha() -> None:
    planes = [bytes([10, 20]), bytes([30, 40]), bytes([50, 60]), b""]
    pixels = composite_planes(planes, 2, 1)
    assert pixels is not None
    assert pixels.shape == (1, 2, 4)
    assert pixels.dtype == np.uint8
    assert pixels.tobytes() == bytes([10, 30, 50, 255, 20, 40, 60, 255])


def test_composite_planes_short_planes() -> None:
    planes = [bytes([10]), b"", bytes([50, 60, 70]), bytes([0])]
    pixels = composite_planes(planes, 2, 1)
    assert pixels is not None
    assert pixels.tobytes() == bytes([10, 0, 50, 0, 0, 0, 60, 255])


@pytest.mark.parametrize(
    "planes, width, height",
    [
        ([b""] * 4, 0, 1),
        ([b""] * 4, 1, 0),
        ([b""] * 4, -3, 2),
        ([b""] * 3, 1, 1),
    ],
)
def test_composite_planes_none(planes: list, width: int, height: int) -> None:
    assert composite_planes(planes, width, height) is None


def test_composite_planes_too_large() -> None:
    with pytest.raises(FatalFormatError, match="4294967295x4294967295"):
        composite_planes([b""] * 4, 2**32 - 1, 2**32 - 1)


@pytest.mark.parametrize("compression", [Compression.RAW, Compression.RLE])
def test_decode_layers(compression: int) -> None:
    planes = {0: b"\x01\x02", 1: b"\x03\x04", 2: b"\x05\x06", -1: b"\x00\xff"}
    data = make_psd(
        [make_layer(b"A", bbox=(0, 0, 1, 2), channels=planes, compression=compression)]
    )
    layers = decode_layers(PSD.read(io.BytesIO(data)))
    assert len(layers) == 1
    record, decoded = layers[0]
    assert record.name == b"A"
    assert decoded == [b"\x01\x02", b"\x03\x04", b"\x05\x06", b"\x00\xff"]
