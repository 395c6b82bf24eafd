import io
import logging

import pytest

from psd_import.constants import SectionDivider, Tag
from psd_import.psd.tagged_blocks import (
    SectionDividerSetting,
    TaggedBlocks,
    UnicodeLayerName,
)

from ..utils import make_divider, make_tagged_block, make_unicode_name, pack

logger = logging.getLogger(__name__)


@pytest.mark.parametrize("kind", [0, 1, 2, 3])
def test_section_divider(kind: int) -> None:
    blocks = TaggedBlocks.frombytes(make_divider(kind))
    setting = blocks.get_data(Tag.SECTION_DIVIDER_SETTING)
    assert isinstance(setting, SectionDividerSetting)
    assert setting.kind == SectionDivider(kind)
    assert setting.kind.opens_group == (kind != 3)


def test_section_divider_with_extra_fields() -> None:
    payload = pack("I", 1) + b"8BIMnorm" + pack("I", 0)
    blocks = TaggedBlocks.frombytes(make_tagged_block(b"lsct", payload))
    assert blocks.get_data(Tag.SECTION_DIVIDER_SETTING).kind == SectionDivider.OPEN_FOLDER


@pytest.mark.parametrize(
    "payload",
    [b"\x00\x01", pack("I", 7)],
)
def test_invalid_section_divider(payload: bytes) -> None:
    blocks = TaggedBlocks.frombytes(make_tagged_block(b"lsct", payload))
    assert Tag.SECTION_DIVIDER_SETTING not in blocks


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Layer 1", b"Layer 1"),
        ("été", "été".encode("utf-8")),
        ("レイヤー", "レイヤー".encode("utf-8")),
        ("\U0001f600", b"??"),
    ],
)
def test_unicode_layer_name(name: str, expected: bytes) -> None:
    blocks = TaggedBlocks.frombytes(make_unicode_name(name))
    assert blocks.get_data(Tag.UNICODE_LAYER_NAME) == expected


def test_empty_unicode_layer_name() -> None:
    blocks = TaggedBlocks.frombytes(make_tagged_block(b"luni", pack("I", 0)))
    assert Tag.UNICODE_LAYER_NAME not in blocks
    assert blocks.get_data(Tag.UNICODE_LAYER_NAME, b"legacy") == b"legacy"


def test_unicode_layer_name_count_too_large() -> None:
    payload = pack("I", 10) + "ab".encode("utf-16-be")
    blocks = TaggedBlocks.frombytes(make_tagged_block(b"luni", payload))
    assert Tag.UNICODE_LAYER_NAME not in blocks


def test_unicode_layer_name_read() -> None:
    assert UnicodeLayerName.frombytes(pack("I", 1) + b"\x00A") == b"A"


def test_unknown_key_is_skipped() -> None:
    data = make_tagged_block(b"lyid", pack("I", 5)) + make_divider(1)
    blocks = TaggedBlocks.frombytes(data)
    assert len(blocks) == 1
    assert list(blocks) == [Tag.SECTION_DIVIDER_SETTING]


def test_odd_payload_is_padded() -> None:
    data = make_tagged_block(b"xxxx", b"abc") + make_unicode_name("A")
    blocks = TaggedBlocks.frombytes(data)
    assert blocks.get_data(Tag.UNICODE_LAYER_NAME) == b"A"


def test_invalid_signature_stops_scan() -> None:
    data = make_divider(1) + make_tagged_block(b"luni", pack("I", 0), b"XXXX")
    data += make_unicode_name("B")
    with io.BytesIO(data) as f:
        blocks = TaggedBlocks.read(f)
        assert f.tell() == len(make_divider(1)) + 4
    assert list(blocks) == [Tag.SECTION_DIVIDER_SETTING]


def test_oversized_block_stops_scan() -> None:
    data = make_divider(2) + pack("4s4sI", b"8BIM", b"luni", 100) + b"\x00" * 8
    blocks = TaggedBlocks.frombytes(data)
    assert list(blocks) == [Tag.SECTION_DIVIDER_SETTING]


def test_short_tail_is_ignored() -> None:
    blocks = TaggedBlocks.frombytes(make_divider(3) + b"8BIM\x00\x00")
    assert blocks.get_data(Tag.SECTION_DIVIDER_SETTING).kind == (
        SectionDivider.BOUNDING_SECTION_DIVIDER
    )
