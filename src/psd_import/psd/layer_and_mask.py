"""
Layer and mask data structures.

This module reads the "Layer and Mask Information" section:

- :py:class:`LayerAndMaskInformation`: top-level container
- :py:class:`LayerInfo`: layer records followed by channel image data
- :py:class:`LayerRecords`: list of :py:class:`LayerRecord`
- :py:class:`LayerRecord`: bounds, channels, blend mode, opacity, flags, name
  and tagged blocks of a single layer
- :py:class:`ChannelInfo`: channel ID and byte size within a layer record
- :py:class:`ChannelImageData`: per-layer lists of :py:class:`ChannelData`

Layers are stored as a flat list. Group boundaries are marked by records
holding a section divider tagged block; see :py:mod:`psd_import.api.tree`
for the reconstruction of the tree.

Masks, blending ranges and the global layer mask are skipped.
"""

import io
import logging
from typing import Any, BinaryIO, Optional, TypeVar

from attrs import define, field

from psd_import.compression import decompress
from psd_import.constants import BLOCK_SIGNATURE, SectionDivider, Tag
from psd_import.errors import FatalFormatError
from psd_import.psd.base import BaseElement, ListElement
from psd_import.psd.bin_utils import (
    read_bytes,
    read_fmt,
    read_length_block,
    read_pascal_string,
    unpack,
)
from psd_import.psd.tagged_blocks import TaggedBlocks
from psd_import.validators import range_

logger = logging.getLogger(__name__)

T_LayerAndMaskInformation = TypeVar(
    "T_LayerAndMaskInformation", bound="LayerAndMaskInformation"
)
T_LayerInfo = TypeVar("T_LayerInfo", bound="LayerInfo")
T_ChannelInfo = TypeVar("T_ChannelInfo", bound="ChannelInfo")
T_LayerFlags = TypeVar("T_LayerFlags", bound="LayerFlags")
T_LayerRecords = TypeVar("T_LayerRecords", bound="LayerRecords")
T_LayerRecord = TypeVar("T_LayerRecord", bound="LayerRecord")
T_ChannelImageData = TypeVar("T_ChannelImageData", bound="ChannelImageData")
T_ChannelData = TypeVar("T_ChannelData", bound="ChannelData")


@define(repr=False)
class LayerAndMaskInformation(BaseElement):
    """
    Layer and mask information section.

    .. py:attribute:: layer_info

        See :py:class:`.LayerInfo`. None when the section is empty.
    """

    layer_info: Optional["LayerInfo"] = None

    @classmethod
    def read(
        cls: type[T_LayerAndMaskInformation], fp: BinaryIO, **kwargs: Any
    ) -> T_LayerAndMaskInformation:
        start_pos = fp.tell()
        length = read_fmt("I", fp)[0]
        end_pos = fp.tell() + length
        logger.debug(
            "reading layer and mask info, len=%d, offset=%d" % (length, start_pos)
        )
        if length == 0:
            return cls()

        self = cls(LayerInfo.read(fp))
        if fp.tell() > end_pos:
            logger.warning(
                "LayerAndMaskInformation is broken: current fp=%d, expected=%d"
                % (fp.tell(), end_pos)
            )
        else:
            fp.seek(end_pos, 0)
        return self

    @property
    def layer_count(self) -> int:
        return len(self.layer_info.layer_records) if self.layer_info else 0


@define(repr=False)
class LayerInfo(BaseElement):
    """
    High-level organization of the layer information.

    .. py:attribute:: layer_count

        Layer count as stored. If it is a negative number, its absolute value
        is the number of layers. The sign, which marks an alpha channel for
        the merged result, is otherwise ignored.

    .. py:attribute:: layer_records

        Information about each layer. See :py:class:`.LayerRecords`.

    .. py:attribute:: channel_image_data

        Channel image data. See :py:class:`.ChannelImageData`.
    """

    layer_count: int = 0
    layer_records: "LayerRecords" = field(factory=lambda: LayerRecords())
    channel_image_data: "ChannelImageData" = field(factory=lambda: ChannelImageData())

    @classmethod
    def read(cls: type[T_LayerInfo], fp: BinaryIO, **kwargs: Any) -> T_LayerInfo:
        length = read_fmt("I", fp)[0]
        logger.debug("reading layer info, len=%d" % length)
        if length == 0:
            return cls()
        start_pos = fp.tell()
        layer_count = read_fmt("h", fp)[0]
        layer_records = LayerRecords.read(fp, layer_count)
        logger.debug("  read layer records, len=%d" % (fp.tell() - start_pos))
        channel_image_data = ChannelImageData.read(fp, layer_records)
        if fp.tell() - start_pos > length:
            logger.warning(
                "Layer info overruns its length: %d > %d"
                % (fp.tell() - start_pos, length)
            )
        return cls(
            layer_count=layer_count,
            layer_records=layer_records,
            channel_image_data=channel_image_data,
        )


@define(repr=False)
class ChannelInfo(BaseElement):
    """
    Channel information.

    .. py:attribute:: id

        Channel ID: 0 = red, 1 = green, 2 = blue, -1 = transparency mask.
        Other IDs (user masks) are kept but not used. See
        :py:class:`~psd_import.constants.ChannelID`.

    .. py:attribute:: length

        Length of the corresponding channel data, including the compression
        tag.
    """

    id: int = 0
    length: int = 0

    @classmethod
    def read(cls: type[T_ChannelInfo], fp: BinaryIO, **kwargs: Any) -> T_ChannelInfo:
        channel_id, length = read_fmt("hI", fp)
        return cls(id=channel_id, length=length)

    def __repr__(self) -> str:
        return "ChannelInfo(id=%d, length=%d)" % (self.id, self.length)


@define(repr=False)
class LayerFlags(BaseElement):
    """
    Layer flags.

    .. py:attribute:: visible
    """

    visible: bool = True

    @classmethod
    def read(cls: type[T_LayerFlags], fp: BinaryIO, **kwargs: Any) -> T_LayerFlags:
        flags = read_fmt("B", fp)[0]
        # Bit 1 is set for hidden layers.
        return cls(visible=not bool(flags & 2))

    def __repr__(self) -> str:
        return "LayerFlags(visible=%r)" % self.visible


class LayerRecords(ListElement):
    """
    List of layer records. See :py:class:`.LayerRecord`.
    """

    @classmethod
    def read(  # type: ignore[override]
        cls: type[T_LayerRecords], fp: BinaryIO, layer_count: int, **kwargs: Any
    ) -> T_LayerRecords:
        items = []
        for index in range(abs(layer_count)):
            items.append(LayerRecord.read(fp, index=index))
        return cls(items)  # type: ignore[arg-type]


@define(repr=False)
class LayerRecord(BaseElement):
    """
    Layer record.

    .. py:attribute:: top

        Top position.

    .. py:attribute:: left

        Left position.

    .. py:attribute:: bottom

        Bottom position.

    .. py:attribute:: right

        Right position.

    .. py:attribute:: channel_info

        List of :py:class:`.ChannelInfo`.

    .. py:attribute:: blend_mode

        Blend mode key, a 4-byte code such as ``b'norm'``.

    .. py:attribute:: opacity

        Opacity, 0 = transparent, 255 = opaque.

    .. py:attribute:: flags

        See :py:class:`.LayerFlags`.

    .. py:attribute:: name

        Layer name in raw bytes. The Unicode name block, when present, has
        already replaced the legacy Pascal name.

    .. py:attribute:: tagged_blocks

        See :py:class:`~psd_import.psd.tagged_blocks.TaggedBlocks`.
    """

    top: int = 0
    left: int = 0
    bottom: int = 0
    right: int = 0
    channel_info: list[ChannelInfo] = field(factory=list)
    blend_mode: bytes = b"norm"
    opacity: int = field(default=255, validator=range_(0, 255))
    flags: LayerFlags = field(factory=LayerFlags)
    name: bytes = b""
    tagged_blocks: TaggedBlocks = field(factory=TaggedBlocks)

    @classmethod
    def read(
        cls: type[T_LayerRecord], fp: BinaryIO, index: int = 0, **kwargs: Any
    ) -> T_LayerRecord:
        start_pos = fp.tell()
        top, left, bottom, right, num_channels = read_fmt("4iH", fp)
        channel_info = [ChannelInfo.read(fp) for _ in range(num_channels)]
        signature, blend_mode, opacity, _clipping = read_fmt("4s4sBB", fp)
        if signature != BLOCK_SIGNATURE:
            raise FatalFormatError(
                "Invalid blend mode signature in layer %d: %r" % (index + 1, signature)
            )
        flags = LayerFlags.read(fp)

        data = read_length_block(fp, fmt="xI")
        logger.debug("  read layer record, len=%d" % (fp.tell() - start_pos))
        with io.BytesIO(data) as f:
            name, tagged_blocks = cls._read_extra(f)

        return cls(
            top=top,
            left=left,
            bottom=bottom,
            right=right,
            channel_info=channel_info,
            blend_mode=blend_mode,
            opacity=opacity,
            flags=flags,
            name=tagged_blocks.get_data(Tag.UNICODE_LAYER_NAME, name),
            tagged_blocks=tagged_blocks,
        )

    @classmethod
    def _read_extra(cls, fp: BinaryIO) -> tuple[bytes, TaggedBlocks]:
        mask_length = read_fmt("I", fp)[0]
        if mask_length:
            logger.debug("  skipping layer mask data, len=%d" % mask_length)
            read_bytes(fp, mask_length)
        read_length_block(fp)  # Blending ranges.
        name = read_pascal_string(fp, padding=4)
        tagged_blocks = TaggedBlocks.read(fp)
        return name, tagged_blocks

    @property
    def width(self) -> int:
        """Width of the layer, zero or negative when it has no pixels."""
        return self.right - self.left

    @property
    def height(self) -> int:
        """Height of the layer, zero or negative when it has no pixels."""
        return self.bottom - self.top

    @property
    def divider(self) -> Optional[SectionDivider]:
        """
        Section divider kind, or None for a layer that is not a group
        boundary.
        """
        setting = self.tagged_blocks.get_data(Tag.SECTION_DIVIDER_SETTING)
        if setting is None:
            return None
        return setting.kind

    def __repr__(self) -> str:
        return "LayerRecord(name=%r, bbox=(%d, %d, %d, %d), divider=%r)" % (
            self.name,
            self.left,
            self.top,
            self.right,
            self.bottom,
            self.divider,
        )


class ChannelImageData(ListElement):
    """
    List of channel data lists, one per layer record.

    Each item is a list of :py:class:`.ChannelData` in the order declared by
    the record's channel info.
    """

    @classmethod
    def read(  # type: ignore[override]
        cls: type[T_ChannelImageData],
        fp: BinaryIO,
        layer_records: Optional[LayerRecords] = None,
        **kwargs: Any,
    ) -> T_ChannelImageData:
        start_pos = fp.tell()
        items = []
        for layer in layer_records or []:
            items.append(
                [ChannelData.read(fp, info.length) for info in layer.channel_info]
            )
        logger.debug("  read channel image data, len=%d" % (fp.tell() - start_pos))
        return cls(items)  # type: ignore[arg-type]


@define(repr=False)
class ChannelData(BaseElement):
    """
    Channel data of a single channel, still compressed.

    .. py:attribute:: data

        Raw bytes including the leading 16-bit compression tag.
    """

    data: bytes = b""

    @classmethod
    def read(
        cls: type[T_ChannelData], fp: BinaryIO, length: int = 0, **kwargs: Any
    ) -> T_ChannelData:
        return cls(read_bytes(fp, length))

    @property
    def compression(self) -> Optional[int]:
        """Compression tag, or None when the data is too short to have one."""
        if len(self.data) < 2:
            return None
        return unpack("H", self.data[:2])[0]

    def get_data(self, height: int) -> bytes:
        """Get decompressed channel data.

        :param height: height of the layer.
        :return: decompressed bytes, empty when there is no data.
        """
        compression = self.compression
        if compression is None:
            return b""
        return decompress(self.data[2:], compression, height)

    def __repr__(self) -> str:
        return "ChannelData(compression=%r, len=%d)" % (
            self.compression,
            len(self.data),
        )
