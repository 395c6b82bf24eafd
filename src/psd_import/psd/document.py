"""
PSD document structure module.
"""

import logging
from typing import Any, BinaryIO, Iterator, TypeVar

from attrs import define, field

from .base import BaseElement
from .color_mode_data import ColorModeData
from .header import FileHeader
from .image_resources import ImageResources
from .layer_and_mask import ChannelData, LayerAndMaskInformation, LayerRecord

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="PSD")


@define(repr=False)
class PSD(BaseElement):
    """
    Low-level PSD file structure.

    Reading stops after the layer and mask information section; the merged
    image data that follows is not needed.

    Example::

        from psd_import.psd import PSD

        with open(input_file, 'rb') as f:
            psd = PSD.read(f)

        for record, channels in psd.iter_layers():
            print(record.name)

    .. py:attribute:: header

        See :py:class:`.FileHeader`.

    .. py:attribute:: color_mode_data

        See :py:class:`.ColorModeData`.

    .. py:attribute:: image_resources

        See :py:class:`.ImageResources`.

    .. py:attribute:: layer_and_mask_information

        See :py:class:`.LayerAndMaskInformation`.
    """

    header: FileHeader = field(factory=FileHeader)
    color_mode_data: ColorModeData = field(factory=ColorModeData)
    image_resources: ImageResources = field(factory=ImageResources)
    layer_and_mask_information: LayerAndMaskInformation = field(
        factory=LayerAndMaskInformation
    )

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        header = FileHeader.read(fp)
        logger.debug("read %s" % header)
        color_mode_data = ColorModeData.read(fp, header.color_mode)
        header.check_supported()
        return cls(
            header,
            color_mode_data,
            ImageResources.read(fp),
            LayerAndMaskInformation.read(fp),
        )

    def iter_layers(self) -> Iterator[tuple[LayerRecord, list[ChannelData]]]:
        """
        Iterate over (layer_record, channel_data) pairs in file order.
        """
        layer_info = self.layer_and_mask_information.layer_info
        if layer_info is not None:
            yield from zip(layer_info.layer_records, layer_info.channel_image_data)

    def __repr__(self) -> str:
        return "PSD(header=%r, layers=%d)" % (
            self.header,
            self.layer_and_mask_information.layer_count,
        )
