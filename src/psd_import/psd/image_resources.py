"""
Image resources section structure.
"""

import logging
from typing import Any, BinaryIO, TypeVar

from attrs import define

from psd_import.psd.base import BaseElement
from psd_import.psd.bin_utils import read_fmt

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ImageResources")


@define(repr=True)
class ImageResources(BaseElement):
    """
    Image resources section of the PSD file.

    The resources (resolution, guides, thumbnails, ...) do not affect the
    layer tree, so only the size of the section is recorded.

    .. py:attribute:: length

        Byte size of the skipped section.
    """

    length: int = 0

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        length = read_fmt("I", fp)[0]
        logger.debug("skipping image resources, len=%d" % length)
        fp.seek(length, 1)
        return cls(length)
