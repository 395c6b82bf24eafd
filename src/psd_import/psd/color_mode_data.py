"""
Color mode data structure.
"""

import logging
from typing import Any, BinaryIO, TypeVar

from attrs import define, field

from psd_import.constants import ColorMode
from psd_import.psd.base import BaseElement
from psd_import.psd.bin_utils import read_bytes, read_fmt

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ColorModeData")


@define(repr=False)
class ColorModeData(BaseElement):
    """
    Color mode data section of the PSD file.

    For indexed color images the data is the color table for the image in a
    non-interleaved order: all red values, then all green values, then all
    blue values. Other color modes skip the section.

    .. py:attribute:: palette

        List of ``(r, g, b)`` tuples, empty unless the document is indexed.
    """

    palette: list[tuple[int, int, int]] = field(factory=list)

    @classmethod
    def read(
        cls: type[T], fp: BinaryIO, color_mode: int = ColorMode.RGB, **kwargs: Any
    ) -> T:
        length = read_fmt("I", fp)[0]
        logger.debug("reading color mode data, len=%d" % length)
        if color_mode != ColorMode.INDEXED:
            fp.seek(length, 1)
            return cls()
        return cls(cls._interleave(read_bytes(fp, length)))

    @staticmethod
    def _interleave(data: bytes) -> list[tuple[int, int, int]]:
        size = len(data) // 3
        return list(zip(data[:size], data[size : 2 * size], data[2 * size : 3 * size]))

    def __repr__(self) -> str:
        return "ColorModeData(palette=<%d colors>)" % len(self.palette)
