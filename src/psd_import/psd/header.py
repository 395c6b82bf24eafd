"""
File header structure.
"""

import logging
from typing import Any, BinaryIO, TypeVar

from attrs import define, field

from psd_import.constants import (
    PSD_SIGNATURE,
    SUPPORTED_CHANNELS,
    SUPPORTED_DEPTH,
    SUPPORTED_VERSION,
    ColorMode,
)
from psd_import.errors import FatalFormatError
from psd_import.psd.base import BaseElement
from psd_import.psd.bin_utils import read_fmt

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="FileHeader")


@define(repr=True)
class FileHeader(BaseElement):
    """
    Header section of the PSD file.

    The signature and the version are checked while reading; the remaining
    limits of the supported subset are checked by
    :py:meth:`check_supported`, after the color mode data has been read.

    .. py:attribute:: signature

        Signature: always equal to ``b'8BPS'``.

    .. py:attribute:: version

        Version number. Only 1 (PSD) is supported.

    .. py:attribute:: channels

        The number of channels in the image: 3 for RGB, 4 for RGBA.

    .. py:attribute:: height

        The height of the image in pixels.

    .. py:attribute:: width

        The width of the image in pixels.

    .. py:attribute:: depth

        The number of bits per channel.

    .. py:attribute:: color_mode

        The color mode of the file as an integer. See
        :py:class:`~psd_import.constants.ColorMode`
    """

    _FORMAT = "4sH6xHIIHH"

    signature: bytes = field(default=PSD_SIGNATURE, repr=False)
    version: int = SUPPORTED_VERSION
    channels: int = 4
    height: int = 64
    width: int = 64
    depth: int = SUPPORTED_DEPTH
    color_mode: int = ColorMode.RGB

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        self = cls(*read_fmt(cls._FORMAT, fp))
        if self.signature != PSD_SIGNATURE:
            raise FatalFormatError("Invalid PSD signature: %r" % self.signature)
        if self.version != SUPPORTED_VERSION:
            raise FatalFormatError("Unsupported PSD version: %d" % self.version)
        return self

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    def check_supported(self) -> None:
        """
        Raise :py:class:`~psd_import.errors.FatalFormatError` unless the
        document is 8-bit RGB or RGBA.
        """
        if self.color_mode != ColorMode.RGB:
            raise FatalFormatError("Unsupported color mode: %d" % self.color_mode)
        if self.channels not in SUPPORTED_CHANNELS:
            raise FatalFormatError("Unsupported channel count: %d" % self.channels)
        if self.depth != SUPPORTED_DEPTH:
            raise FatalFormatError("Unsupported bit depth: %d" % self.depth)
