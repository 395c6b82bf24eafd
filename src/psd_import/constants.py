"""
Various constants for psd_import
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Union

#: Only PSD version 1 documents are read, PSB (version 2) is not.
SUPPORTED_VERSION = 1

#: RGB or RGBA.
SUPPORTED_CHANNELS = (3, 4)

#: Bits per channel.
SUPPORTED_DEPTH = 8

#: Signature of the file header.
PSD_SIGNATURE = b"8BPS"

#: Signature of blend mode fields and tagged blocks.
BLOCK_SIGNATURE = b"8BIM"


class ColorMode(IntEnum):
    """
    Color mode.
    """

    BITMAP = 0
    GRAYSCALE = 1
    INDEXED = 2
    RGB = 3
    CMYK = 4
    MULTICHANNEL = 7
    DUOTONE = 8
    LAB = 9


class ChannelID(IntEnum):
    """
    Channel types.

    Only the color channels and the transparency mask are used. Some writers
    store the transparency mask as the unsigned 16-bit alias of -1.
    """

    CHANNEL_0 = 0  # Red
    CHANNEL_1 = 1  # Green
    CHANNEL_2 = 2  # Blue
    TRANSPARENCY_MASK = -1
    TRANSPARENCY_MASK_ALIAS = 0xFFFF


class Compression(IntEnum):
    """
    Compression method of the channel data.
    """

    RAW = 0
    RLE = 1
    ZIP = 2
    ZIP_WITH_PREDICTION = 3


class SectionDivider(IntEnum):
    """
    Kind of the section divider setting.

    In the reversed record order the first three kinds open a group, and the
    bounding section divider closes it.
    """

    OTHER = 0
    OPEN_FOLDER = 1
    CLOSED_FOLDER = 2
    BOUNDING_SECTION_DIVIDER = 3

    @property
    def opens_group(self) -> bool:
        return self is not SectionDivider.BOUNDING_SECTION_DIVIDER


class Tag(Enum):
    """
    Tagged block keys that the importer understands.
    """

    SECTION_DIVIDER_SETTING = b"lsct"
    UNICODE_LAYER_NAME = b"luni"


class BlendMode(Enum):
    """
    Blend modes a layer can be imported with.

    Use :py:meth:`BlendMode.from_key` to convert a 4-character code from the
    layer record.
    """

    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    COLOR_DODGE = "color-dodge"
    COLOR_BURN = "color-burn"
    HARD_LIGHT = "hard-light"
    SOFT_LIGHT = "soft-light"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"
    HUE = "hue"
    SATURATION = "saturation"
    COLOR = "color"
    LUMINOSITY = "luminosity"
    ADDITION = "addition"
    SUBTRACT = "subtract"
    DIVIDE = "divide"

    @classmethod
    def from_key(cls, key: Union[bytes, str]) -> "BlendMode":
        """
        Look up the blend mode for a 4-character code.

        Unknown codes map to :py:attr:`BlendMode.NORMAL`.
        """
        if isinstance(key, str):
            key = key.encode("ascii", "replace")
        return BLEND_MODE_KEYS.get(key, cls.NORMAL)


BLEND_MODE_KEYS: Mapping[bytes, BlendMode] = MappingProxyType(
    {
        b"norm": BlendMode.NORMAL,
        b"mul ": BlendMode.MULTIPLY,
        b"scrn": BlendMode.SCREEN,
        b"over": BlendMode.OVERLAY,
        b"dark": BlendMode.DARKEN,
        b"lite": BlendMode.LIGHTEN,
        b"div ": BlendMode.COLOR_DODGE,
        b"idiv": BlendMode.COLOR_BURN,
        b"hLit": BlendMode.HARD_LIGHT,
        b"sLit": BlendMode.SOFT_LIGHT,
        b"diff": BlendMode.DIFFERENCE,
        b"smud": BlendMode.EXCLUSION,
        b"hue ": BlendMode.HUE,
        b"sat ": BlendMode.SATURATION,
        b"colr": BlendMode.COLOR,
        b"lum ": BlendMode.LUMINOSITY,
        b"lddg": BlendMode.ADDITION,
        b"fsub": BlendMode.SUBTRACT,
        b"fdiv": BlendMode.DIVIDE,
    }
)
