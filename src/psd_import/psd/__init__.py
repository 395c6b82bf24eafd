"""
Low-level API that translates binary data to Python structure.

All the data structure in this subpackage inherits from one of the object
defined in :py:mod:`psd_import.psd.base` module.
"""

from .document import PSD as PSD
from .layer_and_mask import (
    ChannelData as ChannelData,
    LayerInfo as LayerInfo,
    LayerRecord as LayerRecord,
    LayerRecords as LayerRecords,
)

__all__ = [
    "PSD",
    "LayerInfo",
    "LayerRecords",
    "LayerRecord",
    "ChannelData",
]
