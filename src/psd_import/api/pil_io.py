"""
Decoded layer pixels and their conversion to PIL images.
"""

import logging
from typing import Any

import numpy as np
from attrs import define, field
from PIL import Image

logger = logging.getLogger(__name__)


@define(repr=False)
class DecodedImage:
    """
    Interleaved 8-bit RGBA pixels of a layer and their placement in the
    document.

    .. py:attribute:: width
    .. py:attribute:: height
    .. py:attribute:: data

        Tightly packed RGBA bytes, always ``4 * width * height`` long.

    .. py:attribute:: left

        X coordinate of the top-left pixel in the document.

    .. py:attribute:: top

        Y coordinate of the top-left pixel in the document.
    """

    width: int
    height: int
    data: bytes = field()
    left: int = 0
    top: int = 0

    @data.validator
    def _validate_data(self, attribute: Any, value: bytes) -> None:
        expected = 4 * self.width * self.height
        if len(value) != expected:
            raise ValueError(
                "RGBA buffer has %d bytes, expected %d" % (len(value), expected)
            )

    @classmethod
    def fromarray(cls, array: np.ndarray, left: int = 0, top: int = 0) -> "DecodedImage":
        """Create from a ``(height, width, 4)`` uint8 array."""
        height, width = array.shape[:2]
        return cls(width, height, np.ascontiguousarray(array).tobytes(), left, top)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple in document coordinates."""
        return self.left, self.top, self.left + self.width, self.top + self.height

    def numpy(self) -> np.ndarray:
        """Get a ``(height, width, 4)`` uint8 array."""
        return np.frombuffer(self.data, np.uint8).reshape((self.height, self.width, 4))

    def topil(self) -> Image.Image:
        """Get an RGBA PIL Image."""
        return Image.frombytes("RGBA", self.size, self.data)

    def __repr__(self) -> str:
        return "DecodedImage(size=%dx%d, offset=(%d, %d))" % (
            self.width,
            self.height,
            self.left,
            self.top,
        )


def trim_transparent_edges(image: DecodedImage) -> DecodedImage:
    """
    Crop ``image`` to the bounding box of the pixels with non-zero alpha.

    Fully transparent images are returned untouched, as are images that
    have no transparent edge.
    """
    bbox = image.topil().getchannel("A").getbbox()
    if bbox is None:
        logger.debug("Fully transparent layer is not trimmed")
        return image
    if bbox == (0, 0, image.width, image.height):
        return image
    left, top, right, bottom = bbox
    logger.debug("Trimming %r to %r" % (image, bbox))
    return DecodedImage.fromarray(
        image.numpy()[top:bottom, left:right],
        image.left + left,
        image.top + top,
    )
