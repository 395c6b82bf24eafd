"""
Layer module.

This module implements the in-memory layer tree produced by the importer.

Key classes:

- :py:class:`Layer`: Base class for all layer types
- :py:class:`Group`: Folder containing other layers
- :py:class:`PixelLayer`: Raster layer with decoded pixel data
- :py:class:`LayerTree`: Default document builder that assembles the tree

Layer hierarchy:

Children of a group are stored bottom-to-top: index 0 is the bottom-most
layer, the last one is drawn on top. Nodes do not point back to their
parent::

    for layer in image.descendants():
        if layer.kind == 'group':
            print(f"Group: {layer.name} with {len(layer)} layers")
        else:
            print(layer.name, layer.bbox)
"""

import logging
from typing import Iterator, Optional

from PIL import Image

from psd_import.api.pil_io import DecodedImage
from psd_import.constants import BlendMode

logger = logging.getLogger(__name__)


class Layer:
    def __init__(self, name: str, visible: bool = True) -> None:
        self._name = name
        self._visible = visible

    @property
    def name(self) -> str:
        """
        Layer name, always valid UTF-8.

        :type: str
        """
        return self._name

    @property
    def kind(self) -> str:
        """
        Kind of this layer, either 'group' or 'pixel'.

        :type: str
        """
        return self.__class__.__name__.lower().replace("layer", "")

    @property
    def visible(self) -> bool:
        """
        Layer visibility.

        :type: bool
        """
        return self._visible

    def is_group(self) -> bool:
        """
        Return True if the layer is a group.

        :return: `bool`
        """
        return isinstance(self, Group)

    def __repr__(self) -> str:
        return "%s(%r%s)" % (
            self.__class__.__name__,
            self.name,
            "" if self.visible else " hidden",
        )


class Group(Layer):
    """
    Group of layers.

    Example::

        group = image[1]
        for layer in group:
            if layer.kind == 'pixel':
                print(layer.name)
    """

    def __init__(self, name: str, visible: bool = True, expanded: bool = True) -> None:
        super().__init__(name, visible)
        self._expanded = expanded
        self._layers: list[Layer] = []

    @property
    def expanded(self) -> bool:
        """
        Whether the group is shown expanded in the layers panel.

        :type: bool
        """
        return self._expanded

    @property
    def children(self) -> list[Layer]:
        """Child layers, bottom-most first."""
        return self._layers

    def __len__(self) -> int:
        return self._layers.__len__()

    def __iter__(self) -> Iterator[Layer]:
        return self._layers.__iter__()

    def __reversed__(self) -> Iterator[Layer]:
        return self._layers.__reversed__()

    def __getitem__(self, key: int) -> Layer:
        return self._layers.__getitem__(key)

    def insert(self, index: int, layer: Layer) -> None:
        """
        Insert the given layer at the specified index.

        :param index: The index to insert the layer at, 0 is the bottom.
        :param layer: The layer to insert.
        :raises TypeError: If the provided object is not a Layer instance.
        """
        if not isinstance(layer, Layer):
            raise TypeError("Expected a Layer, got %r" % type(layer))
        self._layers.insert(index, layer)

    def descendants(self) -> Iterator[Layer]:
        """
        Return a generator to iterate over all descendant layers, depth first.

        Example::

            for layer in image.descendants():
                print(layer)
        """
        for layer in self:
            yield layer
            if isinstance(layer, Group):
                yield from layer.descendants()

    def __repr__(self) -> str:
        return "%s(%r%s%s, size=%d)" % (
            self.__class__.__name__,
            self.name,
            "" if self.visible else " hidden",
            "" if self.expanded else " collapsed",
            len(self),
        )


class PixelLayer(Layer):
    """
    Layer that has rasterized image in pixels.

    ``image`` is None for layers without pixel content.
    """

    def __init__(
        self,
        name: str,
        visible: bool = True,
        opacity: int = 255,
        blend_mode: BlendMode = BlendMode.NORMAL,
    ) -> None:
        super().__init__(name, visible)
        self._opacity = opacity
        self._blend_mode = blend_mode
        self._image: Optional[DecodedImage] = None

    @property
    def opacity(self) -> int:
        """
        Opacity of this layer in [0, 255] range.

        :type: int
        """
        return self._opacity

    @property
    def blend_mode(self) -> BlendMode:
        """
        Blend mode of this layer.

        :type: :py:class:`~psd_import.constants.BlendMode`
        """
        return self._blend_mode

    @property
    def image(self) -> Optional[DecodedImage]:
        """
        Decoded RGBA pixels, or None.

        :type: :py:class:`~psd_import.api.pil_io.DecodedImage`
        """
        return self._image

    @image.setter
    def image(self, value: Optional[DecodedImage]) -> None:
        self._image = value

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple, all zero without pixels."""
        if self._image is None:
            return (0, 0, 0, 0)
        return self._image.bbox

    def has_pixels(self) -> bool:
        """
        Returns True if the layer has associated pixels.

        :return: `bool`
        """
        return self._image is not None

    def topil(self) -> Optional[Image.Image]:
        """
        Get PIL Image of the layer.

        :return: RGBA :py:class:`PIL.Image.Image`, or None without pixels.
        """
        if self._image is None:
            return None
        return self._image.topil()

    def __repr__(self) -> str:
        return "%s(%r%s, bbox=%r, opacity=%d, blend_mode=%s)" % (
            self.__class__.__name__,
            self.name,
            "" if self.visible else " hidden",
            self.bbox,
            self.opacity,
            self.blend_mode.value,
        )


class LayerTree:
    """
    Document builder that assembles :py:class:`Group` and
    :py:class:`PixelLayer` nodes under a root group.

    Implements :py:class:`~psd_import.api.protocols.DocumentBuilderProtocol`.
    Handles are the nodes themselves.
    """

    def __init__(self) -> None:
        self.root = Group("", expanded=True)

    def _insert(self, parent: Optional[Group], layer: Layer) -> None:
        (self.root if parent is None else parent).insert(0, layer)

    def create_group(
        self, name: str, parent: Optional[Group], visible: bool, expanded: bool
    ) -> Group:
        group = Group(name, visible, expanded)
        self._insert(parent, group)
        return group

    def create_layer(
        self,
        name: str,
        parent: Optional[Group],
        visible: bool,
        opacity: int,
        blend_mode: BlendMode,
    ) -> PixelLayer:
        layer = PixelLayer(name, visible, opacity, blend_mode)
        self._insert(parent, layer)
        return layer

    def set_layer_content(
        self,
        handle: PixelLayer,
        data: bytes,
        width: int,
        height: int,
        left: int,
        top: int,
    ) -> None:
        handle.image = DecodedImage(width, height, data, left, top)

    def __repr__(self) -> str:
        return "LayerTree(size=%d)" % len(self.root)
