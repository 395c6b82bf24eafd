"""
Layered image module.

This module provides the entry points of psd-import:

- :py:meth:`LayeredImage.open` reads a document into an in-memory layer tree
  and raises :py:class:`~psd_import.errors.PSDImportError` on failure.
- :py:func:`import_psd` never raises for malformed or unreadable input and
  returns an :py:class:`ImportResult` instead. It can also replay the tree
  into any :py:class:`~psd_import.api.protocols.DocumentBuilderProtocol`.

Example usage::

    from psd_import import LayeredImage

    image = LayeredImage.open('document.psd', trim=True)
    print(f"Size: {image.width}x{image.height}")

    for layer in image.descendants():
        if layer.kind == 'pixel' and layer.has_pixels():
            layer.topil().save('%s.png' % layer.name)

The whole document is decoded in memory: every channel plane of every layer
is decompressed before the tree is built.
"""

import logging
import os
from typing import BinaryIO, Iterator, Optional, Union

from attrs import define, field

from psd_import.api.layers import Group, Layer, LayerTree
from psd_import.api.numpy_io import decode_layers
from psd_import.api.protocols import DocumentBuilderProtocol
from psd_import.api.tree import LoggerLike, build_layer_tree
from psd_import.errors import ErrorKind, PSDImportError, ResourceError
from psd_import.psd.document import PSD
from psd_import.psd.header import FileHeader

_logger = logging.getLogger(__name__)

FileLike = Union[BinaryIO, str, bytes, os.PathLike]


class LayeredImage:
    """
    Imported document: header properties and the tree of layers.

    Iterating yields the top-level layers, bottom-most first.

    Example::

        image = LayeredImage.open('example.psd')
        for layer in image:
            print(layer)
    """

    def __init__(
        self,
        header: FileHeader,
        root: Group,
        palette: Optional[list[tuple[int, int, int]]] = None,
    ) -> None:
        self._header = header
        self._root = root
        self._palette = palette or []

    @classmethod
    def open(
        cls,
        fp: FileLike,
        trim: bool = False,
        logger: Optional[LoggerLike] = None,
    ) -> "LayeredImage":
        """
        Open a document.

        :param fp: filename or file-like object.
        :param trim: crop layer pixels to their non-transparent area.
        :param logger: logger for anomalies, defaults to the module loggers.
        :return: A :py:class:`~psd_import.api.psd_image.LayeredImage` object.
        :raises FatalFormatError: if the document is malformed or unsupported.
        :raises ResourceError: if the input cannot be read.
        """
        psd = _read_psd(fp)
        tree = LayerTree()
        _build(psd, tree, trim, logger)
        return cls(psd.header, tree.root, psd.color_mode_data.palette)

    @property
    def width(self) -> int:
        """Document width."""
        return self._header.width

    @property
    def height(self) -> int:
        """Document height."""
        return self._header.height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    @property
    def channels(self) -> int:
        """Number of channels of the document, 3 or 4."""
        return self._header.channels

    @property
    def has_alpha(self) -> bool:
        return self._header.has_alpha

    @property
    def palette(self) -> list[tuple[int, int, int]]:
        """Color table of indexed documents, empty otherwise."""
        return self._palette

    @property
    def root(self) -> Group:
        """Unnamed group holding the top-level layers."""
        return self._root

    def __len__(self) -> int:
        return len(self._root)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._root)

    def __getitem__(self, key: int) -> Layer:
        return self._root[key]

    def descendants(self) -> Iterator[Layer]:
        """
        Return a generator to iterate over all descendant layers.

        Example::

            for layer in image.descendants():
                print(layer)
        """
        return self._root.descendants()

    def __repr__(self) -> str:
        return "%s(size=%dx%d, channels=%d, layers=%d)" % (
            self.__class__.__name__,
            self.width,
            self.height,
            self.channels,
            len(self),
        )


@define(frozen=True)
class ImportResult:
    """
    Outcome of :py:func:`import_psd`.

    .. py:attribute:: success
    .. py:attribute:: message

        Human readable reason of the failure, or a confirmation.

    .. py:attribute:: kind

        :py:class:`~psd_import.errors.ErrorKind` of the failure, None on
        success.

    .. py:attribute:: image

        :py:class:`LayeredImage` when no external builder was given.
    """

    success: bool
    message: str = ""
    kind: Optional[ErrorKind] = None
    image: Optional[LayeredImage] = field(default=None, repr=False)

    def __bool__(self) -> bool:
        return self.success


def import_psd(
    fp: FileLike,
    builder: Optional[DocumentBuilderProtocol] = None,
    trim: bool = False,
    logger: Optional[LoggerLike] = None,
) -> ImportResult:
    """
    Import a document without raising on malformed or unreadable input.

    When ``builder`` is given, the tree is replayed into it and the result
    holds no image. Calls already made on the builder are not undone when a
    later record turns out to be malformed.

    :param fp: filename or file-like object.
    :param builder: optional destination of the layer tree.
    :param trim: crop layer pixels to their non-transparent area.
    :param logger: logger for import messages, defaults to the module logger.
    :return: :py:class:`ImportResult`.
    """
    log = logger or _logger
    name = _describe(fp)
    log.info("Importing %s" % name)
    image = None
    try:
        if builder is None:
            image = LayeredImage.open(fp, trim=trim, logger=logger)
        else:
            _build(_read_psd(fp), builder, trim, logger)
    except PSDImportError as e:
        log.error("Import failed: %s" % e)
        return ImportResult(False, str(e), e.kind)
    log.info("Imported %s" % name)
    return ImportResult(True, "PSD file imported successfully", image=image)


def _read_psd(fp: FileLike) -> PSD:
    try:
        if isinstance(fp, (str, bytes, os.PathLike)):
            with open(fp, "rb") as f:
                return PSD.read(f)
        return PSD.read(fp)
    except OSError as e:
        raise ResourceError("Cannot read %s: %s" % (_describe(fp), e)) from e


def _build(
    psd: PSD,
    builder: DocumentBuilderProtocol,
    trim: bool,
    logger: Optional[LoggerLike],
) -> None:
    layers = decode_layers(psd)
    build_layer_tree(
        [record for record, _ in layers],
        [planes for _, planes in layers],
        builder,
        trim=trim,
        logger=logger,
    )


def _describe(fp: FileLike) -> str:
    if isinstance(fp, (str, bytes, os.PathLike)):
        return os.fsdecode(fp)
    return str(getattr(fp, "name", "<stream>"))
