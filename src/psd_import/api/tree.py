"""
Reconstruction of the layer tree from the flat list of layer records.

Groups are delimited by records that carry a section divider setting. The
bounding section divider precedes the children of a group and the open
divider follows them, so the list is walked in reverse: an open divider
starts a group and the bounding section divider ends it. Every new node is
inserted below its siblings, which keeps children in file order.
"""

import logging
from typing import Any, Optional, Sequence, Union

from psd_import.api.numpy_io import composite_planes
from psd_import.api.pil_io import DecodedImage, trim_transparent_edges
from psd_import.api.protocols import DocumentBuilderProtocol
from psd_import.constants import BlendMode, SectionDivider
from psd_import.encoding import decode_name
from psd_import.psd.layer_and_mask import LayerRecord

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]

_logger = logging.getLogger(__name__)


def build_layer_tree(
    records: Sequence[LayerRecord],
    channels: Sequence[Sequence[bytes]],
    builder: DocumentBuilderProtocol,
    trim: bool = False,
    logger: Optional[LoggerLike] = None,
) -> None:
    """
    Replay ``records`` as group and layer creation calls on ``builder``.

    :param records: layer records in file order.
    :param channels: ``[R, G, B, A]`` planes of each record, in file order.
    :param builder: destination of the tree, see
        :py:class:`~psd_import.api.protocols.DocumentBuilderProtocol`.
    :param trim: crop layer pixels to their non-transparent area.
    :param logger: logger for anomalies, defaults to the module logger.
    """
    logger = logger or _logger
    stack: list[Any] = []

    for index in reversed(range(len(records))):
        record = records[index]
        divider = record.divider
        name = decode_name(record.name)
        parent = stack[-1] if stack else None

        if divider is None:
            handle = builder.create_layer(
                name,
                parent,
                record.flags.visible,
                record.opacity,
                BlendMode.from_key(record.blend_mode),
            )
            image = _composite(record, channels[index], trim)
            if image is not None:
                builder.set_layer_content(
                    handle, image.data, image.width, image.height, image.left, image.top
                )
        elif divider.opens_group:
            logger.debug("Opening group %r" % name)
            stack.append(
                builder.create_group(
                    name,
                    parent,
                    record.flags.visible,
                    divider != SectionDivider.CLOSED_FOLDER,
                )
            )
        elif stack:
            stack.pop()
        else:
            logger.warning("Ignoring unbalanced group end at layer %d" % (index + 1))

    if stack:
        logger.debug("%d group(s) left open at the end of the layer list" % len(stack))


def _composite(
    record: LayerRecord, planes: Sequence[bytes], trim: bool
) -> Optional[DecodedImage]:
    pixels = composite_planes(planes, record.width, record.height)
    if pixels is None:
        return None
    image = DecodedImage.fromarray(pixels, record.left, record.top)
    if trim:
        image = trim_transparent_edges(image)
    return image
