"""
Tagged block data structure.

Tagged blocks follow the layer name inside the extra data of a layer record.
Each block is ``signature (4) + key (4) + length (4) + payload``, with the
payload padded to an even length. Only the keys in
:py:class:`~psd_import.constants.Tag` are decoded; the rest are skipped.
"""

import logging
from typing import Any, BinaryIO, Optional, TypeVar

from attrs import define, field

from psd_import.constants import BLOCK_SIGNATURE, SectionDivider, Tag
from psd_import.encoding import utf16be_to_utf8
from psd_import.psd.base import BaseElement
from psd_import.psd.bin_utils import (
    is_readable,
    padding_size,
    read_bytes,
    read_fmt,
    trimmed_repr,
)
from psd_import.registry import new_registry

logger = logging.getLogger(__name__)

T_TaggedBlocks = TypeVar("T_TaggedBlocks", bound="TaggedBlocks")

TYPES, register = new_registry()

#: signature + key + length
HEADER_SIZE = 12


@define(repr=False)
class TaggedBlocks(BaseElement):
    """
    Dict of decoded tagged block data keyed by
    :py:class:`~psd_import.constants.Tag`.

    Example::

        from psd_import.constants import Tag

        divider = tagged_blocks.get_data(Tag.SECTION_DIVIDER_SETTING)
    """

    _items: dict = field(factory=dict)

    def get_data(self, key: Tag, default: Any = None) -> Any:
        """
        Get data from the tagged blocks.
        """
        return self._items.get(key, default)

    def __contains__(self, key: Any) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Any:
        return iter(self._items)

    @classmethod
    def read(cls: type[T_TaggedBlocks], fp: BinaryIO, **kwargs: Any) -> T_TaggedBlocks:
        """
        Scan blocks until fewer than 12 bytes remain in ``fp``.

        A block with an unexpected signature stops the scan. The caller reads
        the extra data as one length block, so whatever is left is skipped.
        """
        items = {}
        while is_readable(fp, HEADER_SIZE):
            signature, key, length = read_fmt("4s4sI", fp)
            if signature != BLOCK_SIGNATURE:
                logger.warning(
                    "Invalid tagged block signature (%r), skipping the rest"
                    % signature
                )
                fp.seek(-8, 1)
                break

            padded = length + padding_size(length, 2)
            if not is_readable(fp, padded):
                logger.warning(
                    "Tagged block %r is longer than the extra data: %d" % (key, length)
                )
                break
            raw_data = read_bytes(fp, padded)[:length]

            try:
                key = Tag(key)
            except ValueError:
                logger.debug("Skipping tagged block %r, len=%d" % (key, length))
                continue

            kls = TYPES[key]
            try:
                data = kls.frombytes(raw_data)
            except ValueError as e:
                logger.warning(
                    "Failed to read tagged block %r: %s, %s"
                    % (key, e, trimmed_repr(raw_data))
                )
                continue
            if data is not None:
                items[key] = data
        return cls(items)

    def __repr__(self) -> str:
        return "TaggedBlocks(%r)" % self._items


@register(Tag.SECTION_DIVIDER_SETTING)
@define(repr=True)
class SectionDividerSetting(BaseElement):
    """
    SectionDividerSetting structure.

    Only the kind is read. The blend mode and sub type that may follow are
    not needed to rebuild the tree.

    .. py:attribute:: kind

        See :py:class:`~psd_import.constants.SectionDivider`.
    """

    kind: SectionDivider = field(
        default=SectionDivider.OTHER, converter=SectionDivider
    )

    @classmethod
    def read(cls, fp: BinaryIO, **kwargs: Any) -> "SectionDividerSetting":
        return cls(read_fmt("I", fp)[0])


@register(Tag.UNICODE_LAYER_NAME)
class UnicodeLayerName(BaseElement):
    """
    Unicode layer name: a 32-bit count of UTF-16 code units followed by the
    big-endian units. Reading returns the name as UTF-8 bytes, or None for an
    empty name.
    """

    @classmethod
    def read(cls, fp: BinaryIO, **kwargs: Any) -> Optional[bytes]:  # type: ignore[override]
        count = read_fmt("I", fp)[0]
        if count == 0:
            return None
        return utf16be_to_utf8(read_bytes(fp, count * 2))
