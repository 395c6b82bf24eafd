"""
Base data structures intended for inheritance.

All the data objects in this subpackage inherit from
:py:class:`~psd_import.psd.base.BaseElement` and get attrs_ decoration to
have data fields. Elements are read-only: they are parsed from a binary
stream and consumed by :py:mod:`psd_import.api`.

.. _attrs: https://www.attrs.org/en/stable/index.html
"""

import io
import logging
from typing import Any, BinaryIO, TypeVar

from attrs import define, field

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")


class BaseElement:
    """
    Base element of the PSD file structs.

    .. py:classmethod:: read(cls, fp)

        Read the element from a file-like object.

    .. py:classmethod:: frombytes(self, data, *args, **kwargs)

        Read the element from bytes.
    """

    @classmethod
    def read(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        raise NotImplementedError()

    @classmethod
    def frombytes(cls: type[T], data: bytes, *args: Any, **kwargs: Any) -> T:
        with io.BytesIO(data) as f:
            return cls.read(f, *args, **kwargs)


@define(repr=False)
class ListElement(BaseElement):
    """
    List-like element that has `items` list.
    """

    _items: list = field(factory=list, converter=list)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Any:
        return iter(self._items)

    def __getitem__(self, key: int) -> Any:
        return self._items[key]

    def __repr__(self) -> str:
        return self._items.__repr__()
