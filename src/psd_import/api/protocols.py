"""
Protocol definitions for the receiver of the reconstructed layer tree.

Any object that implements :py:class:`DocumentBuilderProtocol` can be handed
to :py:func:`~psd_import.api.tree.build_layer_tree`, for example an adapter
around the document model of a host application. The default in-memory
implementation is :py:class:`~psd_import.api.layers.LayerTree`.
"""

from typing import Any, Optional, Protocol

from psd_import.constants import BlendMode


class DocumentBuilderProtocol(Protocol):
    """
    Protocol defining the calls the tree builder makes on its destination.

    Handles returned by :py:meth:`create_group` and :py:meth:`create_layer`
    are opaque to the tree builder; they are only passed back as ``parent``
    or ``handle`` arguments. A ``parent`` of None means the root.

    Each new node must become the bottom-most child of its parent.
    """

    def create_group(
        self, name: str, parent: Optional[Any], visible: bool, expanded: bool
    ) -> Any:
        """Create a group and return its handle."""
        ...

    def create_layer(
        self,
        name: str,
        parent: Optional[Any],
        visible: bool,
        opacity: int,
        blend_mode: BlendMode,
    ) -> Any:
        """Create a pixel layer and return its handle."""
        ...

    def set_layer_content(
        self, handle: Any, data: bytes, width: int, height: int, left: int, top: int
    ) -> None:
        """Assign interleaved RGBA pixels to a layer created before."""
        ...
