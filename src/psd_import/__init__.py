"""
psd-import: Python package for importing layered Adobe Photoshop PSD files.

Only a subset of the format is supported: version 1 documents in 8-bit RGB
or RGBA, with pixel layers and groups. Masks, adjustment and text layers are
not decoded.

Basic usage::

    from psd_import import LayeredImage

    image = LayeredImage.open('example.psd')

    for layer in image.descendants():
        print(layer.name)

Architecture:

- :py:mod:`psd_import.psd`: Low-level binary structure parsing
- :py:mod:`psd_import.api`: Layer tree and pixel data (primary interface)
- :py:mod:`psd_import.compression`: RLE codec
- :py:mod:`psd_import.encoding`: Layer name conversion to UTF-8
"""

from psd_import.api.psd_image import ImportResult, LayeredImage, import_psd
from psd_import.version import __version__

__all__ = ["LayeredImage", "ImportResult", "import_psd", "__version__"]
