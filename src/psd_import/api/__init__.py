"""
High-level API of psd-import.

This subpackage turns the low-level :py:mod:`psd_import.psd` structures into
a tree of layers with decoded RGBA pixels.

Key modules:

- :py:mod:`psd_import.api.psd_image`: Entry points (LayeredImage, import_psd)
- :py:mod:`psd_import.api.layers`: Layer types and the default tree builder
- :py:mod:`psd_import.api.tree`: Group reconstruction from the flat layer list
- :py:mod:`psd_import.api.protocols`: Interface of external document builders
- :py:mod:`psd_import.api.numpy_io`: Channel decoding and compositing
- :py:mod:`psd_import.api.pil_io`: Decoded images and edge trimming
"""
