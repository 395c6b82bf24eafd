"""Pytest configuration for psd-import tests."""

import io
from typing import Any

import pytest

from .psd_import.utils import RGBA_PLANES, make_header, make_layer, make_psd


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "end_to_end: mark test as decoding a whole synthetic document"
    )


@pytest.fixture
def minimal_psd() -> bytes:
    """2x2 RGBA document with a single raw pixel layer."""
    return make_psd(
        [make_layer(b"Layer 1", bbox=(0, 0, 2, 2), channels=RGBA_PLANES)],
        header=make_header(channels=4, height=2, width=2),
    )


@pytest.fixture
def minimal_stream(minimal_psd: bytes) -> io.BytesIO:
    return io.BytesIO(minimal_psd)
