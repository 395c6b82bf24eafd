import logging

import pytest
from PIL import Image

from psd_import.api.layers import Group, LayerTree, PixelLayer
from psd_import.constants import BlendMode

logger = logging.getLogger(__name__)


@pytest.fixture
def tree() -> LayerTree:
    tree = LayerTree()
    group = tree.create_group("Group", None, True, False)
    layer = tree.create_layer("Pixel", group, False, 128, BlendMode.MULTIPLY)
    tree.set_layer_content(layer, bytes(range(8)), 2, 1, 4, 5)
    tree.create_layer("Empty", group, True, 255, BlendMode.NORMAL)
    tree.create_layer("Top-level", None, True, 255, BlendMode.NORMAL)
    return tree


def test_tree(tree: LayerTree) -> None:
    root = tree.root
    assert [layer.name for layer in root] == ["Top-level", "Group"]
    group = root[1]
    assert isinstance(group, Group)
    assert group.kind == "group"
    assert group.is_group()
    assert not group.expanded
    assert [layer.name for layer in group.children] == ["Empty", "Pixel"]
    assert [layer.name for layer in reversed(group)] == ["Pixel", "Empty"]
    assert [layer.name for layer in root.descendants()] == [
        "Top-level",
        "Group",
        "Empty",
        "Pixel",
    ]


def test_pixel_layer(tree: LayerTree) -> None:
    layer = tree.root[1][1]
    assert isinstance(layer, PixelLayer)
    assert layer.kind == "pixel"
    assert not layer.is_group()
    assert not layer.visible
    assert layer.opacity == 128
    assert layer.blend_mode == BlendMode.MULTIPLY
    assert layer.has_pixels()
    assert layer.bbox == (4, 5, 6, 6)
    image = layer.topil()
    assert isinstance(image, Image.Image)
    assert image.size == (2, 1)


def test_empty_pixel_layer(tree: LayerTree) -> None:
    layer = tree.root[1][0]
    assert isinstance(layer, PixelLayer)
    assert not layer.has_pixels()
    assert layer.bbox == (0, 0, 0, 0)
    assert layer.topil() is None


def test_insert_type_check() -> None:
    with pytest.raises(TypeError):
        Group("Group").insert(0, "not a layer")  # type: ignore[arg-type]


def test_repr(tree: LayerTree) -> None:
    assert repr(tree) == "LayerTree(size=2)"
    assert repr(tree.root[1]) == "Group('Group' collapsed, size=2)"
    assert "hidden" in repr(tree.root[1][1])
