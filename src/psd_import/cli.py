import argparse
import logging
import os
import sys
from typing import Iterator, Optional

from psd_import.api.layers import Group, Layer, PixelLayer
from psd_import.api.psd_image import LayeredImage, import_psd
from psd_import.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="psd-import command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser("show", help="Show the layer tree")
    show_parser.add_argument("input_file", help="Input PSD file")

    export_parser = subparsers.add_parser(
        "export", help="Export each pixel layer as PNG"
    )
    export_parser.add_argument("input_file", help="Input PSD file")
    export_parser.add_argument("output_dir", help="Output directory")

    for subparser in (show_parser, export_parser):
        subparser.add_argument(
            "--trim",
            action="store_true",
            help="Crop layers to their non-transparent area.",
        )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logging.getLogger("psd_import").setLevel(logging.DEBUG)

    result = import_psd(args.input_file, trim=args.trim, logger=logger)
    if not result.success or result.image is None:
        print("Import failed: %s" % result.message, file=sys.stderr)
        return 1

    if args.command == "show":
        for line in format_tree(result.image):
            print(line)

    elif args.command == "export":
        for path in export_layers(result.image, args.output_dir):
            logger.info("Saved %s" % path)

    print("PSD file imported successfully: %s" % args.input_file)
    return None


def format_tree(image: LayeredImage) -> Iterator[str]:
    """Yield one line per layer, top-most first, indented by depth."""
    yield repr(image)
    for depth, _, layer in _walk(image.root):
        yield "%s%s" % ("  " * (depth + 1), _describe(layer))


def export_layers(image: LayeredImage, output_dir: str) -> Iterator[str]:
    """
    Save every pixel layer as an RGBA PNG named after its position in the
    tree, for example ``1_0.png`` for the bottom-most layer of the second
    top-level group.
    """
    os.makedirs(output_dir, exist_ok=True)
    for _, position, layer in _walk(image.root):
        if not isinstance(layer, PixelLayer) or not layer.has_pixels():
            continue
        path = os.path.join(
            output_dir, "%s.png" % "_".join(str(index) for index in position)
        )
        layer.topil().save(path)  # type: ignore[union-attr]
        yield path


def _walk(
    group: Group, depth: int = 0, position: tuple[int, ...] = ()
) -> Iterator[tuple[int, tuple[int, ...], Layer]]:
    for index in reversed(range(len(group))):
        layer = group[index]
        yield depth, position + (index,), layer
        if isinstance(layer, Group):
            yield from _walk(layer, depth + 1, position + (index,))


def _describe(layer: Layer) -> str:
    text = "[%s] %r" % (layer.kind, layer.name)
    if not layer.visible:
        text += " hidden"
    if isinstance(layer, Group):
        return text if layer.expanded else text + " collapsed"
    assert isinstance(layer, PixelLayer)
    return "%s opacity=%d blend=%s bbox=%r" % (
        text,
        layer.opacity,
        layer.blend_mode.value,
        layer.bbox,
    )
