#!/usr/bin/env python3
"""
QrBinarize CLI: inspect how camera frames binarize for barcode scanning.

Usage:
    python -m qrbinarize <command> [options]

Commands:
    row         Binarize a single row with the global histogram black point
    matrix      Binarize the whole image with the adaptive local mean
    histogram   Show the luminance histogram and its black point

Examples:
    qrbinarize row frame.png --y 240
    qrbinarize matrix frame.png -o frame-bw.png
    qrbinarize matrix frame.png -o frame-bw.png --radius 12 --bias 5 --invert
    qrbinarize histogram frame.png --y 240
"""

import argparse
import logging
import sys
from pathlib import Path

from PIL import Image

from qrbinarize.binarizer import (
    Binarizer,
    build_histogram,
    create_binarizer,
    estimate_black_point,
)
from qrbinarize.config import APP_VERSION, BinarizerConfig
from qrbinarize.constants import LUMINANCE_SHIFT
from qrbinarize.luminance_source import ArrayLuminanceSource
from qrbinarize.utils.config_manager import ConfigManager
from qrbinarize.utils.exceptions import (
    ConfigurationError,
    ContrastFailureError,
    ImageLoadError,
)
from qrbinarize.utils.i18n import _
from qrbinarize.utils.logger import setup_logger

EXIT_INPUT_ERROR = 1
EXIT_CONTRAST_FAILURE = 2

_HISTOGRAM_BAR_WIDTH = 50


def _resolve_row(y: int | None, height: int) -> int:
    """Turn a --y argument into a row index.

    None selects the middle row; negative values count from the bottom.

    Raises:
        ValueError: If the row is outside the image.
    """
    if y is None:
        return height // 2
    index = y + height if y < 0 else y
    if not 0 <= index < height:
        raise ValueError(
            _("Row {y} is outside the image (height {height})").format(y=y, height=height)
        )
    return index


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_row(args: argparse.Namespace, binarizer: Binarizer, logger: logging.Logger) -> int:
    y = _resolve_row(args.y, binarizer.height)
    row = binarizer.black_row(y)
    black = int(row.bits[: binarizer.width].sum())

    print(row)
    message = _("Row {y}: {black} of {width} pixels black")
    print(message.format(y=y, black=black, width=binarizer.width))
    logger.debug("Row %d binarized", y)
    return 0


def _cmd_matrix(args: argparse.Namespace, binarizer: Binarizer, logger: logging.Logger) -> int:
    matrix = binarizer.black_matrix()

    if args.ascii:
        print(matrix, end="")
        return 0

    output: Path = args.output
    output.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(matrix.to_image()).convert("1").save(output)

    black = int(matrix.bits.sum())
    logger.info("Wrote %dx%d bitmap to %s", matrix.width, matrix.height, output)
    message = _("{black} of {total} pixels black, saved to {path}")
    print(message.format(black=black, total=matrix.width * matrix.height, path=output))
    return 0


def _cmd_histogram(args: argparse.Namespace, binarizer: Binarizer, logger: logging.Logger) -> int:
    source = binarizer.luminance_source
    if args.y is None:
        samples = source.matrix()
        scope = _("whole image")
    else:
        y = _resolve_row(args.y, source.height)
        samples = source.row(y)
        scope = _("row {y}").format(y=y)

    buckets = build_histogram(samples)
    peak = max(int(buckets.max()), 1)
    bucket_size = 1 << LUMINANCE_SHIFT

    print(_("Histogram of {scope} ({count} samples)").format(scope=scope, count=samples.size))
    for index, count in enumerate(buckets):
        low = index * bucket_size
        bar = "#" * (int(count) * _HISTOGRAM_BAR_WIDTH // peak)
        print(f"{low:3d}-{low + bucket_size - 1:3d} {int(count):8d} {bar}")

    black_point = estimate_black_point(buckets)
    logger.debug("Histogram of %s: black point %d", scope, black_point)
    print(_("Black point: {value}").format(value=black_point))
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="qrbinarize",
        description=_("Binarize camera frames for barcode detection"),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help=_("Enable debug logging"))
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=_("Settings file (default: ~/.config/qrbinarize/settings.json)"),
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("input", type=Path, help=_("Input image"))
    common.add_argument(
        "--invert", action="store_true", default=None, help=_("Binarize the inverted image")
    )

    subparsers = parser.add_subparsers(dest="command")

    row = subparsers.add_parser("row", parents=[common], help=_("Binarize a single row"))
    row.add_argument(
        "--y", type=int, default=None, help=_("Row index, negative counts from the bottom")
    )

    matrix = subparsers.add_parser("matrix", parents=[common], help=_("Binarize the whole image"))
    output = matrix.add_mutually_exclusive_group(required=True)
    output.add_argument("-o", "--output", type=Path, help=_("Output bitmap (PNG)"))
    output.add_argument("--ascii", action="store_true", help=_("Print the bitmap instead"))
    matrix.add_argument("--radius", type=int, default=None, help=_("Sampling window half-width"))
    matrix.add_argument("--stride", type=int, default=None, help=_("Sampling step in the window"))
    matrix.add_argument("--bias", type=int, default=None, help=_("Constant subtracted from means"))

    histogram = subparsers.add_parser(
        "histogram", parents=[common], help=_("Show the luminance histogram")
    )
    histogram.add_argument(
        "--y", type=int, default=None, help=_("Only this row (default: whole image)")
    )

    return parser


def _load_config(args: argparse.Namespace) -> BinarizerConfig:
    manager = ConfigManager(str(args.config) if args.config else None)
    return BinarizerConfig.from_manager(
        manager,
        window_radius=getattr(args, "radius", None),
        sample_stride=getattr(args, "stride", None),
        mean_bias=getattr(args, "bias", None),
        inverted=args.invert,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logger = setup_logger(logging.DEBUG if args.verbose else logging.INFO)

    handlers = {
        "row": _cmd_row,
        "matrix": _cmd_matrix,
        "histogram": _cmd_histogram,
    }

    try:
        config = _load_config(args)
        source = ArrayLuminanceSource.from_file(args.input)
        binarizer = create_binarizer(source, config)
        return handlers[args.command](args, binarizer, logger)
    except ContrastFailureError as e:
        print(_("Cannot binarize: {error}").format(error=e), file=sys.stderr)
        return EXIT_CONTRAST_FAILURE
    except (ImageLoadError, ConfigurationError, ValueError) as e:
        print(_("Error: {error}").format(error=e), file=sys.stderr)
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
