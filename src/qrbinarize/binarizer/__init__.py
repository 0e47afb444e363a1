"""
Binarizers for barcode scanning.

Main components:
- Binarizer: capability contract (black_row, black_matrix, derive)
- GlobalHistogramBinarizer: histogram rows, adaptive local-mean matrix
- estimate_black_point: histogram peak/valley threshold search
- create_binarizer: builds the configured binarizer for a source
"""

from __future__ import annotations

import logging

from qrbinarize.binarizer.adaptive import adaptive_threshold
from qrbinarize.binarizer.base import Binarizer
from qrbinarize.binarizer.global_histogram import GlobalHistogramBinarizer
from qrbinarize.binarizer.histogram import build_histogram, estimate_black_point
from qrbinarize.config import BinarizerConfig
from qrbinarize.luminance_source import InvertedLuminanceSource, LuminanceSource
from qrbinarize.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

BINARIZERS: dict[str, type[GlobalHistogramBinarizer]] = {
    "global_histogram": GlobalHistogramBinarizer,
}


def create_binarizer(source: LuminanceSource, config: BinarizerConfig | None = None) -> Binarizer:
    """Build the binarizer selected by config for source.

    Args:
        source: Image to binarize
        config: Binarizer settings; defaults to BinarizerConfig()

    Returns:
        A binarizer bound to source, or to its inversion when config.inverted

    Raises:
        ConfigurationError: If config.method is not a registered binarizer
    """
    config = config or BinarizerConfig()

    binarizer_class = BINARIZERS.get(config.method)
    if binarizer_class is None:
        raise ConfigurationError(
            "method",
            f"unknown binarizer '{config.method}', expected one of {', '.join(sorted(BINARIZERS))}",
        )

    if config.inverted:
        source = InvertedLuminanceSource(source)

    logger.debug("Creating %s binarizer for %dx%d", config.method, source.width, source.height)
    return binarizer_class(
        source,
        window_radius=config.window_radius,
        sample_stride=config.sample_stride,
        mean_bias=config.mean_bias,
    )


__all__ = [
    "BINARIZERS",
    "Binarizer",
    "GlobalHistogramBinarizer",
    "adaptive_threshold",
    "build_histogram",
    "create_binarizer",
    "estimate_black_point",
]
