"""Global histogram binarizer for low-end camera frames.

Rows are thresholded with one black point per row, estimated from a
32-bucket histogram, after a cheap -1 4 -1 sharpening pass. The whole
image is thresholded against a sparse local mean instead, which copes
with shadows and gradients across the frame.
"""

from __future__ import annotations

import logging
import time

import numpy as np

from qrbinarize.binarizer.adaptive import adaptive_threshold
from qrbinarize.binarizer.base import Binarizer
from qrbinarize.binarizer.histogram import build_histogram, estimate_black_point
from qrbinarize.bitmaps import BitArray, BitMatrix
from qrbinarize.constants import (
    DEFAULT_MEAN_BIAS,
    DEFAULT_SAMPLE_STRIDE,
    DEFAULT_WINDOW_RADIUS,
    LUMINANCE_BUCKETS,
    MIN_SHARPEN_WIDTH,
)
from qrbinarize.luminance_source import LuminanceSource

logger = logging.getLogger(__name__)

_EMPTY = np.zeros(0, dtype=np.uint8)


class GlobalHistogramBinarizer(Binarizer):
    """Histogram-based row binarizer with an adaptive full-image path.

    Args:
        source: Image to binarize
        window_radius: Half-width of the adaptive sampling window
        sample_stride: Step between sampled pixels in that window
        mean_bias: Constant subtracted from each local mean
    """

    def __init__(
        self,
        source: LuminanceSource,
        window_radius: int = DEFAULT_WINDOW_RADIUS,
        sample_stride: int = DEFAULT_SAMPLE_STRIDE,
        mean_bias: int = DEFAULT_MEAN_BIAS,
    ) -> None:
        super().__init__(source)
        self.window_radius = window_radius
        self.sample_stride = sample_stride
        self.mean_bias = mean_bias
        self._luminances = _EMPTY
        self._buckets = np.zeros(LUMINANCE_BUCKETS, dtype=np.int64)

    def black_row(self, y: int, row: BitArray | None = None) -> BitArray:
        width = self.width
        if row is None or row.size < width:
            row = BitArray(width)
        else:
            row.clear()

        self._init_arrays(width)
        luminances = self.luminance_source.row(y, self._luminances)
        buckets = build_histogram(luminances, self._buckets)
        black_point = estimate_black_point(buckets)
        logger.debug("Row %d black point %d", y, black_point)

        bits = row.bits
        if width < MIN_SHARPEN_WIDTH:
            bits[:width] = luminances < black_point
        else:
            # A simple -1 4 -1 box filter with a weight of 2; the end columns stay unset
            samples = luminances.astype(np.int32)
            left, center, right = samples[:-2], samples[1:-1], samples[2:]
            sharpened = (center * 4 - left - right) // 2
            bits[1 : width - 1] = sharpened < black_point
        return row

    def black_matrix(self) -> BitMatrix:
        source = self.luminance_source
        start = time.perf_counter()

        black = adaptive_threshold(
            source.matrix(),
            radius=self.window_radius,
            stride=self.sample_stride,
            bias=self.mean_bias,
        )

        logger.debug(
            "Adaptive binarization of %dx%d took %.1f ms",
            source.width,
            source.height,
            (time.perf_counter() - start) * 1000,
        )
        return BitMatrix.from_array(black)

    def derive(self, source: LuminanceSource) -> GlobalHistogramBinarizer:
        return GlobalHistogramBinarizer(
            source,
            window_radius=self.window_radius,
            sample_stride=self.sample_stride,
            mean_bias=self.mean_bias,
        )

    def _init_arrays(self, luminance_size: int) -> None:
        if self._luminances.size < luminance_size:
            self._luminances = np.zeros(luminance_size, dtype=np.uint8)
        self._buckets[:] = 0
