"""Adaptive local-mean thresholding for whole images.

Each pixel is compared with the mean of a sparse square neighbourhood:
offsets -radius, -radius + stride, ... up to +radius on both axes.
Samples falling outside the image are left out rather than clamped or
mirrored. The offsets need not include 0, so a pixel in an image smaller
than the sampling grid may see no sample at all; it then uses its own
luminance as the mean and stays white.
"""

import logging

import numpy as np

from qrbinarize.constants import (
    DEFAULT_MEAN_BIAS,
    DEFAULT_SAMPLE_STRIDE,
    DEFAULT_WINDOW_RADIUS,
    MAX_LUMINANCE,
)

logger = logging.getLogger(__name__)


def window_offsets(
    radius: int = DEFAULT_WINDOW_RADIUS, stride: int = DEFAULT_SAMPLE_STRIDE
) -> list[int]:
    """Sampled offsets along one axis, e.g. [-10, -7, -4, -1, 2, 5, 8]."""
    return list(range(-radius, radius + 1, stride))


def local_means(
    luminances: np.ndarray,
    radius: int = DEFAULT_WINDOW_RADIUS,
    stride: int = DEFAULT_SAMPLE_STRIDE,
) -> tuple[np.ndarray, np.ndarray]:
    """Sum and count the in-bounds window samples of every pixel.

    The window is visited one offset pair at a time: each pair adds a
    shifted copy of the image to the running sums, restricted to the pixels
    whose shifted sample lies inside the image.

    Args:
        luminances: (height, width) uint8 image
        radius: Window half-width
        stride: Step between sampled offsets

    Returns:
        Tuple of (sums, counts), both (height, width) int32 arrays
    """
    height, width = luminances.shape
    samples = luminances.astype(np.int32)
    sums = np.zeros((height, width), dtype=np.int32)
    counts = np.zeros((height, width), dtype=np.int32)

    offsets = window_offsets(radius, stride)
    for dy in offsets:
        y0, y1 = max(0, -dy), min(height, height - dy)
        if y0 >= y1:
            continue
        for dx in offsets:
            x0, x1 = max(0, -dx), min(width, width - dx)
            if x0 >= x1:
                continue
            sums[y0:y1, x0:x1] += samples[y0 + dy : y1 + dy, x0 + dx : x1 + dx]
            counts[y0:y1, x0:x1] += 1

    return sums, counts


def adaptive_threshold(
    luminances: np.ndarray,
    radius: int = DEFAULT_WINDOW_RADIUS,
    stride: int = DEFAULT_SAMPLE_STRIDE,
    bias: int = DEFAULT_MEAN_BIAS,
) -> np.ndarray:
    """Classify every pixel against its local mean.

    Args:
        luminances: (height, width) uint8 image
        radius: Window half-width
        stride: Step between sampled offsets
        bias: Constant subtracted from each local mean

    Returns:
        (height, width) bool array, True where the pixel is darker than
        its local mean minus bias
    """
    samples = luminances.astype(np.int32)
    sums, counts = local_means(luminances, radius, stride)

    unsampled = counts == 0
    means = np.where(unsampled, samples, sums // np.maximum(counts, 1))
    thresholds = np.clip(means - bias, 0, MAX_LUMINANCE)

    if unsampled.any():
        logger.debug("%d pixels had no in-bounds window sample", int(unsampled.sum()))
        thresholds = np.where(unsampled, samples, thresholds)

    return samples < thresholds
