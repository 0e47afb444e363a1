"""Luminance histograms and black-point estimation.

Samples are bucketed by their top LUMINANCE_BITS bits. The black point is
the deepest valley between the dark and the light peak, found with scores
that favour distant peaks and valleys closer to the light side.
"""

import logging
from collections.abc import Sequence

import numpy as np

from qrbinarize.constants import LUMINANCE_BUCKETS, LUMINANCE_SHIFT
from qrbinarize.utils.exceptions import ContrastFailureError

logger = logging.getLogger(__name__)


def build_histogram(luminances: np.ndarray, buckets: np.ndarray | None = None) -> np.ndarray:
    """Count samples per luminance bucket.

    Args:
        luminances: uint8 samples of any shape
        buckets: Optional int array of LUMINANCE_BUCKETS entries to fill

    Returns:
        The bucket counts; their sum equals luminances.size
    """
    counts = np.bincount(
        (np.asarray(luminances, dtype=np.uint8) >> LUMINANCE_SHIFT).ravel(),
        minlength=LUMINANCE_BUCKETS,
    )
    if buckets is None:
        return counts
    buckets[:] = counts
    return buckets


def estimate_black_point(buckets: Sequence[int] | np.ndarray) -> int:
    """Pick the luminance threshold separating black from white.

    Args:
        buckets: Histogram counts, one per bucket, darkest first

    Returns:
        The threshold on the 0-255 luminance scale

    Raises:
        ContrastFailureError: If the histogram lacks two well separated peaks
    """
    counts = [int(c) for c in buckets]
    num_buckets = len(counts)

    # Find the tallest peak in the histogram.
    max_bucket_count = 0
    first_peak = 0
    first_peak_size = 0
    for x, count in enumerate(counts):
        if count > first_peak_size:
            first_peak = x
            first_peak_size = count
        if count > max_bucket_count:
            max_bucket_count = count

    # Find the second-tallest peak which is somewhat far from the tallest peak.
    second_peak = 0
    second_peak_score = 0
    for x, count in enumerate(counts):
        distance_to_biggest = x - first_peak
        score = count * distance_to_biggest * distance_to_biggest
        if score > second_peak_score:
            second_peak = x
            second_peak_score = score

    if second_peak_score == 0:
        logger.debug("Single luminance population in bucket %d", first_peak)
        raise ContrastFailureError("Histogram has a single luminance population")

    if first_peak > second_peak:
        first_peak, second_peak = second_peak, first_peak

    if second_peak - first_peak <= num_buckets // 16:
        logger.debug("Peaks %d and %d too close", first_peak, second_peak)
        raise ContrastFailureError(f"Histogram peaks {first_peak} and {second_peak} are too close")

    # Find a valley between them that is low and closer to the white peak.
    best_valley = second_peak - 1
    best_valley_score = -1
    for x in range(second_peak - 1, first_peak, -1):
        from_first = x - first_peak
        score = from_first * from_first * (second_peak - x) * (max_bucket_count - counts[x])
        if score > best_valley_score:
            best_valley = x
            best_valley_score = score

    return best_valley << LUMINANCE_SHIFT
