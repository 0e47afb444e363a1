"""
QrBinarize - Numeric Constants

Simple numeric constants with ZERO internal imports to avoid circular dependencies.
For application-level constants (strings, paths), use config.py.
"""

from typing import Final

# ============================================================================
# Luminance Histogram
# ============================================================================

LUMINANCE_BITS: Final[int] = 5
LUMINANCE_SHIFT: Final[int] = 8 - LUMINANCE_BITS
LUMINANCE_BUCKETS: Final[int] = 1 << LUMINANCE_BITS
MAX_LUMINANCE: Final[int] = 255

# ============================================================================
# Adaptive Matrix Binarization
# ============================================================================

DEFAULT_WINDOW_RADIUS: Final[int] = 10
DEFAULT_SAMPLE_STRIDE: Final[int] = 3
DEFAULT_MEAN_BIAS: Final[int] = 0

# ============================================================================
# Row Sharpening
# ============================================================================

# Narrower rows are thresholded on raw luminance
MIN_SHARPEN_WIDTH: Final[int] = 3

# ============================================================================
# ASCII Rendering
# ============================================================================

ASCII_PREVIEW_RAMP: Final[str] = "#+. "
