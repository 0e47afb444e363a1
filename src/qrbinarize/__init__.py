"""
QrBinarize - image binarization for barcode scanning

This package converts grayscale camera frames into black/white bitmaps
for barcode detectors: one row at a time with a global histogram black
point, or the whole frame with an adaptive local mean.
"""

from qrbinarize.binarizer import Binarizer, GlobalHistogramBinarizer, create_binarizer
from qrbinarize.bitmaps import BitArray, BitMatrix
from qrbinarize.config import BinarizerConfig
from qrbinarize.luminance_source import (
    ArrayLuminanceSource,
    InvertedLuminanceSource,
    LuminanceSource,
    PlanarYUVLuminanceSource,
)
from qrbinarize.utils.exceptions import ContrastFailureError, QrBinarizeError

__version__ = "1.0.0"
__license__ = "GPL-3.0"

__all__ = [
    "ArrayLuminanceSource",
    "Binarizer",
    "BinarizerConfig",
    "BitArray",
    "BitMatrix",
    "ContrastFailureError",
    "GlobalHistogramBinarizer",
    "InvertedLuminanceSource",
    "LuminanceSource",
    "PlanarYUVLuminanceSource",
    "QrBinarizeError",
    "__version__",
    "create_binarizer",
]
