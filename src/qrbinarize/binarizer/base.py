"""Binarizer capability shared by every thresholding strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod

from qrbinarize.bitmaps import BitArray, BitMatrix
from qrbinarize.luminance_source import LuminanceSource


class Binarizer(ABC):
    """Turns a LuminanceSource into black/white bitmaps on demand.

    Instances keep scratch buffers between calls and are not thread-safe.
    Give each consumer its own instance with derive().
    """

    def __init__(self, source: LuminanceSource) -> None:
        self._source = source

    @property
    def luminance_source(self) -> LuminanceSource:
        return self._source

    @property
    def width(self) -> int:
        return self._source.width

    @property
    def height(self) -> int:
        return self._source.height

    @abstractmethod
    def black_row(self, y: int, row: BitArray | None = None) -> BitArray:
        """Classify one row, True meaning black.

        Args:
            y: Row index, 0 <= y < height
            row: Optional BitArray to reuse; it is cleared when large
                enough, otherwise a new one is allocated

        Returns:
            A BitArray of at least width bits

        Raises:
            ContrastFailureError: If no reliable threshold exists for the row
        """

    @abstractmethod
    def black_matrix(self) -> BitMatrix:
        """Classify the whole image into a newly allocated BitMatrix."""

    @abstractmethod
    def derive(self, source: LuminanceSource) -> Binarizer:
        """Create a binarizer of the same kind and settings over another source."""
