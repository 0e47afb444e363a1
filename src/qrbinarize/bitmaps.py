"""Fixed-size bitmaps produced by the binarizers.

BitArray holds one row (1-D scanning), BitMatrix a whole image (2-D
scanning). In both, True means black. Storage is a numpy boolean array
exposed through ``bits`` so binarizers can write whole slices at once.
"""

from __future__ import annotations

import numpy as np


class BitArray:
    """A row of bits, addressed by column."""

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError(f"BitArray size must not be negative, got {size}")
        self._bits = np.zeros(size, dtype=bool)

    @property
    def size(self) -> int:
        return int(self._bits.size)

    @property
    def bits(self) -> np.ndarray:
        """Underlying boolean array; writes go through to the row."""
        return self._bits

    def __len__(self) -> int:
        return self.size

    def get(self, i: int) -> bool:
        return bool(self._bits[i])

    def set(self, i: int) -> None:
        self._bits[i] = True

    def unset(self, i: int) -> None:
        self._bits[i] = False

    def flip(self, i: int) -> None:
        self._bits[i] = not self._bits[i]

    def clear(self) -> None:
        self._bits[:] = False

    def set_range(self, start: int, end: int) -> None:
        """Set bits in [start, end)."""
        if start < 0 or end > self.size or end < start:
            raise ValueError(f"Invalid range [{start}, {end}) for size {self.size}")
        self._bits[start:end] = True

    def is_range(self, start: int, end: int, value: bool) -> bool:
        """Check whether every bit in [start, end) equals value.

        An empty range is trivially uniform.
        """
        if start < 0 or end > self.size or end < start:
            raise ValueError(f"Invalid range [{start}, {end}) for size {self.size}")
        if start == end:
            return True
        return bool(np.all(self._bits[start:end] == value))

    def next_set(self, start: int) -> int:
        """Index of the first set bit at or after start, or size if none."""
        return self._next(start, True)

    def next_unset(self, start: int) -> int:
        """Index of the first unset bit at or after start, or size if none."""
        return self._next(start, False)

    def _next(self, start: int, value: bool) -> int:
        if start >= self.size:
            return self.size
        hits = np.flatnonzero(self._bits[max(start, 0) :] == value)
        if hits.size == 0:
            return self.size
        return max(start, 0) + int(hits[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitArray):
            return NotImplemented
        return np.array_equal(self._bits, other._bits)

    def __repr__(self) -> str:
        return f"BitArray(size={self.size})"

    def __str__(self) -> str:
        chars = np.where(self._bits, "X", ".")
        groups = ["".join(chars[i : i + 8]) for i in range(0, self.size, 8)]
        return " ".join(groups)


class BitMatrix:
    """A width x height grid of bits, addressed as (x, y)."""

    def __init__(self, width: int, height: int | None = None) -> None:
        if height is None:
            height = width
        if width < 1 or height < 1:
            raise ValueError(f"Both dimensions must be positive, got {width}x{height}")
        self._bits = np.zeros((height, width), dtype=bool)

    @classmethod
    def from_array(cls, bits: np.ndarray) -> BitMatrix:
        """Wrap a 2-D array (rows first) without copying when it is already bool."""
        if bits.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {bits.shape}")
        height, width = bits.shape
        matrix = cls(width, height)
        matrix._bits = np.asarray(bits, dtype=bool)
        return matrix

    @property
    def width(self) -> int:
        return int(self._bits.shape[1])

    @property
    def height(self) -> int:
        return int(self._bits.shape[0])

    @property
    def bits(self) -> np.ndarray:
        """Underlying (height, width) boolean array; writes go through."""
        return self._bits

    def get(self, x: int, y: int) -> bool:
        return bool(self._bits[y, x])

    def set(self, x: int, y: int) -> None:
        self._bits[y, x] = True

    def unset(self, x: int, y: int) -> None:
        self._bits[y, x] = False

    def flip(self, x: int, y: int) -> None:
        self._bits[y, x] = not self._bits[y, x]

    def clear(self) -> None:
        self._bits[:, :] = False

    def row(self, y: int, out: BitArray | None = None) -> BitArray:
        """Copy row y into a BitArray, reusing out when it is wide enough."""
        if out is None or out.size < self.width:
            out = BitArray(self.width)
        else:
            out.clear()
        out.bits[: self.width] = self._bits[y]
        return out

    def set_row(self, y: int, row: BitArray) -> None:
        self._bits[y] = row.bits[: self.width]

    def to_image(self) -> np.ndarray:
        """Render as a uint8 image: black bits become 0, white bits 255."""
        return np.where(self._bits, np.uint8(0), np.uint8(255))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitMatrix):
            return NotImplemented
        return np.array_equal(self._bits, other._bits)

    def __repr__(self) -> str:
        return f"BitMatrix(width={self.width}, height={self.height})"

    def __str__(self) -> str:
        lines = ("".join("X " if bit else "  " for bit in line) for line in self._bits)
        return "\n".join(lines) + "\n"
