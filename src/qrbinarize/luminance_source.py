"""Luminance sources: the read-only input side of the binarizers.

A source exposes an 8-bit grayscale image (0 = black, 255 = white) either
one row at a time or as a whole (height, width) array. Concrete sources
wrap a numpy/OpenCV image, the Y plane of a planar YUV camera frame, or
invert another source for light-on-dark codes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import cv2
import numpy as np

from qrbinarize.constants import ASCII_PREVIEW_RAMP, MAX_LUMINANCE
from qrbinarize.utils.exceptions import ImageLoadError, InvalidLuminanceDataError

logger = logging.getLogger(__name__)


class LuminanceSource(ABC):
    """Abstract grayscale image as seen by a Binarizer."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise InvalidLuminanceDataError(
                "image must be at least 1x1", shape=(max(height, 0), max(width, 0))
            )
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @abstractmethod
    def row(self, y: int, out: np.ndarray | None = None) -> np.ndarray:
        """Return the luminance of row y as a uint8 array of length width.

        Args:
            y: Row index, 0 <= y < height
            out: Optional buffer of at least width bytes to fill instead of
                allocating; the returned array is then a view of it

        Returns:
            The row samples
        """

    @abstractmethod
    def matrix(self) -> np.ndarray:
        """Return the whole image as a (height, width) uint8 array.

        The array may be a read-only view of the source data; callers must
        not modify it.
        """

    @property
    def is_crop_supported(self) -> bool:
        return False

    def crop(self, left: int, top: int, width: int, height: int) -> LuminanceSource:
        """Return a new source restricted to the given rectangle."""
        raise NotImplementedError(f"{type(self).__name__} does not support cropping")

    def invert(self) -> LuminanceSource:
        """Return a view of this source with black and white swapped."""
        return InvertedLuminanceSource(self)

    def _check_row(self, y: int) -> None:
        if not 0 <= y < self._height:
            raise InvalidLuminanceDataError(
                f"requested row {y} is outside the image (height {self._height})"
            )

    def _fill_row(self, samples: np.ndarray, out: np.ndarray | None) -> np.ndarray:
        """Copy samples into out when it is a usable buffer, else into a new array."""
        if out is not None and out.dtype == np.uint8 and out.ndim == 1 and out.size >= self._width:
            view = out[: self._width]
            view[:] = samples
            return view
        return np.array(samples, dtype=np.uint8)

    def __str__(self) -> str:
        # Four shades, darkest first
        levels = self.matrix().astype(np.intp) * len(ASCII_PREVIEW_RAMP) // (MAX_LUMINANCE + 1)
        ramp = np.array(list(ASCII_PREVIEW_RAMP))
        return "\n".join("".join(ramp[line]) for line in levels) + "\n"


class ArrayLuminanceSource(LuminanceSource):
    """Luminance held in a 2-D uint8 numpy array, optionally cropped."""

    def __init__(
        self,
        luminances: np.ndarray,
        left: int = 0,
        top: int = 0,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        luminances = np.asarray(luminances)
        if luminances.ndim != 2:
            raise InvalidLuminanceDataError("expected a single-channel 2-D array", luminances.shape)
        if luminances.dtype != np.uint8:
            raise InvalidLuminanceDataError(
                f"expected uint8 samples, got {luminances.dtype}", luminances.shape
            )

        data_height, data_width = luminances.shape
        if width is None:
            width = data_width - left
        if height is None:
            height = data_height - top
        if left < 0 or top < 0 or left + width > data_width or top + height > data_height:
            raise InvalidLuminanceDataError(
                "crop rectangle does not fit within image data", luminances.shape
            )

        super().__init__(width, height)
        self._data = luminances
        self._left = left
        self._top = top

    @classmethod
    def from_image(cls, img: np.ndarray) -> ArrayLuminanceSource:
        """Build a source from an OpenCV image (BGR, BGRA or grayscale)."""
        return cls(_to_grayscale(img))

    @classmethod
    def from_file(cls, path: str | Path) -> ArrayLuminanceSource:
        """Load an image file as grayscale.

        Raises:
            ImageLoadError: If the file is missing or not a decodable image
        """
        path = Path(path)
        if not path.is_file():
            raise ImageLoadError(str(path), "file not found")

        gray = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        if gray is None:
            raise ImageLoadError(str(path), "unsupported or corrupt image")

        logger.debug("Loaded %s as %dx%d luminance", path, gray.shape[1], gray.shape[0])
        return cls(gray)

    def _view(self) -> np.ndarray:
        return self._data[self._top : self._top + self.height, self._left : self._left + self.width]

    def row(self, y: int, out: np.ndarray | None = None) -> np.ndarray:
        self._check_row(y)
        return self._fill_row(self._data[self._top + y, self._left : self._left + self.width], out)

    def matrix(self) -> np.ndarray:
        view = self._view()
        view.flags.writeable = False
        return view

    @property
    def is_crop_supported(self) -> bool:
        return True

    def crop(self, left: int, top: int, width: int, height: int) -> ArrayLuminanceSource:
        if left < 0 or top < 0 or left + width > self.width or top + height > self.height:
            raise InvalidLuminanceDataError(
                "crop rectangle does not fit within image data", (self.height, self.width)
            )
        return ArrayLuminanceSource(self._data, self._left + left, self._top + top, width, height)


class PlanarYUVLuminanceSource(LuminanceSource):
    """The Y (luminance) plane of a planar YUV camera frame.

    Camera previews (NV21, YV12, I420) put the full-resolution Y plane first,
    so only the first data_width * data_height bytes are read. A crop
    rectangle selects the scanning area; reverse_horizontal mirrors it for
    front-facing cameras.
    """

    def __init__(
        self,
        yuv_data: bytes | bytearray | memoryview | np.ndarray,
        data_width: int,
        data_height: int,
        left: int,
        top: int,
        width: int,
        height: int,
        reverse_horizontal: bool = False,
    ) -> None:
        if left < 0 or top < 0 or left + width > data_width or top + height > data_height:
            raise InvalidLuminanceDataError(
                "crop rectangle does not fit within image data", (data_height, data_width)
            )

        plane = np.frombuffer(yuv_data, dtype=np.uint8)
        plane_size = data_width * data_height
        if plane.size < plane_size:
            raise InvalidLuminanceDataError(
                f"frame holds {plane.size} bytes, Y plane needs {plane_size}",
                (data_height, data_width),
            )

        super().__init__(width, height)
        self._data_width = data_width
        self._data_height = data_height
        self._left = left
        self._top = top
        self._y_plane = plane[:plane_size].reshape(data_height, data_width)
        self._region = self._y_plane[top : top + height, left : left + width]
        if reverse_horizontal:
            self._region = self._region[:, ::-1]
        self._reverse_horizontal = reverse_horizontal

    def row(self, y: int, out: np.ndarray | None = None) -> np.ndarray:
        self._check_row(y)
        return self._fill_row(self._region[y], out)

    def matrix(self) -> np.ndarray:
        if self._reverse_horizontal:
            return np.ascontiguousarray(self._region)
        return self._region

    @property
    def is_crop_supported(self) -> bool:
        return True

    def crop(self, left: int, top: int, width: int, height: int) -> PlanarYUVLuminanceSource:
        if left < 0 or top < 0 or left + width > self.width or top + height > self.height:
            raise InvalidLuminanceDataError(
                "crop rectangle does not fit within image data", (self.height, self.width)
            )
        if self._reverse_horizontal:
            # Crop coordinates are in mirrored space
            left = self.width - left - width
        return PlanarYUVLuminanceSource(
            self._y_plane,
            self._data_width,
            self._data_height,
            self._left + left,
            self._top + top,
            width,
            height,
            self._reverse_horizontal,
        )


class InvertedLuminanceSource(LuminanceSource):
    """Wraps another source and reports 255 - luminance for every sample."""

    def __init__(self, delegate: LuminanceSource) -> None:
        super().__init__(delegate.width, delegate.height)
        self._delegate = delegate

    @property
    def delegate(self) -> LuminanceSource:
        return self._delegate

    def row(self, y: int, out: np.ndarray | None = None) -> np.ndarray:
        samples = self._delegate.row(y, out)
        if not samples.flags.writeable:
            return MAX_LUMINANCE - samples
        np.subtract(MAX_LUMINANCE, samples, out=samples)
        return samples

    def matrix(self) -> np.ndarray:
        return MAX_LUMINANCE - self._delegate.matrix()

    @property
    def is_crop_supported(self) -> bool:
        return self._delegate.is_crop_supported

    def crop(self, left: int, top: int, width: int, height: int) -> InvertedLuminanceSource:
        return InvertedLuminanceSource(self._delegate.crop(left, top, width, height))

    def invert(self) -> LuminanceSource:
        return self._delegate


def _to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert to grayscale if needed, otherwise return as-is."""
    if img.ndim == 3 and img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    if img.ndim == 3 and img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    if img.ndim == 3 and img.shape[2] == 1:
        return img[:, :, 0]
    return img
