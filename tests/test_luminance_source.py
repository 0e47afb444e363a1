"""Tests for the luminance sources."""

import cv2
import numpy as np
import pytest

from qrbinarize.luminance_source import (
    ArrayLuminanceSource,
    InvertedLuminanceSource,
    PlanarYUVLuminanceSource,
)
from qrbinarize.utils.exceptions import ImageLoadError, InvalidLuminanceDataError


def _gradient(height: int = 4, width: int = 6) -> np.ndarray:
    return (np.arange(height * width, dtype=np.uint8) * 10).reshape(height, width)


def _nv21_frame(y_plane: np.ndarray) -> bytes:
    """Y plane followed by an interleaved VU plane of a quarter size each."""
    height, width = y_plane.shape
    chroma = np.full(height * width // 2, 128, dtype=np.uint8)
    return y_plane.tobytes() + chroma.tobytes()


class TestArrayLuminanceSource:
    def test_dimensions(self):
        source = ArrayLuminanceSource(_gradient())
        assert (source.width, source.height) == (6, 4)

    def test_row(self):
        img = _gradient()
        assert ArrayLuminanceSource(img).row(2).tolist() == img[2].tolist()

    def test_row_fills_buffer(self):
        img = _gradient()
        buffer = np.zeros(10, dtype=np.uint8)
        row = ArrayLuminanceSource(img).row(1, buffer)
        assert row.size == 6
        assert np.shares_memory(row, buffer)
        assert buffer[:6].tolist() == img[1].tolist()

    def test_small_buffer_is_ignored(self):
        buffer = np.zeros(2, dtype=np.uint8)
        row = ArrayLuminanceSource(_gradient()).row(0, buffer)
        assert row.size == 6
        assert not np.shares_memory(row, buffer)

    def test_row_is_a_copy(self):
        img = _gradient()
        row = ArrayLuminanceSource(img).row(0)
        row[:] = 0
        assert img[0, 1] == 10

    def test_row_out_of_range(self):
        with pytest.raises(InvalidLuminanceDataError):
            ArrayLuminanceSource(_gradient()).row(4)

    def test_matrix_is_read_only(self):
        matrix = ArrayLuminanceSource(_gradient()).matrix()
        assert matrix.shape == (4, 6)
        with pytest.raises(ValueError):
            matrix[0, 0] = 1

    def test_rejects_color_array(self):
        with pytest.raises(InvalidLuminanceDataError):
            ArrayLuminanceSource(np.zeros((4, 4, 3), dtype=np.uint8))

    def test_rejects_wrong_dtype(self):
        with pytest.raises(InvalidLuminanceDataError):
            ArrayLuminanceSource(np.zeros((4, 4), dtype=np.float32))

    def test_rejects_empty(self):
        with pytest.raises(InvalidLuminanceDataError):
            ArrayLuminanceSource(np.zeros((0, 0), dtype=np.uint8))

    def test_crop(self):
        img = _gradient()
        cropped = ArrayLuminanceSource(img).crop(1, 2, 3, 2)
        assert (cropped.width, cropped.height) == (3, 2)
        assert cropped.matrix().tolist() == img[2:4, 1:4].tolist()
        assert cropped.row(1).tolist() == img[3, 1:4].tolist()

    def test_crop_of_crop(self):
        img = _gradient()
        cropped = ArrayLuminanceSource(img).crop(1, 1, 4, 3).crop(1, 1, 2, 2)
        assert cropped.matrix().tolist() == img[2:4, 2:4].tolist()

    def test_crop_outside(self):
        with pytest.raises(InvalidLuminanceDataError):
            ArrayLuminanceSource(_gradient()).crop(4, 0, 3, 1)

    def test_from_bgr_image(self):
        img = np.full((5, 7, 3), 50, dtype=np.uint8)
        source = ArrayLuminanceSource.from_image(img)
        assert (source.width, source.height) == (7, 5)
        assert np.all(source.matrix() == 50)

    def test_from_bgra_image(self):
        img = np.full((3, 3, 4), 200, dtype=np.uint8)
        assert np.all(ArrayLuminanceSource.from_image(img).matrix() == 200)

    def test_from_file(self, tmp_path):
        img = _gradient(8, 9)
        path = tmp_path / "frame.png"
        cv2.imwrite(str(path), img)
        source = ArrayLuminanceSource.from_file(path)
        assert np.array_equal(source.matrix(), img)

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(ImageLoadError):
            ArrayLuminanceSource.from_file(tmp_path / "missing.png")

    def test_from_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        with pytest.raises(ImageLoadError):
            ArrayLuminanceSource.from_file(path)

    def test_str_preview(self):
        img = np.array([[0, 100, 150, 255]], dtype=np.uint8)
        assert str(ArrayLuminanceSource(img)) == "#+. \n"


class TestPlanarYUVLuminanceSource:
    def test_reads_y_plane(self):
        y_plane = _gradient(4, 6)
        source = PlanarYUVLuminanceSource(_nv21_frame(y_plane), 6, 4, 0, 0, 6, 4)
        assert np.array_equal(source.matrix(), y_plane)
        assert source.row(3).tolist() == y_plane[3].tolist()

    def test_crop_rectangle(self):
        y_plane = _gradient(4, 6)
        source = PlanarYUVLuminanceSource(_nv21_frame(y_plane), 6, 4, 2, 1, 3, 2)
        assert source.matrix().tolist() == y_plane[1:3, 2:5].tolist()

    def test_reverse_horizontal(self):
        y_plane = _gradient(4, 6)
        source = PlanarYUVLuminanceSource(_nv21_frame(y_plane), 6, 4, 0, 0, 6, 4, True)
        assert source.row(0).tolist() == y_plane[0, ::-1].tolist()

    def test_crop_of_mirrored_frame(self):
        y_plane = _gradient(4, 6)
        source = PlanarYUVLuminanceSource(_nv21_frame(y_plane), 6, 4, 0, 0, 6, 4, True)
        cropped = source.crop(0, 0, 2, 1)
        assert cropped.row(0).tolist() == source.row(0)[:2].tolist()

    def test_accepts_numpy_frame(self):
        y_plane = _gradient(2, 4)
        frame = np.frombuffer(_nv21_frame(y_plane), dtype=np.uint8).copy()
        source = PlanarYUVLuminanceSource(frame, 4, 2, 0, 0, 4, 2)
        assert np.array_equal(source.matrix(), y_plane)

    def test_crop_must_fit(self):
        with pytest.raises(InvalidLuminanceDataError):
            PlanarYUVLuminanceSource(bytes(24), 6, 4, 4, 0, 4, 4)

    def test_short_frame(self):
        with pytest.raises(InvalidLuminanceDataError):
            PlanarYUVLuminanceSource(bytes(10), 6, 4, 0, 0, 6, 4)


class TestInvertedLuminanceSource:
    def test_inverts_rows_and_matrix(self):
        img = _gradient()
        inverted = ArrayLuminanceSource(img).invert()
        assert isinstance(inverted, InvertedLuminanceSource)
        assert np.array_equal(inverted.matrix(), 255 - img)
        assert inverted.row(1).tolist() == (255 - img[1]).tolist()

    def test_inverts_into_buffer(self):
        img = _gradient()
        buffer = np.zeros(8, dtype=np.uint8)
        row = ArrayLuminanceSource(img).invert().row(0, buffer)
        assert np.shares_memory(row, buffer)
        assert row.tolist() == (255 - img[0]).tolist()

    def test_leaves_delegate_untouched(self):
        img = _gradient()
        source = ArrayLuminanceSource(img)
        source.invert().matrix()
        assert np.array_equal(source.matrix(), img)

    def test_double_invert_returns_delegate(self):
        source = ArrayLuminanceSource(_gradient())
        assert source.invert().invert() is source

    def test_crop(self):
        img = _gradient()
        cropped = ArrayLuminanceSource(img).invert().crop(0, 0, 2, 2)
        assert isinstance(cropped, InvertedLuminanceSource)
        assert np.array_equal(cropped.matrix(), 255 - img[:2, :2])

    def test_inverted_yuv_row(self):
        y_plane = _gradient(2, 4)
        source = PlanarYUVLuminanceSource(_nv21_frame(y_plane), 4, 2, 0, 0, 4, 2)
        assert source.invert().row(1).tolist() == (255 - y_plane[1]).tolist()
