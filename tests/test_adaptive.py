"""Tests for the adaptive local-mean helpers."""

import numpy as np

from qrbinarize.binarizer.adaptive import adaptive_threshold, local_means, window_offsets


class TestWindowOffsets:
    def test_default_offsets(self):
        assert window_offsets() == [-10, -7, -4, -1, 2, 5, 8]

    def test_stride_one_includes_center(self):
        assert window_offsets(2, 1) == [-2, -1, 0, 1, 2]

    def test_zero_radius(self):
        assert window_offsets(0, 3) == [0]


class TestLocalMeans:
    def test_interior_pixel_sees_full_window(self):
        _, counts = local_means(np.zeros((40, 40), dtype=np.uint8))
        assert counts[20, 20] == 49

    def test_corner_skips_out_of_bounds_samples(self):
        _, counts = local_means(np.zeros((40, 40), dtype=np.uint8))
        # Only offsets 2, 5 and 8 stay inside on each axis
        assert counts[0, 0] == 9

    def test_uniform_image_mean_equals_value(self):
        img = np.full((25, 31), 77, dtype=np.uint8)
        sums, counts = local_means(img)
        assert np.all(sums // counts == 77)

    def test_no_overflow_on_white_image(self):
        img = np.full((30, 30), 255, dtype=np.uint8)
        sums, counts = local_means(img)
        assert sums[15, 15] == 255 * 49

    def test_single_row_has_no_samples(self):
        _, counts = local_means(np.zeros((1, 30), dtype=np.uint8))
        assert not counts.any()


class TestAdaptiveThreshold:
    def test_returns_bool_mask(self):
        mask = adaptive_threshold(np.full((10, 10), 50, dtype=np.uint8))
        assert mask.dtype == bool
        assert mask.shape == (10, 10)

    def test_dark_stripe_on_light(self):
        img = np.full((30, 30), 210, dtype=np.uint8)
        img[:, 15] = 40
        mask = adaptive_threshold(img)
        assert mask[:, 15].all()
        assert mask.sum() == 30

    def test_unsampled_pixels_stay_white(self):
        img = np.array([[0, 255]], dtype=np.uint8)
        assert not adaptive_threshold(img, bias=-100).any()
