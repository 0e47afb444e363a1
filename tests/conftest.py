"""Pytest configuration for qrbinarize tests.

Provides synthetic luminance images shared across test modules.
"""

import numpy as np
import pytest

from qrbinarize.luminance_source import ArrayLuminanceSource

DARK = 30
LIGHT = 200


@pytest.fixture
def source_from():
    """Factory turning nested lists or arrays into an ArrayLuminanceSource."""

    def _make(values) -> ArrayLuminanceSource:
        return ArrayLuminanceSource(np.asarray(values, dtype=np.uint8))

    return _make


@pytest.fixture
def split_image():
    """40x40 image, dark left of column 20 and light from column 20 on."""
    img = np.full((40, 40), LIGHT, dtype=np.uint8)
    img[:, :20] = DARK
    return img


@pytest.fixture
def rng():
    return np.random.default_rng(42)
