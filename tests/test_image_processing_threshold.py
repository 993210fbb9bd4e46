# -*- coding: utf-8 -*-
"""
Threshold Tests - Tests for global, Otsu and Niblack thresholding.

Author
------
wavedet developers

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import numpy as np
import pytest

from wavedet.exceptions import ValidationError
from wavedet.image_processing.threshold import (
    GlobalThreshold,
    NiblackThreshold,
    OtsuThreshold,
)


@pytest.fixture
def bimodal():
    image = np.full((20, 20), 10.0)
    image[5:15, 5:15] = 200.0
    return image


class TestGlobalThreshold:
    """Test GlobalThreshold."""

    def test_threshold_is_inclusive(self):
        image = np.array([[1.0, 2.0], [3.0, 4.0]])
        result = GlobalThreshold(threshold=2.0).apply(image)
        np.testing.assert_array_equal(result, [[0, 255], [255, 255]])
        assert result.dtype == np.uint8

    def test_custom_values(self):
        image = np.array([[0.0, 5.0]])
        result = GlobalThreshold(threshold=1.0, foreground=1,
                                 background=7).apply(image)
        np.testing.assert_array_equal(result, [[7, 1]])

    def test_runtime_threshold(self):
        image = np.array([[1.0, 2.0, 3.0]])
        result = GlobalThreshold(threshold=0.0).apply(image, threshold=2.5)
        np.testing.assert_array_equal(result, [[0, 0, 255]])

    def test_rejects_3d(self):
        with pytest.raises(ValidationError, match="2D"):
            GlobalThreshold().apply(np.zeros((2, 3, 3)))

    def test_foreground_range(self):
        with pytest.raises(ValueError, match="above maximum"):
            GlobalThreshold(foreground=300)


class TestOtsuThreshold:
    """Test OtsuThreshold."""

    def test_separates_modes(self, bimodal):
        otsu = OtsuThreshold()
        result = otsu.apply(bimodal)
        assert 10.0 <= otsu.level < 200.0
        np.testing.assert_array_equal(result == 255, bimodal == 200.0)

    def test_inverted_polarity(self, bimodal):
        result = OtsuThreshold(foreground=0, background=255).apply(bimodal)
        assert result[10, 10] == 0
        assert result[0, 0] == 255

    def test_constant_image(self):
        otsu = OtsuThreshold()
        result = otsu.apply(np.full((4, 4), 3.0))
        assert otsu.level == 3.0
        assert np.all(result == 0)

    def test_compute_level_matches_apply(self, bimodal):
        otsu = OtsuThreshold()
        level = otsu.compute_level(bimodal)
        otsu.apply(bimodal)
        assert otsu.level == level


class TestNiblackThreshold:
    """Test NiblackThreshold."""

    @pytest.fixture
    def single_spot(self):
        image = np.zeros((11, 11))
        image[5, 5] = 100.0
        return image

    def test_spot_is_foreground(self, single_spot):
        result = NiblackThreshold(window_size=3).apply(single_spot)
        assert result[5, 5] == 255
        assert result[5, 4] == 0
        assert result[4, 4] == 0

    def test_contrast_check_removes_flat_areas(self, single_spot):
        plain = NiblackThreshold(window_size=3).apply(single_spot)
        checked = NiblackThreshold(window_size=3, contrast_window=3,
                                   contrast_threshold=1.0).apply(single_spot)
        assert plain[0, 0] == 255
        assert checked[0, 0] == 0
        assert np.count_nonzero(checked) == 1
        assert checked[5, 5] == 255

    def test_enhanced_form(self, single_spot):
        result = NiblackThreshold(window_size=3, r=50.0, contrast_window=3,
                                  contrast_threshold=1.0).apply(single_spot)
        assert result[5, 5] == 255
        assert result[5, 6] == 0

    def test_window_range(self):
        with pytest.raises(ValueError, match="below minimum"):
            NiblackThreshold(window_size=1)
