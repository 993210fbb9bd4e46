# -*- coding: utf-8 -*-
"""
Morphology Tests - Tests for hole filling, grey morphology, connected
components and the nuclei mask.

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
from wavedet.image_processing.morphology import (
    FillHoles,
    MorphologicalFilter,
    label_components,
    nuclei_mask,
)


@pytest.fixture
def ring():
    image = np.zeros((9, 9), dtype=np.uint8)
    image[2:7, 2:7] = 255
    image[4, 4] = 0
    return image


class TestFillHoles:
    """Test FillHoles."""

    def test_fills_enclosed_hole(self, ring):
        result = FillHoles().apply(ring)
        assert result[4, 4] == 255
        assert result.dtype == np.uint8
        assert np.count_nonzero(result) == 25

    def test_bool_in_bool_out(self, ring):
        result = FillHoles().apply(ring > 0)
        assert result.dtype == bool
        assert result[4, 4]

    def test_custom_fill_value(self, ring):
        result = FillHoles(foreground=7).apply(ring)
        assert result[4, 4] == 7
        assert result[2, 2] == 255

    def test_open_hole_not_filled(self):
        image = np.zeros((5, 5), dtype=bool)
        image[:, 1] = True
        image[:, 3] = True
        result = FillHoles().apply(image)
        assert not result[2, 2]

    def test_idempotent(self, ring):
        once = FillHoles().apply(ring)
        np.testing.assert_array_equal(FillHoles().apply(once), once)

    def test_source_not_modified(self, ring):
        FillHoles().apply(ring)
        assert ring[4, 4] == 0

    def test_rejects_3d(self):
        with pytest.raises(ValidationError):
            FillHoles().apply(np.zeros((2, 4, 4)))


class TestMorphologicalFilter:
    """Test MorphologicalFilter."""

    @pytest.fixture
    def dot(self):
        image = np.zeros((9, 9), dtype=np.uint8)
        image[4, 4] = 255
        return image

    def test_dilate_square(self, dot):
        result = MorphologicalFilter(operation='dilate', size=3).apply(dot)
        assert np.count_nonzero(result) == 9
        assert np.all(result[3:6, 3:6] == 255)

    def test_dilate_disk(self, dot):
        result = MorphologicalFilter(operation='dilate', size=5,
                                     element='disk').apply(dot)
        assert np.count_nonzero(result) == 13
        assert result[4, 6] == 255
        assert result[2, 2] == 0

    def test_erode_removes_dot(self, dot):
        result = MorphologicalFilter(operation='erode', size=3).apply(dot)
        assert np.count_nonzero(result) == 0

    def test_open_removes_small_keeps_large(self, dot):
        image = dot.copy()
        image[0:4, 0:4] = 255
        result = MorphologicalFilter(operation='open', size=3).apply(image)
        assert result[4, 4] == 0
        assert np.all(result[0:4, 0:4] == 255)

    def test_close_fills_gap(self):
        image = np.full((7, 7), 255, dtype=np.uint8)
        image[3, 3] = 0
        result = MorphologicalFilter(operation='close', size=3).apply(image)
        assert result[3, 3] == 255

    def test_footprint_shapes(self):
        assert MorphologicalFilter(size=9).footprint().shape == (9, 9)
        assert MorphologicalFilter(size=7, element='disk').footprint().shape == (7, 7)

    def test_invalid_operation(self):
        with pytest.raises(ValueError, match="not in allowed choices"):
            MorphologicalFilter(operation='tophat')


class TestLabelComponents:
    """Test label_components."""

    def test_diagonal_pixels_connected(self):
        image = np.zeros((4, 4), dtype=np.uint8)
        image[0, 0] = image[1, 1] = 255
        regions = label_components(image)
        assert len(regions) == 1
        assert regions[0].area == 2

    def test_raster_order(self):
        image = np.zeros((6, 6), dtype=bool)
        image[4, 0] = True
        image[0, 5] = True
        image[2, 2:4] = True
        regions = label_components(image)
        assert [r.bbox[1] for r in regions] == [0, 2, 4]
        assert [r.region_id for r in regions] == [1, 2, 3]
        assert regions.shape == (6, 6)

    def test_empty(self):
        assert len(label_components(np.zeros((3, 3)))) == 0


class TestNucleiMask:
    """Test nuclei_mask."""

    @pytest.fixture
    def nucleus(self):
        yy, xx = np.mgrid[0:64, 0:64]
        image = np.full((64, 64), 10.0)
        image[(yy - 32) ** 2 + (xx - 32) ** 2 <= 15 ** 2] = 200.0
        return image

    def test_polarity(self, nucleus):
        mask = nuclei_mask(nucleus)
        assert mask.dtype == np.uint8
        assert set(np.unique(mask)) <= {0, 255}
        assert mask[32, 32] == 0
        assert mask[0, 0] == 255

    def test_nucleus_shrunk(self, nucleus):
        mask = nuclei_mask(nucleus)
        zeros = mask == 0
        assert zeros.sum() < (nucleus == 200.0).sum()
        assert zeros[32, 32 + 10]
        assert not zeros[32, 32 + 15]
