# -*- coding: utf-8 -*-
"""
Intensity Transform Tests.

Tests for the Anscombe variance-stabilising transform and its inverse.

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

from wavedet.image_processing.intensity import (
    AnscombeTransform,
    InverseAnscombeTransform,
)


class TestAnscombeTransform:
    """Test AnscombeTransform."""

    def test_known_values(self):
        result = AnscombeTransform().apply(np.array([0.0, 1.0, 10.0]))
        expected = 2.0 * np.sqrt(np.array([0.375, 1.375, 10.375]))
        np.testing.assert_allclose(result, expected)

    def test_integer_input_gives_float64(self):
        result = AnscombeTransform().apply(np.arange(6, dtype=np.uint16).reshape(2, 3))
        assert result.dtype == np.float64
        assert result.shape == (2, 3)

    def test_values_below_offset_clipped(self):
        result = AnscombeTransform().apply(np.array([-5.0]))
        assert result[0] == pytest.approx(0.0)

    def test_source_not_modified(self):
        source = np.array([[1.0, 2.0]])
        AnscombeTransform().apply(source)
        np.testing.assert_array_equal(source, [[1.0, 2.0]])

    def test_stabilises_poisson_variance(self):
        rng = np.random.default_rng(3)
        low = AnscombeTransform().apply(rng.poisson(20.0, 200000).astype(float))
        high = AnscombeTransform().apply(rng.poisson(200.0, 200000).astype(float))
        assert low.var() == pytest.approx(1.0, abs=0.05)
        assert high.var() == pytest.approx(1.0, abs=0.05)


class TestInverseAnscombeTransform:
    """Test InverseAnscombeTransform."""

    def test_round_trip(self):
        source = np.linspace(0.0, 500.0, 11)
        forward = AnscombeTransform().apply(source)
        np.testing.assert_allclose(InverseAnscombeTransform().apply(forward),
                                   source, atol=1e-9)

    def test_known_value(self):
        assert InverseAnscombeTransform().apply(np.array([4.0]))[0] == \
            pytest.approx(4.0 - 0.375)
