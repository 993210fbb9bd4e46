# -*- coding: utf-8 -*-
"""
Example Script Tests.

Runs the particle detection example headless on a small synthetic image
and checks its matplotlib dependency handling.

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

import json
import sys

import numpy as np
import pytest

from wavedet.exceptions import DependencyError, WavedetError
from wavedet.example import detect_particles
from wavedet.image_processing.detection import ParticleDetectorUWT2D


@pytest.fixture
def image_file(tmp_path):
    rows, cols = np.mgrid[:48, :48]
    image = 5.0 + 200.0 * np.exp(-((rows - 24) ** 2 + (cols - 20) ** 2) / 8.0)
    path = tmp_path / 'spots.npy'
    np.save(path, image)
    return path


class TestDetectParticlesExample:
    """Headless runs of the example."""

    def test_geojson_written_from_single_run(self, image_file, tmp_path,
                                              monkeypatch):
        calls = []
        real_run = ParticleDetectorUWT2D.run

        def _counting_run(self, *args, **kwargs):
            calls.append(True)
            return real_run(self, *args, **kwargs)

        monkeypatch.setattr(ParticleDetectorUWT2D, 'run', _counting_run)
        out = tmp_path / 'spots.geojson'
        detect_particles.detect_particles_example(image_file, geojson=out,
                                                  show=False)
        assert len(calls) == 1
        gj = json.loads(out.read_text())
        assert gj['type'] == 'FeatureCollection'
        assert len(gj['features']) == 1

    def test_synthetic_spots_reproducible(self):
        a = detect_particles.synthetic_spots(shape=(32, 32), n_spots=3, seed=1)
        b = detect_particles.synthetic_spots(shape=(32, 32), n_spots=3, seed=1)
        np.testing.assert_array_equal(a, b)


class TestLoadPyplot:
    """matplotlib is only needed for the display."""

    def test_missing_matplotlib(self, monkeypatch):
        monkeypatch.setitem(sys.modules, 'matplotlib.pyplot', None)
        with pytest.raises(DependencyError, match="matplotlib") as info:
            detect_particles.load_pyplot()
        assert isinstance(info.value, ImportError)
        assert isinstance(info.value, WavedetError)
