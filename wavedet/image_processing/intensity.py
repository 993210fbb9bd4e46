# -*- coding: utf-8 -*-
"""
Intensity Transforms - Variance-stabilising radiometric transforms.

Photon-counting detectors produce Poisson noise whose variance grows
with the signal. ``AnscombeTransform`` maps such an image to one with
approximately unit-variance Gaussian noise (J.-L. Starck et al.), which
is what the wavelet denoising of the particle detector assumes.
``InverseAnscombeTransform`` is its algebraic inverse.

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

# Standard library
from typing import Any

# Third-party
import numpy as np

# wavedet internal
from wavedet.image_processing.base import ImageTransform
from wavedet.image_processing.versioning import processor_tags, processor_version
from wavedet.vocabulary import ProcessorCategory

_ANSCOMBE_OFFSET = 3.0 / 8.0


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE,
                description='Poisson-to-Gaussian noise transform')
class AnscombeTransform(ImageTransform):
    """Poisson-to-Gaussian noise transform ``2 * sqrt(x + 3/8)``.

    Negative inputs below ``-3/8`` are clipped to zero before the square
    root. Output dtype is float64.

    Examples
    --------
    >>> stabilised = AnscombeTransform().apply(counts)
    """

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        shifted = source.astype(np.float64) + _ANSCOMBE_OFFSET
        np.maximum(shifted, 0.0, out=shifted)
        return 2.0 * np.sqrt(shifted)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE,
                description='Gaussian-to-Poisson inverse noise transform')
class InverseAnscombeTransform(ImageTransform):
    """Algebraic inverse of ``AnscombeTransform``: ``(x / 2)**2 - 3/8``."""

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        half = source.astype(np.float64) * 0.5
        return half * half - _ANSCOMBE_OFFSET
