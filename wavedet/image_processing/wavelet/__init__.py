# -*- coding: utf-8 -*-
"""
Wavelet Sub-module - Multiscale band-pass decompositions.

Key Classes
-----------
``UndecimatedWaveletTransform``
    A trous undecimated wavelet transform with optional Jeffreys-prior
    denoising and cooperative stop/pause/resume control.

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

from wavedet.image_processing.wavelet.uwt import (
    B3_SPLINE_KERNEL,
    HALF_SIGMA_KERNEL,
    NOISE_SIGMA_SCALES,
    UndecimatedWaveletTransform,
    atrous_smooth,
    clipped_std,
    dilate_kernel,
    estimate_sigma_scales,
)

__all__ = [
    'B3_SPLINE_KERNEL',
    'HALF_SIGMA_KERNEL',
    'NOISE_SIGMA_SCALES',
    'UndecimatedWaveletTransform',
    'atrous_smooth',
    'clipped_std',
    'dilate_kernel',
    'estimate_sigma_scales',
]
