# -*- coding: utf-8 -*-
"""
Correlation Images - Joint evidence of structure across wavelet scales.

Correlation image ``i`` is the pixel-wise product of the non-negative
parts of the band-pass planes ``j_min + i .. j_min + i + s - 1`` where
``s`` is the scale interval size. Planes must follow the layout of
``UndecimatedWaveletTransform``: index 0 is the lowpass residual and
indices ``1..j_max`` are band-pass planes, coarser with increasing
index.

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
import logging

# Third-party
import numpy as np

# wavedet internal
from wavedet.exceptions import ResourceError, ValidationError
from wavedet.image_processing.detection.particles.config import (
    validate_scale_config,
)

logger = logging.getLogger(__name__)


def num_correlation_images(j_min: int, j_max: int, scale_interval_size: int) -> int:
    """``j_max - j_min + 1 - scale_interval_size + 1``, after validation."""
    validate_scale_config(j_min, j_max, scale_interval_size)
    return j_max - j_min + 1 - scale_interval_size + 1


def correlation_images(
    planes: np.ndarray,
    j_min: int,
    j_max: int,
    scale_interval_size: int,
) -> np.ndarray:
    """Compute the stack of correlation images.

    Parameters
    ----------
    planes : np.ndarray
        ``(n_planes, rows, cols)`` wavelet planes with ``n_planes > j_max``.
    j_min, j_max : int
        Scale window bounds.
    scale_interval_size : int
        Number of consecutive band-pass planes multiplied per image.

    Returns
    -------
    np.ndarray
        ``(num_correlation_images, rows, cols)`` float64 stack.

    Raises
    ------
    ConfigError
        If the scale settings are invalid.
    ValidationError
        If *planes* does not hold ``j_max + 1`` planes.
    ResourceError
        If the output stack cannot be allocated.
    """
    n_corr = num_correlation_images(j_min, j_max, scale_interval_size)
    if planes.ndim != 3 or planes.shape[0] <= j_max:
        raise ValidationError(
            f"Expected at least {j_max + 1} wavelet planes, "
            f"got array of shape {planes.shape}"
        )

    try:
        clipped = np.maximum(planes[j_min:j_max + 1], 0.0)
        out = np.empty((n_corr,) + planes.shape[1:], dtype=np.float64)
    except MemoryError as exc:
        raise ResourceError(
            f"Cannot allocate {n_corr} correlation images of shape "
            f"{planes.shape[1:]}"
        ) from exc

    for i in range(n_corr):
        np.prod(clipped[i:i + scale_interval_size], axis=0, out=out[i])
        logger.debug("correlation image %d from bands %d..%d", i,
                     j_min + i, j_min + i + scale_interval_size - 1)
    return out
