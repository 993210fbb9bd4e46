# -*- coding: utf-8 -*-
"""
Undecimated Wavelet Transform - A trous multiscale band-pass decomposition.

Implements the isotropic undecimated ("a trous", with holes) wavelet
transform used by the multiscale particle detector. Starting from
``A_0 = image`` the transform repeatedly smooths with a separable
lowpass kernel whose taps are spread ``2**(j-1)`` pixels apart:

    A_j = conv(A_{j-1}, h_j),     W_j = A_{j-1} - A_j,   j = 1..Jmax

The output stack has ``Jmax + 1`` planes: plane 0 holds the residual
lowpass ``A_Jmax``, planes ``1..Jmax`` hold the band-pass (wavelet)
planes ``W_j`` with increasing index meaning coarser scale. Summing all
planes reconstructs the input exactly.

Optional denoising shrinks every coefficient with Jeffrey's
noninformative prior, ``w -> max(w**2 - 3 sigma_j**2, 0) / w``, where
``sigma_j`` is the scale-1 noise level (a 3-sigma clipped standard
deviation of ``W_1``) times a per-scale factor for white Gaussian noise.

The transform is a ``ControllableProcessor``: it checks for STOP/PAUSE
commands before every scale and can therefore run on a worker thread
driven by a ``TransformController``.

Dependencies
------------
scipy

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
from functools import lru_cache
from typing import Annotated, Any, Optional, Tuple

# Third-party
import numpy as np
from scipy.ndimage import correlate1d

# wavedet internal
from wavedet.exceptions import OperationCancelled, ValidationError
from wavedet.image_processing.base import ImageTransform
from wavedet.image_processing.control import ControllableProcessor, StatusEvent
from wavedet.image_processing.params import Desc, Range
from wavedet.image_processing.versioning import processor_tags, processor_version
from wavedet.vocabulary import ExecutionStatus, ProcessorCategory

logger = logging.getLogger(__name__)

B3_SPLINE_KERNEL: Tuple[float, ...] = (1.0 / 16.0, 1.0 / 4.0, 3.0 / 8.0,
                                       1.0 / 4.0, 1.0 / 16.0)
"""Scale-1 lowpass kernel of the cubic B-spline a trous transform."""

HALF_SIGMA_KERNEL: Tuple[float, ...] = (0.0002638651, 0.1064507720,
                                        0.7865707259, 0.1064507720,
                                        0.0002638651)
"""Scale-1 lowpass kernel approximating a Gaussian with sigma = 0.5."""

NOISE_SIGMA_SCALES: Tuple[float, ...] = (1.000000, 0.085954, 0.036694,
                                         0.017764, 0.008837, 0.004465)
"""Relative noise std of wavelet planes 1..6 for white Gaussian noise."""


def dilate_kernel(kernel: np.ndarray, level: int) -> np.ndarray:
    """Insert ``2**(level-1) - 1`` zeros between the taps of *kernel*.

    Parameters
    ----------
    kernel : np.ndarray
        1D scale-1 kernel.
    level : int
        Scale index ``j >= 1``.

    Returns
    -------
    np.ndarray
        1D kernel of length ``(len(kernel) - 1) * 2**(level-1) + 1``.
    """
    step = 2 ** (level - 1)
    holey = np.zeros((len(kernel) - 1) * step + 1, dtype=np.float64)
    holey[::step] = kernel
    return holey


def atrous_smooth(image: np.ndarray, kernel: np.ndarray, level: int) -> np.ndarray:
    """Separable lowpass filtering at scale *level* with edge replication."""
    holey = dilate_kernel(kernel, level)
    tmp = correlate1d(image, holey, axis=1, mode='nearest')
    return correlate1d(tmp, holey, axis=0, mode='nearest')


def clipped_std(image: np.ndarray, include: Optional[np.ndarray] = None) -> float:
    """Standard deviation after one pass of 3-sigma clipping.

    Parameters
    ----------
    image : np.ndarray
        Wavelet plane.
    include : np.ndarray, optional
        Boolean mask of pixels to use. All pixels if None.

    Returns
    -------
    float
    """
    values = image[include] if include is not None else image.ravel()
    if values.size == 0:
        return 0.0
    mu = float(values.mean())
    sigma = float(values.std())
    kept = values[np.abs(values - mu) <= 3.0 * sigma]
    if kept.size == 0:
        return sigma
    return float(kept.std())


@lru_cache(maxsize=8)
def estimate_sigma_scales(kernel: Tuple[float, ...], j_max: int,
                          size: int = 512, seed: int = 0) -> Tuple[float, ...]:
    """Relative noise std per scale, measured on seeded Gaussian noise.

    Used when ``j_max`` exceeds the tabulated ``NOISE_SIGMA_SCALES``.
    """
    rng = np.random.default_rng(seed)
    noise = rng.standard_normal((size, size))
    k = np.asarray(kernel, dtype=np.float64)
    stds = []
    last = noise
    for j in range(1, j_max + 1):
        smooth = atrous_smooth(last, k, j)
        stds.append(float((last - smooth).std()))
        last = smooth
    return tuple(s / stds[0] for s in stds)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.TRANSFORM,
                description='Undecimated a trous wavelet decomposition')
class UndecimatedWaveletTransform(ControllableProcessor, ImageTransform):
    """A trous undecimated wavelet transform of a 2D image.

    Parameters
    ----------
    j_max : int
        Maximum scale index; the output has ``j_max + 1`` planes.
    denoise : bool
        Shrink wavelet coefficients with Jeffrey's prior.
    initial_sigma_half : bool
        Use the sigma=0.5 Gaussian kernel instead of the B3-spline.

    Examples
    --------
    >>> uwt = UndecimatedWaveletTransform(j_max=4, denoise=True)
    >>> planes = uwt.apply(image)            # (5, rows, cols)
    >>> np.allclose(uwt.reconstruct(planes), image)   # without denoising
    """

    j_max: Annotated[int, Range(min=1, max=16),
                     Desc('Maximum scale index')] = 4
    denoise: Annotated[bool, Desc('Denoise coefficients (Jeffreys prior)')] = False
    initial_sigma_half: Annotated[bool,
                                  Desc('Use sigma=0.5 initial kernel')] = False

    @property
    def kernel(self) -> np.ndarray:
        """Scale-1 lowpass kernel in use."""
        taps = HALF_SIGMA_KERNEL if self.initial_sigma_half else B3_SPLINE_KERNEL
        return np.asarray(taps, dtype=np.float64)

    # -----------------------------------------------------------------
    # Forward transform
    # -----------------------------------------------------------------
    def decompose(
        self,
        source: np.ndarray,
        exclude_mask: Optional[np.ndarray] = None,
        **kwargs: Any,
    ) -> Optional[np.ndarray]:
        """Run the forward transform.

        Parameters
        ----------
        source : np.ndarray
            2D image ``(rows, cols)``.
        exclude_mask : np.ndarray, optional
            Same-shape mask; non-zero pixels are ignored for noise
            estimation and their coefficients are zeroed by denoising.

        Returns
        -------
        np.ndarray or None
            ``(j_max + 1, rows, cols)`` float64 stack, or None if the
            transform was stopped before completion.
        """
        params = self._resolve_params(kwargs)
        j_max = params['j_max']

        if source.ndim != 2:
            raise ValidationError(
                f"Wavelet transform requires 2D input, got shape {source.shape}"
            )
        if exclude_mask is not None and exclude_mask.shape != source.shape:
            raise ValidationError(
                f"exclude_mask shape {exclude_mask.shape} does not match "
                f"image shape {source.shape}"
            )

        self._set_execution_status(ExecutionStatus.RUNNING)
        kernel = (np.asarray(HALF_SIGMA_KERNEL) if params['initial_sigma_half']
                  else np.asarray(B3_SPLINE_KERNEL))
        name = type(self).__name__

        planes = np.empty((j_max + 1,) + source.shape, dtype=np.float64)
        last = source.astype(np.float64)
        for j in range(1, j_max + 1):
            if not self._checkpoint():
                return None
            self.notify_listeners(StatusEvent(
                f"[{name}] computing scale {j} of {j_max}...", j, j_max,
            ))
            smooth = atrous_smooth(last, kernel, j)
            planes[j] = last - smooth
            last = smooth
            self._report_progress(kwargs, j / (j_max + 1))
        planes[0] = last

        if params['denoise']:
            logger.debug("%s: denoising %d wavelet planes", name, j_max)
            self._denoise(planes, kernel, exclude_mask)

        self._report_progress(kwargs, 1.0)
        self._set_execution_status(ExecutionStatus.TERMINATED)
        return planes

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Forward transform; raises ``OperationCancelled`` if stopped."""
        planes = self.decompose(source, **kwargs)
        if planes is None:
            raise OperationCancelled(f"{type(self).__name__} was stopped")
        return planes

    # -----------------------------------------------------------------
    # Denoising and inverse
    # -----------------------------------------------------------------
    @staticmethod
    def _denoise(planes: np.ndarray, kernel: np.ndarray,
                 exclude_mask: Optional[np.ndarray]) -> None:
        j_max = planes.shape[0] - 1
        include = None if exclude_mask is None else (exclude_mask == 0)
        if j_max <= len(NOISE_SIGMA_SCALES):
            scales = NOISE_SIGMA_SCALES
        else:
            scales = estimate_sigma_scales(tuple(kernel.tolist()), j_max)
        sigma1 = clipped_std(planes[1], include)

        for j in range(1, j_max + 1):
            w = planes[j]
            s2 = 3.0 * (sigma1 * scales[j - 1]) ** 2
            shrunk = np.maximum(w * w - s2, 0.0)
            out = np.zeros_like(w)
            np.divide(shrunk, w, out=out, where=(w != 0.0))
            if include is not None:
                out[~include] = 0.0
            planes[j] = out

    @staticmethod
    def reconstruct(planes: np.ndarray) -> np.ndarray:
        """Inverse transform: the sum of all planes."""
        return np.sum(planes, axis=0)
