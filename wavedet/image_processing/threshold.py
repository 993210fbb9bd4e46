# -*- coding: utf-8 -*-
"""
Threshold Transforms - Binarization of scalar images.

- ``GlobalThreshold``: fixed level, ``value >= level`` is foreground.
- ``OtsuThreshold``: global level chosen by Otsu's method (scikit-image).
- ``NiblackThreshold``: local level ``mean + k * std`` over a sliding
  window, optionally in Zhang's enhanced form and with a local contrast
  check that classifies flat neighbourhoods as background.

All transforms return ``uint8`` images holding only the configured
foreground and background values.

Dependencies
------------
scipy, scikit-image

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
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy.ndimage import uniform_filter
from skimage.filters import threshold_otsu

# wavedet internal
from wavedet.exceptions import ValidationError
from wavedet.image_processing.base import ImageTransform
from wavedet.image_processing.params import Desc, Range
from wavedet.image_processing.versioning import processor_tags, processor_version
from wavedet.vocabulary import ProcessorCategory


def _binary(fg: np.ndarray, foreground: int, background: int) -> np.ndarray:
    out = np.full(fg.shape, background, dtype=np.uint8)
    out[fg] = foreground
    return out


def _check_2d(source: np.ndarray) -> None:
    if source.ndim != 2:
        raise ValidationError(
            f"Thresholding requires a 2D image, got shape {source.shape}"
        )


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD,
                description='Fixed global threshold')
class GlobalThreshold(ImageTransform):
    """Pixels with ``value >= threshold`` become ``foreground``.

    Parameters
    ----------
    threshold : float
        Threshold level.
    foreground : int
        Output value of foreground pixels. Default 255.
    background : int
        Output value of background pixels. Default 0.
    """

    threshold: Annotated[float, Desc('Threshold level')] = 0.0
    foreground: Annotated[int, Range(min=0, max=255),
                          Desc('Foreground value')] = 255
    background: Annotated[int, Range(min=0, max=255),
                          Desc('Background value')] = 0

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        _check_2d(source)
        return _binary(source >= params['threshold'],
                       params['foreground'], params['background'])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD,
                description="Otsu's global threshold")
class OtsuThreshold(ImageTransform):
    """Global threshold at the level computed by Otsu's method.

    Pixels strictly above the Otsu level are foreground. The level of
    the last call is available as ``level``.

    Parameters
    ----------
    bins : int
        Histogram bins used to compute the level. Default 256.
    foreground : int
        Output value of foreground pixels. Default 255.
    background : int
        Output value of background pixels. Default 0.

    Examples
    --------
    >>> otsu = OtsuThreshold()
    >>> mask = otsu.apply(nuclei)
    >>> otsu.level
    """

    bins: Annotated[int, Range(min=2, max=65536),
                    Desc('Histogram bins')] = 256
    foreground: Annotated[int, Range(min=0, max=255),
                          Desc('Foreground value')] = 255
    background: Annotated[int, Range(min=0, max=255),
                          Desc('Background value')] = 0

    level = None

    def compute_level(self, source: np.ndarray, **kwargs: Any) -> float:
        params = self._resolve_params(kwargs)
        _check_2d(source)
        if np.ptp(source) == 0:
            return float(source.flat[0])
        return float(threshold_otsu(source, nbins=params['bins']))

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        self.level = self.compute_level(source, **kwargs)
        return _binary(source > self.level,
                       params['foreground'], params['background'])


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD,
                description='Niblack local threshold')
class NiblackThreshold(ImageTransform):
    """Local Niblack threshold with optional local contrast check.

    The threshold at each pixel is computed from the mean ``m`` and
    standard deviation ``s`` of a ``window_size`` square window::

        T = m + k * s                     (r <= 0, standard)
        T = m + k * m * (1 - s / r)       (r > 0, Zhang's enhancement)

    When ``contrast_window > 0``, a pixel is thresholded only if it
    differs from the mean of its ``contrast_window`` neighbourhood by
    more than ``contrast_threshold``; otherwise it is background.

    Parameters
    ----------
    k : float
        Scaling constant. Default 0.2.
    window_size : int
        Side of the threshold window. Default 15.
    r : float
        Dynamic range of the standard deviation for the enhanced form.
        Values <= 0 select the standard form. Default -1.
    contrast_window : int
        Side of the contrast check window, 0 disables the check.
    contrast_threshold : float
        Minimum absolute deviation from the local mean.
    """

    k: Annotated[float, Desc('Scaling constant')] = 0.2
    window_size: Annotated[int, Range(min=3, max=1001),
                           Desc('Threshold window side')] = 15
    r: Annotated[float, Desc('Std range of enhanced form, <= 0 disables')] = -1.0
    contrast_window: Annotated[int, Range(min=0, max=1001),
                               Desc('Contrast check window side, 0 disables')] = 0
    contrast_threshold: Annotated[float, Range(min=0.0),
                                  Desc('Contrast check level')] = 0.0

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        _check_2d(source)
        img = source.astype(np.float64)
        w = params['window_size']

        mean = uniform_filter(img, size=w, mode='nearest')
        sq_mean = uniform_filter(img * img, size=w, mode='nearest')
        std = np.sqrt(np.maximum(sq_mean - mean * mean, 0.0))

        k, r = params['k'], params['r']
        if r > 0:
            level = mean + k * mean * (1.0 - std / r)
        else:
            level = mean + k * std
        fg = img >= level

        cw = params['contrast_window']
        if cw > 0:
            local = uniform_filter(img, size=cw, mode='nearest')
            fg &= np.abs(img - local) > params['contrast_threshold']
        return _binary(fg, 255, 0)
