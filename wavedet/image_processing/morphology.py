# -*- coding: utf-8 -*-
"""
Morphology - Binary and grey-level morphology services.

- ``FillHoles``: fill background components not connected to the border.
- ``MorphologicalFilter``: grey-level erosion, dilation, opening and
  closing with a square or disk structuring element.
- ``label_components``: 8-connected labelling into a ``RegionSet``.
- ``nuclei_mask``: inclusion mask derived from a nucleus channel.

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
import logging
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy import ndimage
from skimage.morphology import disk

# wavedet internal
from wavedet.exceptions import ValidationError
from wavedet.image_processing.base import ImageTransform
from wavedet.image_processing.params import Desc, Options, Range
from wavedet.image_processing.regions import (
    RegionSet,
    label_image,
    regions_from_labels,
)
from wavedet.image_processing.threshold import OtsuThreshold
from wavedet.image_processing.versioning import processor_tags, processor_version
from wavedet.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.BINARY,
                description='Fill holes of a binary image')
class FillHoles(ImageTransform):
    """Fill enclosed background holes of a binary image.

    A hole is a background component that is not 4-connected to the
    image border. Boolean input gives boolean output; for numeric input
    the filled pixels receive ``foreground`` and the dtype is preserved.

    Parameters
    ----------
    foreground : int
        Value written into filled holes of numeric images. Default 255.
    """

    foreground: Annotated[int, Range(min=0), Desc('Fill value')] = 255

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        if source.ndim != 2:
            raise ValidationError(
                f"FillHoles requires a 2D image, got shape {source.shape}"
            )
        fg = source > 0
        filled = ndimage.binary_fill_holes(fg)
        if source.dtype == bool:
            return filled
        out = source.copy()
        out[filled & ~fg] = params['foreground']
        return out


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.BINARY,
                description='Grey-level morphological filter')
class MorphologicalFilter(ImageTransform):
    """Grey-level erosion, dilation, opening or closing.

    Pixels outside the image are ignored, so dilating a binary
    ``0/255`` image grows its 255 regions by ``size // 2`` pixels.

    Parameters
    ----------
    operation : str
        ``'erode'``, ``'dilate'``, ``'open'`` or ``'close'``.
    size : int
        Side of the square element, or diameter of the disk element.
    element : str
        ``'square'`` or ``'disk'``.

    Examples
    --------
    >>> MorphologicalFilter(operation='dilate', size=9).apply(mask)
    """

    operation: Annotated[str, Options('erode', 'dilate', 'open', 'close'),
                         Desc('Morphological operation')] = 'dilate'
    size: Annotated[int, Range(min=1, max=1001),
                    Desc('Structuring element size')] = 3
    element: Annotated[str, Options('square', 'disk'),
                       Desc('Structuring element shape')] = 'square'

    def footprint(self, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        size = params['size']
        if params['element'] == 'disk':
            return disk(size // 2).astype(bool)
        return np.ones((size, size), dtype=bool)

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        fp = self.footprint(**kwargs)
        op = params['operation']
        if op == 'erode':
            return ndimage.grey_erosion(source, footprint=fp, mode='nearest')
        if op == 'dilate':
            return ndimage.grey_dilation(source, footprint=fp, mode='nearest')
        if op == 'open':
            return ndimage.grey_opening(source, footprint=fp, mode='nearest')
        return ndimage.grey_closing(source, footprint=fp, mode='nearest')


def label_components(binary: np.ndarray) -> RegionSet:
    """8-connected components of a binary image as a ``RegionSet``.

    Non-zero pixels are foreground. Regions are ordered and numbered
    ``1..k`` in raster order of their first pixel.
    """
    labels, n = label_image(binary)
    return regions_from_labels(labels, n)


def nuclei_mask(nuclei: np.ndarray) -> np.ndarray:
    """Mask that is zero on (slightly shrunk) nuclei and 255 elsewhere.

    The nucleus channel is binarized with Otsu's threshold (nuclei 0,
    background 255), dilated with a 9x9 square, eroded with a 9x9
    square and dilated again with a 7x7 square. Passed as the exclusion
    mask of a particle detector it restricts detection to the nuclei.

    Parameters
    ----------
    nuclei : np.ndarray
        2D nucleus-stain image.

    Returns
    -------
    np.ndarray
        ``uint8`` mask.
    """
    mask = OtsuThreshold(foreground=0, background=255).apply(nuclei)
    for operation, size in (('dilate', 9), ('erode', 9), ('dilate', 7)):
        mask = MorphologicalFilter(operation=operation, size=size).apply(mask)
    logger.debug("nuclei mask covers %d pixels",
                 int(np.count_nonzero(mask == 0)))
    return mask
