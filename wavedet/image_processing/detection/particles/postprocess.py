# -*- coding: utf-8 -*-
"""
Post-Processing - Turn selected regions into the final particle set.

Steps:

1. Rasterize the selected regions into one binary image.
2. Fill enclosed holes.
3. Label 8-connected components and keep a component only if its area
   is at least ``min_region_size`` and it is not dominated by border
   pixels: it has no pixel on the outermost rows/columns, or
   ``interior / border >= 0.5``.
4. Clear pixels where the exclusion mask is non-zero, drop fragments
   that fell below ``min_region_size`` and label again.
5. Render the region contours in orange over an RGB copy of the input
   and build the binary mask in the configured polarity.

Dependencies
------------
scikit-image

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
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

# Third-party
import numpy as np
from skimage.segmentation import find_boundaries

# wavedet internal
from wavedet.exceptions import ValidationError
from wavedet.image_processing.morphology import FillHoles, label_components
from wavedet.image_processing.regions import Region2D, RegionSet
from wavedet.vocabulary import MaskPolarity

logger = logging.getLogger(__name__)

OVERLAY_COLOR: Tuple[int, int, int] = (255, 200, 0)
"""RGB colour of region contours in overlays."""

BORDER_RATIO = 0.5


@dataclass
class PostProcessResult:
    """Final regions and derived images.

    Attributes
    ----------
    regions : RegionSet
        Final particles, labelled ``1..k`` in raster order.
    mask : np.ndarray
        ``uint8`` binary mask, polarity per ``MaskPolarity``.
    overlay : np.ndarray
        ``(rows, cols, 3)`` ``uint8`` RGB image with orange contours.
    """

    regions: RegionSet
    mask: np.ndarray
    overlay: np.ndarray


def keep_region(region: Region2D, shape: Tuple[int, int],
                min_region_size: int) -> bool:
    """Size and border rule of step 3."""
    if region.area < min_region_size:
        return False
    interior, border = region.border_counts(shape)
    return border == 0 or interior / border >= BORDER_RATIO


def to_rgb(image: np.ndarray) -> np.ndarray:
    """Grey ``uint8`` RGB copy of *image*, values clipped to [0, 255]."""
    grey = np.clip(np.asarray(image, dtype=np.float64), 0, 255).astype(np.uint8)
    return np.repeat(grey[:, :, np.newaxis], 3, axis=2)


def draw_contours(image: np.ndarray, regions: RegionSet,
                  color: Tuple[int, int, int] = OVERLAY_COLOR) -> np.ndarray:
    """RGB copy of *image* with the inner contours of *regions* drawn."""
    overlay = to_rgb(image) if image.ndim == 2 else image.copy()
    if len(regions):
        edges = find_boundaries(regions.to_label_image(), mode='inner')
        overlay[edges] = color
    return overlay


def binary_mask(regions: RegionSet, polarity: MaskPolarity) -> np.ndarray:
    fg = regions.to_mask()
    mask = np.zeros(regions.shape, dtype=np.uint8)
    if polarity is MaskPolarity.FOREGROUND_ZERO:
        mask[~fg] = 255
    else:
        mask[fg] = 255
    return mask


class PostProcessor:
    """Clean up selected regions and build the output images.

    Parameters
    ----------
    min_region_size : int
        Smallest area (pixels) of a kept region.
    polarity : MaskPolarity
        Polarity of the output mask. Default ``FOREGROUND_ZERO``
        (particles 0, background 255).
    """

    def __init__(self, min_region_size: int = 1,
                 polarity: MaskPolarity = MaskPolarity.FOREGROUND_ZERO) -> None:
        self.min_region_size = int(min_region_size)
        self.polarity = MaskPolarity(polarity)
        self._fill = FillHoles()

    def filter_regions(self, binary: np.ndarray) -> np.ndarray:
        """Steps 2 and 3: fill holes, then drop small or border regions."""
        filled = self._fill.apply(binary.astype(bool))
        kept = np.zeros(binary.shape, dtype=bool)
        for region in label_components(filled):
            if keep_region(region, binary.shape, self.min_region_size):
                kept[region.ys, region.xs] = True
        return kept

    def run(
        self,
        image: np.ndarray,
        regions: Iterable[Region2D],
        exclude_mask: Optional[np.ndarray] = None,
    ) -> PostProcessResult:
        """Run all post-processing steps.

        Parameters
        ----------
        image : np.ndarray
            Original 2D input, used for the overlay.
        regions : Iterable[Region2D]
            Selected regions.
        exclude_mask : np.ndarray, optional
            Same-shape mask; particles are removed where it is non-zero.

        Returns
        -------
        PostProcessResult
        """
        shape = image.shape
        if exclude_mask is not None and exclude_mask.shape != shape:
            raise ValidationError(
                f"exclude_mask shape {exclude_mask.shape} does not match "
                f"image shape {shape}"
            )

        binary = np.zeros(shape, dtype=bool)
        for region in regions:
            binary[region.ys, region.xs] = True

        kept = self.filter_regions(binary)
        if exclude_mask is not None:
            kept[exclude_mask > 0] = False
            # masking can split regions below the minimum size
            for region in label_components(kept):
                if region.area < self.min_region_size:
                    kept[region.ys, region.xs] = False

        final = label_components(kept)
        logger.debug("post-processing kept %d regions", len(final))
        return PostProcessResult(
            regions=final,
            mask=binary_mask(final, self.polarity),
            overlay=draw_contours(image, final),
        )
