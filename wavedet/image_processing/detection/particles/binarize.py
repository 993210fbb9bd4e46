# -*- coding: utf-8 -*-
"""
Scale Binarizer - Per-scale thresholding and component labelling.

For each correlation image the binarizer produces a ``ScaleLevelData``:
the ``0/255`` binary image (foreground ``value >= threshold``), its
8-connected label image and regions, and the cumulative histogram of the
unthresholded correlation image.

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
from typing import List

# Third-party
import numpy as np

# wavedet internal
from wavedet.exceptions import ResourceError
from wavedet.image_processing.detection.particles.histogram import (
    DEFAULT_BINS,
    CumulativeHistogram,
)
from wavedet.image_processing.regions import (
    RegionSet,
    label_image,
    regions_from_labels,
)
from wavedet.image_processing.threshold import GlobalThreshold

logger = logging.getLogger(__name__)


@dataclass
class ScaleLevelData:
    """Everything derived from one correlation image.

    Attributes
    ----------
    level : int
        Index of the correlation image (0 = finest retained scale).
    correlation : np.ndarray
        The correlation image.
    binary : np.ndarray
        ``uint8`` image, 255 where ``correlation >= threshold``.
    labels : np.ndarray
        ``int32`` label image, background 0, regions ``1..k``.
    regions : RegionSet
        Connected components of ``binary``; region ``i`` has label ``i+1``.
    histogram : CumulativeHistogram
        Tail-probability model of ``correlation``.
    """

    level: int
    correlation: np.ndarray
    binary: np.ndarray
    labels: np.ndarray
    regions: RegionSet
    histogram: CumulativeHistogram


class ScaleBinarizer:
    """Threshold correlation images and label their components.

    Parameters
    ----------
    threshold : float
        Correlation threshold; values ``>=`` it are foreground.
    bins : int
        Histogram buckets. Default 1000.
    """

    def __init__(self, threshold: float, bins: int = DEFAULT_BINS) -> None:
        self.threshold = float(threshold)
        self.bins = int(bins)
        self._thresholder = GlobalThreshold(threshold=self.threshold)

    def binarize_level(self, level: int, correlation: np.ndarray) -> ScaleLevelData:
        try:
            binary = self._thresholder.apply(correlation)
            labels, n_labels = label_image(binary)
            histogram = CumulativeHistogram(correlation, self.bins)
        except MemoryError as exc:
            raise ResourceError(
                f"Cannot allocate scale data for level {level}"
            ) from exc
        regions = regions_from_labels(labels, n_labels)
        logger.debug("scale level %d: %d regions above %g",
                     level, n_labels, self.threshold)
        return ScaleLevelData(level, correlation, binary, labels, regions,
                              histogram)

    def binarize(self, correlation_stack: np.ndarray) -> List[ScaleLevelData]:
        """Binarize every image of a ``(levels, rows, cols)`` stack."""
        return [self.binarize_level(i, img)
                for i, img in enumerate(correlation_stack)]
