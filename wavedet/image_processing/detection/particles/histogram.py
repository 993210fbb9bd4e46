# -*- coding: utf-8 -*-
"""
Cumulative Histogram - Tail-probability model of a scalar image.

``CumulativeHistogram`` bins an image into equal-width buckets over its
observed ``[min, max]`` range and stores, per bucket, the tail
probability ``P(X >= lower edge of bucket)``::

    tail[0] = 1,   tail[k] = 1 - cdf[k-1]

``log_probability`` sums ``ln(tail)`` over a region's pixels. The sum
is never positive and is more negative for regions sitting on rare,
large correlation values.

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

# Third-party
import numpy as np

# wavedet internal
from wavedet.exceptions import ValidationError
from wavedet.image_processing.regions import Region2D

DEFAULT_BINS = 1000


class CumulativeHistogram:
    """Normalized, tail-inverted cumulative histogram.

    Parameters
    ----------
    image : np.ndarray
        Scalar image. Read-only after construction.
    bins : int
        Number of equal-width buckets. Default 1000.

    Attributes
    ----------
    tail : np.ndarray
        ``(bins,)`` tail probabilities, all in ``(0, 1]`` for occupied
        buckets.
    low, high : float
        Value range covered by the buckets.
    """

    def __init__(self, image: np.ndarray, bins: int = DEFAULT_BINS) -> None:
        if bins < 1:
            raise ValidationError(f"bins must be >= 1, got {bins}")
        if image.size == 0:
            raise ValidationError("Cannot build a histogram of an empty image")
        self.bins = int(bins)
        self.low = float(np.min(image))
        self.high = float(np.max(image))

        counts = np.bincount(self.bin_index(image).ravel(),
                             minlength=self.bins).astype(np.float64)
        cdf = np.cumsum(counts) / image.size
        self.tail = np.empty(self.bins, dtype=np.float64)
        self.tail[0] = 1.0
        self.tail[1:] = 1.0 - cdf[:-1]

    def bin_index(self, values: np.ndarray) -> np.ndarray:
        """Bucket index of each value, clipped to ``[0, bins-1]``."""
        values = np.asarray(values, dtype=np.float64)
        if self.high == self.low:
            return np.zeros(values.shape, dtype=np.intp)
        idx = ((values - self.low) * self.bins
               / (self.high - self.low)).astype(np.intp)
        return np.clip(idx, 0, self.bins - 1)

    def tail_probability(self, values: np.ndarray) -> np.ndarray:
        """``P(X >= v)`` estimate for each value."""
        return self.tail[self.bin_index(values)]

    def __repr__(self) -> str:
        return (f"CumulativeHistogram(bins={self.bins}, "
                f"range=[{self.low:g}, {self.high:g}])")


def log_probability(region: Region2D, image: np.ndarray,
                    histogram: CumulativeHistogram) -> float:
    """Sum of ``ln(tail probability)`` over the pixels of *region*."""
    if region.area == 0:
        return 0.0
    probs = histogram.tail_probability(region.values(image))
    return float(np.sum(np.log(probs)))
