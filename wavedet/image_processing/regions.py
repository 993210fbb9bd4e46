# -*- coding: utf-8 -*-
"""
Region Data Models - Pixel regions extracted from 2D images.

``Region2D`` is an unordered set of unique integer pixel coordinates
``(x, y)`` -- ``x`` is the column index, ``y`` the row index -- plus a
numeric identifier. ``RegionSet`` is an ordered collection of regions
derived from one image, able to rasterize itself back into a label
image or a binary mask.

Regions never share storage: every constructor copies its input.

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
from typing import Iterator, List, Optional, Sequence, Tuple

# Third-party
import numpy as np
from scipy import ndimage


class Region2D:
    """A connected (or arbitrary) set of pixels of a 2D image.

    Parameters
    ----------
    points : array_like
        ``(N, 2)`` integer coordinates as ``(x, y)`` pairs. Duplicates
        are removed.
    region_id : int
        Identifier, typically the label in the image it came from.
    """

    __slots__ = ('points', 'region_id')

    def __init__(self, points, region_id: int = 0) -> None:
        pts = np.asarray(points, dtype=np.intp).reshape(-1, 2)
        self.points = np.unique(pts, axis=0) if len(pts) else pts.copy()
        self.region_id = int(region_id)

    @property
    def area(self) -> int:
        """Number of pixels."""
        return int(self.points.shape[0])

    @property
    def xs(self) -> np.ndarray:
        return self.points[:, 0]

    @property
    def ys(self) -> np.ndarray:
        return self.points[:, 1]

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        """Inclusive bounding box ``(x_min, y_min, x_max, y_max)``."""
        x_min, y_min = self.points.min(axis=0)
        x_max, y_max = self.points.max(axis=0)
        return int(x_min), int(y_min), int(x_max), int(y_max)

    @property
    def centroid(self) -> Tuple[float, float]:
        """Mean ``(x, y)`` position."""
        cx, cy = self.points.mean(axis=0)
        return float(cx), float(cy)

    def values(self, image: np.ndarray) -> np.ndarray:
        """Samples of *image* at the region's pixels."""
        return image[self.ys, self.xs]

    def border_counts(self, shape: Tuple[int, int]) -> Tuple[int, int]:
        """Count interior and border pixels for an image of *shape*.

        A pixel is interior when ``0 < x < W-1`` and ``0 < y < H-1``.

        Returns
        -------
        (interior, border) : Tuple[int, int]
        """
        rows, cols = shape
        inside = ((self.xs > 0) & (self.xs < cols - 1)
                  & (self.ys > 0) & (self.ys < rows - 1))
        interior = int(np.count_nonzero(inside))
        return interior, self.area - interior

    def touches_border(self, shape: Tuple[int, int]) -> bool:
        """True if any pixel lies on the outermost row or column."""
        return self.border_counts(shape)[1] > 0

    def to_mask(self, shape: Tuple[int, int]) -> np.ndarray:
        """Boolean mask of *shape* with the region's pixels set."""
        mask = np.zeros(shape, dtype=bool)
        mask[self.ys, self.xs] = True
        return mask

    def __len__(self) -> int:
        return self.area

    def __repr__(self) -> str:
        return f"Region2D(id={self.region_id}, area={self.area})"


class RegionSet:
    """Ordered collection of regions from one image.

    Parameters
    ----------
    regions : Sequence[Region2D]
        Regions, in labelling order.
    shape : Tuple[int, int]
        ``(rows, cols)`` of the image the regions belong to.
    info : str, optional
        Free-form annotation (e.g. slice coordinates in a stack).
    """

    def __init__(self, regions: Sequence[Region2D], shape: Tuple[int, int],
                 info: str = '') -> None:
        self.regions: List[Region2D] = list(regions)
        self.shape = (int(shape[0]), int(shape[1]))
        self.info = info

    def __len__(self) -> int:
        return len(self.regions)

    def __iter__(self) -> Iterator[Region2D]:
        return iter(self.regions)

    def __getitem__(self, index: int) -> Region2D:
        return self.regions[index]

    @property
    def areas(self) -> np.ndarray:
        return np.array([r.area for r in self.regions], dtype=np.intp)

    def to_label_image(self) -> np.ndarray:
        """Int32 label image: background 0, region ``i`` labelled ``i+1``."""
        labels = np.zeros(self.shape, dtype=np.int32)
        for i, region in enumerate(self.regions):
            labels[region.ys, region.xs] = i + 1
        return labels

    def to_mask(self) -> np.ndarray:
        """Boolean union of all regions."""
        mask = np.zeros(self.shape, dtype=bool)
        for region in self.regions:
            mask[region.ys, region.xs] = True
        return mask

    def __repr__(self) -> str:
        return f"RegionSet(count={len(self.regions)}, shape={self.shape})"


def regions_from_labels(labels: np.ndarray,
                        n_labels: Optional[int] = None) -> RegionSet:
    """Split a label image into one ``Region2D`` per positive label.

    Parameters
    ----------
    labels : np.ndarray
        2D integer label image, 0 = background, labels ``1..n``.
    n_labels : int, optional
        Number of labels. Defaults to ``labels.max()``.

    Returns
    -------
    RegionSet
        Region ``i`` carries ``region_id = i + 1``.
    """
    if n_labels is None:
        n_labels = int(labels.max()) if labels.size else 0
    flat = labels.ravel()
    order = np.argsort(flat, kind='stable')
    counts = np.bincount(flat, minlength=n_labels + 1)
    bounds = np.cumsum(counts)
    cols = labels.shape[1]

    regions = []
    for lab in range(1, n_labels + 1):
        idx = order[bounds[lab - 1]:bounds[lab]]
        pts = np.column_stack([idx % cols, idx // cols])
        regions.append(Region2D(pts, region_id=lab))
    return RegionSet(regions, labels.shape)


_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def label_image(binary: np.ndarray) -> Tuple[np.ndarray, int]:
    """8-connected component labelling of a binary image.

    Labels are assigned in raster order (row by row, left to right).

    Returns
    -------
    labels : np.ndarray
        Int32 label image, background 0.
    n_labels : int
    """
    labels, n_labels = ndimage.label(np.asarray(binary) > 0,
                                     structure=_EIGHT_CONNECTED)
    return labels.astype(np.int32, copy=False), int(n_labels)
