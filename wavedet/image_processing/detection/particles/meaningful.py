# -*- coding: utf-8 -*-
"""
Meaningful Region Selection - Statistical pruning of the region tree.

Each subtree below the root is reduced, bottom-up, to the set of nodes
that best explain that image location. For a node with region ``r`` at
level ``l`` the area-normalised log tail probability

    p = logP(r, correlation[l], histogram[l]) / area(r)

is compared with an aggregate ``pc`` of the same quantity over the
meaningful nodes of its children. If ``p < pc`` the parent is the more
surprising hypothesis and replaces its descendants, otherwise the
descendants are kept.

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
from typing import Callable, Dict, List, Sequence

# Third-party
import numpy as np

# wavedet internal
from wavedet.image_processing.detection.particles.binarize import ScaleLevelData
from wavedet.image_processing.detection.particles.histogram import log_probability
from wavedet.image_processing.detection.particles.region_tree import (
    ROOT,
    RegionTree,
)
from wavedet.vocabulary import AggregationMode

logger = logging.getLogger(__name__)


def _weighted_mean(log_probs: np.ndarray, areas: np.ndarray) -> float:
    return float(log_probs.sum() / areas.sum())


def _unweighted_mean(log_probs: np.ndarray, areas: np.ndarray) -> float:
    return float(np.mean(log_probs / areas))


def _minimum(log_probs: np.ndarray, areas: np.ndarray) -> float:
    return float(np.min(log_probs / areas))


def _maximum(log_probs: np.ndarray, areas: np.ndarray) -> float:
    return float(np.max(log_probs / areas))


_AGGREGATORS: Dict[AggregationMode, Callable[[np.ndarray, np.ndarray], float]] = {
    AggregationMode.WEIGHTED_MEAN: _weighted_mean,
    AggregationMode.UNWEIGHTED_MEAN: _unweighted_mean,
    AggregationMode.MIN: _minimum,
    AggregationMode.MAX: _maximum,
}


def aggregate(log_probs: Sequence[float], areas: Sequence[int],
              mode: AggregationMode) -> float:
    """Combine raw region log-probabilities into one normalised score.

    Parameters
    ----------
    log_probs : Sequence[float]
        Raw ``logP`` of each region.
    areas : Sequence[int]
        Area of each region, all positive.
    mode : AggregationMode
        ``WEIGHTED_MEAN``: ``sum(logP) / sum(area)``.
        ``UNWEIGHTED_MEAN``: mean of ``logP / area``.
        ``MIN`` / ``MAX``: extreme of ``logP / area``.

    Returns
    -------
    float
    """
    if len(log_probs) == 0:
        raise ValueError("Cannot aggregate an empty set of regions")
    return _AGGREGATORS[AggregationMode(mode)](
        np.asarray(log_probs, dtype=np.float64),
        np.asarray(areas, dtype=np.float64),
    )


class MeaningfulRegionSelector:
    """Select the most meaningful nodes of a ``RegionTree``.

    Parameters
    ----------
    tree : RegionTree
        Forest built by ``build_region_tree``.
    levels : Sequence[ScaleLevelData]
        Per-level correlation images and histograms, indexed by level.
    mode : AggregationMode
        How children's scores are combined. Default ``UNWEIGHTED_MEAN``.

    Examples
    --------
    >>> selector = MeaningfulRegionSelector(tree, levels)
    >>> nodes = selector.select()
    """

    def __init__(
        self,
        tree: RegionTree,
        levels: Sequence[ScaleLevelData],
        mode: AggregationMode = AggregationMode.UNWEIGHTED_MEAN,
    ) -> None:
        self.tree = tree
        self.levels = levels
        self.mode = AggregationMode(mode)
        self._log_probs: Dict[int, float] = {}

    def log_probability(self, index: int) -> float:
        """Raw ``logP`` of node *index*, cached."""
        if index not in self._log_probs:
            node = self.tree.nodes[index]
            data = self.levels[node.level]
            self._log_probs[index] = log_probability(
                node.region, data.correlation, data.histogram)
        return self._log_probs[index]

    def normalized_log_probability(self, index: int) -> float:
        return self.log_probability(index) / self.tree.nodes[index].region.area

    def meaningful_nodes(self, index: int) -> List[int]:
        """Meaningful node indices of the subtree rooted at *index*."""
        children = self.tree.children(index)
        if not children:
            return [index]

        selected: List[int] = []
        for child in children:
            selected.extend(self.meaningful_nodes(child))

        p = self.normalized_log_probability(index)
        pc = aggregate(
            [self.log_probability(n) for n in selected],
            [self.tree.nodes[n].region.area for n in selected],
            self.mode,
        )
        if p < pc:
            return [index]
        return selected

    def select(self) -> List[int]:
        """Meaningful nodes of every subtree below the root."""
        selected: List[int] = []
        for child in self.tree.children(ROOT):
            selected.extend(self.meaningful_nodes(child))
        logger.debug("%d meaningful regions out of %d", len(selected),
                     len(self.tree) - 1)
        return selected
