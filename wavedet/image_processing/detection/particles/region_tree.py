# -*- coding: utf-8 -*-
"""
Region Tree - Cross-scale containment forest of detected regions.

Every region of every scale level becomes one node. A region at level
``i`` is attached to the region of the first coarser level ``k > i``
whose label image overlaps it, choosing the label by a
``ParentLookup`` strategy; regions without any coarser overlap, and all
regions of the coarsest level, hang below a synthetic root (level -1).

The forest is index based: node 0 is the root, ``parents[n]`` is the
parent index of node ``n`` (-1 for the root). Parents always sit on a
strictly coarser level than their children, so the structure is acyclic
by construction.

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
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

# Third-party
import numpy as np

# wavedet internal
from wavedet.image_processing.detection.particles.binarize import ScaleLevelData
from wavedet.image_processing.regions import Region2D
from wavedet.vocabulary import ParentLookup

logger = logging.getLogger(__name__)

ROOT = 0
ROOT_LEVEL = -1


@dataclass
class RegionTreeNode:
    """One node of a ``RegionTree``.

    ``region`` is None and ``level`` is -1 only for the root.
    """

    index: int
    level: int
    region: Optional[Region2D]

    @property
    def is_root(self) -> bool:
        return self.region is None


class RegionTree:
    """Index-based forest below a single synthetic root."""

    def __init__(self) -> None:
        self.nodes: List[RegionTreeNode] = [RegionTreeNode(ROOT, ROOT_LEVEL, None)]
        self.parents: List[int] = [-1]
        self._children: List[List[int]] = [[]]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[RegionTreeNode]:
        return iter(self.nodes)

    @property
    def root(self) -> RegionTreeNode:
        return self.nodes[ROOT]

    def add_node(self, region: Region2D, level: int) -> int:
        """Append an unattached node and return its index."""
        index = len(self.nodes)
        self.nodes.append(RegionTreeNode(index, level, region))
        self.parents.append(-1)
        self._children.append([])
        return index

    def attach(self, index: int, parent: int) -> None:
        """Make *parent* the parent of node *index*.

        Raises
        ------
        ValueError
            If the parent is not on a strictly coarser level, or the
            node already has a parent.
        """
        if index == ROOT:
            raise ValueError("The root node cannot have a parent")
        if self.parents[index] != -1:
            raise ValueError(f"Node {index} already has parent "
                             f"{self.parents[index]}")
        child_level = self.nodes[index].level
        parent_level = self.nodes[parent].level
        if parent != ROOT and parent_level <= child_level:
            raise ValueError(
                f"Parent level {parent_level} must be coarser than "
                f"child level {child_level}"
            )
        self.parents[index] = parent
        self._children[parent].append(index)

    def parent(self, index: int) -> Optional[int]:
        p = self.parents[index]
        return None if p < 0 else p

    def children(self, index: int) -> List[int]:
        """Child indices of node *index*, in attachment order."""
        return list(self._children[index])

    def depth(self, index: int) -> int:
        """Number of edges between node *index* and the root."""
        d = 0
        while self.parents[index] >= 0:
            index = self.parents[index]
            d += 1
        return d

    def __repr__(self) -> str:
        return (f"RegionTree(nodes={len(self.nodes) - 1}, "
                f"top_level={len(self._children[ROOT])})")


def coarser_scale_label(
    region: Region2D,
    labels: np.ndarray,
    lookup: ParentLookup = ParentLookup.MAJORITY,
) -> int:
    """Label of *labels* that a region maps into, 0 if none overlaps.

    Parameters
    ----------
    region : Region2D
        Region of a finer scale.
    labels : np.ndarray
        Label image of a coarser scale (background 0).
    lookup : ParentLookup
        ``MAJORITY`` picks the label covering most of the region's
        pixels, ``LEAST_OVERLAP`` the label covering the fewest. Ties
        go to the smallest label.

    Returns
    -------
    int
    """
    values = region.values(labels)
    values = values[values > 0]
    if values.size == 0:
        return 0
    counts = np.bincount(values)
    if lookup is ParentLookup.MAJORITY:
        return int(np.argmax(counts))
    present = np.flatnonzero(counts)
    return int(present[np.argmin(counts[present])])


def build_region_tree(
    levels: Sequence[ScaleLevelData],
    lookup: ParentLookup = ParentLookup.MAJORITY,
) -> RegionTree:
    """Link the regions of all scale levels into a ``RegionTree``.

    Parameters
    ----------
    levels : Sequence[ScaleLevelData]
        Per-level data, finest level first.
    lookup : ParentLookup
        Label selection strategy, see ``coarser_scale_label``.

    Returns
    -------
    RegionTree
    """
    tree = RegionTree()
    node_of: Dict[Tuple[int, int], int] = {}
    for data in levels:
        for region in data.regions:
            node_of[(data.level, region.region_id)] = tree.add_node(
                region, data.level)

    n_levels = len(levels)
    for i, data in enumerate(levels):
        for region in data.regions:
            index = node_of[(data.level, region.region_id)]
            parent = ROOT
            for k in range(i + 1, n_levels):
                label = coarser_scale_label(region, levels[k].labels, lookup)
                if label > 0:
                    parent = node_of[(levels[k].level, label)]
                    break
            tree.attach(index, parent)

    logger.debug("region tree: %d nodes, %d below the root",
                 len(tree) - 1, len(tree.children(ROOT)))
    return tree
