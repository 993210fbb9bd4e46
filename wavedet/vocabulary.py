# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the wavedet library.

Single source of truth for the controlled vocabularies used across
wavedet: image modalities and processor categories for tagging,
execution/control states of long-running processors, and the option
sets of the multiscale particle detector.

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

from enum import Enum


class ImageModality(Enum):
    """Image modalities for processor tagging."""

    FLUORESCENCE = "FLUORESCENCE"
    BRIGHTFIELD = "BRIGHTFIELD"
    CONFOCAL = "CONFOCAL"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging.

    Each value corresponds to a functional grouping of image processing
    operations.
    """

    FILTERS = "filters"
    BINARY = "binary"
    ENHANCE = "enhance"
    FIND_MAXIMA = "find_maxima"
    THRESHOLD = "threshold"
    SEGMENTATION = "segmentation"
    TRANSFORM = "transform"
    NOISE = "noise"


class DetectionType(Enum):
    """Type/fidelity of detection a detector processor performs."""

    PHENOMENON_SIGNATURE = "phenomenon_signature"
    CHARACTERIZATION = "characterization"
    CLASSIFICATION = "classification"


class ExecutionStatus(Enum):
    """Execution state reported by a controllable processor.

    Transitions: ``INIT -> RUNNING -> {PAUSED <-> RUNNING} -> TERMINATED``.
    """

    INIT = "init"
    RUNNING = "running"
    PAUSED = "paused"
    TERMINATED = "terminated"


class ControlStatus(Enum):
    """Control command issued by a caller to a controllable processor."""

    NONE = "none"
    STOP = "stop"
    PAUSE = "pause"
    RESUME = "resume"


class AggregationMode(Enum):
    """How the log-probabilities of child regions are combined.

    Used by the meaningful-region selection when a parent region is
    compared against the regions selected in its subtree.
    """

    WEIGHTED_MEAN = "weighted_mean"
    UNWEIGHTED_MEAN = "unweighted_mean"
    MIN = "min"
    MAX = "max"


class ParentLookup(Enum):
    """Which overlapping coarser-scale label becomes a region's parent."""

    MAJORITY = "majority"
    LEAST_OVERLAP = "least_overlap"


class MaskPolarity(Enum):
    """Pixel convention of binary particle masks.

    ``FOREGROUND_ZERO`` paints particles 0 on a 255 background;
    ``FOREGROUND_WHITE`` paints particles 255 on a 0 background.
    """

    FOREGROUND_ZERO = "foreground_zero"
    FOREGROUND_WHITE = "foreground_white"
