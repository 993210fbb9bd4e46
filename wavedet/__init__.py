# -*- coding: utf-8 -*-
"""
wavedet - Multiscale wavelet-correlation particle detection.

A Python library for detecting small bright particles (spots, vesicles,
foci) in 2D fluorescence microscopy images. Band-pass planes of an
undecimated wavelet transform are correlated across neighbouring
scales, thresholded, organised into a coarse-to-fine region tree, and
reduced to the statistically most meaningful regions.

Dependencies
------------
numpy
scipy
scikit-image
shapely

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

__version__ = "0.1.0"

from wavedet.exceptions import (
    WavedetError,
    ValidationError,
    ConfigError,
    ProcessorError,
    ResourceError,
    OperationCancelled,
    DependencyError,
)
from wavedet.vocabulary import (
    ImageModality,
    ProcessorCategory,
    DetectionType,
    ExecutionStatus,
    ControlStatus,
    AggregationMode,
    ParentLookup,
    MaskPolarity,
)

__all__ = [
    'WavedetError',
    'ValidationError',
    'ConfigError',
    'ProcessorError',
    'ResourceError',
    'OperationCancelled',
    'DependencyError',
    'ImageModality',
    'ProcessorCategory',
    'DetectionType',
    'ExecutionStatus',
    'ControlStatus',
    'AggregationMode',
    'ParentLookup',
    'MaskPolarity',
]
