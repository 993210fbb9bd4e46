# -*- coding: utf-8 -*-
"""
Particles Sub-module - Multiscale wavelet-correlation particle detection.

Detects bright, roughly blob-shaped particles (spots, vesicles, foci)
in 2D fluorescence images. Band-pass planes of an undecimated wavelet
transform are multiplied over sliding scale windows, the resulting
correlation images are thresholded, and the binary regions of all
windows are linked into a coarse-to-fine tree. From each branch the
statistically most meaningful regions are kept, then cleaned up.

Key Classes
-----------
Detectors:
    ``ParticleDetectorUWT2D``, ``HyperStackParticleDetector``,
    ``ParticleDetectionResult``

Configuration:
    ``DetectorConfig``, ``validate_scale_config``

Pipeline stages:
    ``correlation_images``, ``ScaleBinarizer``, ``ScaleLevelData``,
    ``CumulativeHistogram``, ``RegionTree``, ``build_region_tree``,
    ``MeaningfulRegionSelector``, ``PostProcessor``,
    ``TransformController``

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

from wavedet.image_processing.detection.particles.config import (
    DetectorConfig,
    validate_scale_config,
)
from wavedet.image_processing.detection.particles.histogram import (
    DEFAULT_BINS,
    CumulativeHistogram,
    log_probability,
)
from wavedet.image_processing.detection.particles.correlation import (
    correlation_images,
    num_correlation_images,
)
from wavedet.image_processing.detection.particles.binarize import (
    ScaleBinarizer,
    ScaleLevelData,
)
from wavedet.image_processing.detection.particles.region_tree import (
    ROOT,
    RegionTree,
    RegionTreeNode,
    build_region_tree,
    coarser_scale_label,
)
from wavedet.image_processing.detection.particles.meaningful import (
    MeaningfulRegionSelector,
    aggregate,
)
from wavedet.image_processing.detection.particles.postprocess import (
    OVERLAY_COLOR,
    PostProcessResult,
    PostProcessor,
)
from wavedet.image_processing.detection.particles.controller import (
    TransformController,
)
from wavedet.image_processing.detection.particles.uwt_detector import (
    ParticleDetectionResult,
    ParticleDetectorUWT2D,
)
from wavedet.image_processing.detection.particles.stack import (
    HyperStackParticleDetector,
    as_hyperstack,
)

__all__ = [
    'DetectorConfig',
    'validate_scale_config',
    'DEFAULT_BINS',
    'CumulativeHistogram',
    'log_probability',
    'correlation_images',
    'num_correlation_images',
    'ScaleBinarizer',
    'ScaleLevelData',
    'ROOT',
    'RegionTree',
    'RegionTreeNode',
    'build_region_tree',
    'coarser_scale_label',
    'MeaningfulRegionSelector',
    'aggregate',
    'OVERLAY_COLOR',
    'PostProcessResult',
    'PostProcessor',
    'TransformController',
    'ParticleDetectionResult',
    'ParticleDetectorUWT2D',
    'HyperStackParticleDetector',
    'as_hyperstack',
]
