# -*- coding: utf-8 -*-
"""
Detection Sub-module - Sparse vector detections from 2D images.

Provides the ``ImageDetector`` ABC for processors that produce sparse
vector detections and the data models for representing detection
output. Geometry is represented using ``shapely.geometry`` objects
directly on ``Detection``, in pixel coordinates.

Includes the ``particles/`` sub-package with the multiscale
wavelet-correlation particle detector.

Key Classes
-----------
Base and data models:
    ``ImageDetector`` (ABC), ``Detection``, ``DetectionSet``,
    ``FieldDefinition``, ``Fields``, ``DATA_DICTIONARY``

Particle detectors:
    ``ParticleDetectorUWT2D`` (single plane),
    ``HyperStackParticleDetector`` (slice-wise over a hyper-stack)

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

from wavedet.image_processing.detection.base import ImageDetector
from wavedet.image_processing.detection.models import (
    Detection,
    DetectionSet,
)
from wavedet.image_processing.detection.fields import (
    DATA_DICTIONARY,
    FieldDefinition,
    Fields,
    is_dictionary_field,
    list_fields,
    lookup_field,
)
from wavedet.image_processing.detection.particles import (
    DetectorConfig,
    HyperStackParticleDetector,
    ParticleDetectionResult,
    ParticleDetectorUWT2D,
)

__all__ = [
    'ImageDetector',
    'Detection',
    'DetectionSet',
    'FieldDefinition',
    'Fields',
    'DATA_DICTIONARY',
    'lookup_field',
    'is_dictionary_field',
    'list_fields',
    # Particle detectors
    'DetectorConfig',
    'HyperStackParticleDetector',
    'ParticleDetectionResult',
    'ParticleDetectorUWT2D',
]
