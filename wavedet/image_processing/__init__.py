# -*- coding: utf-8 -*-
"""
Image Processing Module - Transforms, detectors, and region models.

Provides interfaces and implementations for the processors used by the
multiscale particle detector: the undecimated wavelet transform,
intensity and threshold transforms, binary morphology, pixel region
models, and the particle detectors themselves. All processor types
inherit from ``ImageProcessor`` which provides version checking,
tunable parameter validation, and metadata management.

Sub-modules
-----------
wavelet/
    A trous undecimated wavelet transform with optional denoising.
detection/
    Sparse vector detections and the wavelet-correlation particle
    detectors.
intensity.py
    Variance-stabilising transforms -- ``AnscombeTransform``,
    ``InverseAnscombeTransform``.
threshold.py
    ``GlobalThreshold``, ``OtsuThreshold``, ``NiblackThreshold``.
morphology.py
    ``FillHoles``, ``MorphologicalFilter``, connected components and
    the nuclei exclusion mask.
regions.py
    ``Region2D`` and ``RegionSet`` pixel region models.
control.py
    Cooperative stop/pause/resume and status events.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators,
    ``find_processors`` capability lookup.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.

Usage
-----
Detect particles in a fluorescence image:

    >>> from wavedet.image_processing import ParticleDetectorUWT2D
    >>>
    >>> detector = ParticleDetectorUWT2D(j_min=1, j_max=3,
    ...                                  scale_interval_size=2,
    ...                                  correlation_threshold=1.5)
    >>> result = detector.run(image)
    >>> result.count, result.mask.dtype
    (12, dtype('uint8'))

Restrict detection to nuclei:

    >>> from wavedet.image_processing import nuclei_mask
    >>> result = detector.run(image, exclude_mask=nuclei_mask(dapi))

Dependencies
------------
scipy
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

from wavedet.image_processing.base import ImageProcessor, ImageTransform
from wavedet.image_processing.control import (
    ControllableProcessor,
    StatusEvent,
    StatusReporter,
)
from wavedet.image_processing.regions import (
    Region2D,
    RegionSet,
    label_image,
    regions_from_labels,
)
from wavedet.image_processing.intensity import (
    AnscombeTransform,
    InverseAnscombeTransform,
)
from wavedet.image_processing.threshold import (
    GlobalThreshold,
    NiblackThreshold,
    OtsuThreshold,
)
from wavedet.image_processing.morphology import (
    FillHoles,
    MorphologicalFilter,
    label_components,
    nuclei_mask,
)
from wavedet.image_processing.wavelet import UndecimatedWaveletTransform
from wavedet.image_processing.detection import (
    ImageDetector,
    Detection,
    DetectionSet,
    FieldDefinition,
    Fields,
    DATA_DICTIONARY,
    DetectorConfig,
    HyperStackParticleDetector,
    ParticleDetectionResult,
    ParticleDetectorUWT2D,
)
from wavedet.image_processing.versioning import (
    processor_version,
    processor_tags,
    find_processors,
)
from wavedet.image_processing.params import (
    Range,
    Options,
    Desc,
    ParamSpec,
)
from wavedet.vocabulary import (
    AggregationMode,
    ControlStatus,
    ExecutionStatus,
    ImageModality,
    MaskPolarity,
    ParentLookup,
    ProcessorCategory,
    DetectionType,
)

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'ControllableProcessor',
    'StatusEvent',
    'StatusReporter',
    'Region2D',
    'RegionSet',
    'label_image',
    'regions_from_labels',
    'AnscombeTransform',
    'InverseAnscombeTransform',
    'GlobalThreshold',
    'NiblackThreshold',
    'OtsuThreshold',
    'FillHoles',
    'MorphologicalFilter',
    'label_components',
    'nuclei_mask',
    'UndecimatedWaveletTransform',
    'ImageDetector',
    'Detection',
    'DetectionSet',
    'FieldDefinition',
    'Fields',
    'DATA_DICTIONARY',
    'DetectorConfig',
    'HyperStackParticleDetector',
    'ParticleDetectionResult',
    'ParticleDetectorUWT2D',
    'processor_version',
    'processor_tags',
    'find_processors',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'AggregationMode',
    'ControlStatus',
    'ExecutionStatus',
    'ImageModality',
    'MaskPolarity',
    'ParentLookup',
    'ProcessorCategory',
    'DetectionType',
]
