# -*- coding: utf-8 -*-
"""
Processor Versioning Tests.

Tests for the @processor_version and @processor_tags decorators and the
version warning issued by ImageProcessor at first instantiation.

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

import warnings
from abc import abstractmethod

import pytest

from wavedet.image_processing.base import ImageProcessor, ImageTransform
from wavedet.image_processing.detection import (
    HyperStackParticleDetector,
    ImageDetector,
    ParticleDetectorUWT2D,
)
from wavedet.image_processing.threshold import GlobalThreshold
from wavedet.image_processing.versioning import (
    find_processors,
    processor_tags,
    processor_version,
)
from wavedet.image_processing.wavelet import UndecimatedWaveletTransform
from wavedet.vocabulary import DetectionType, ImageModality, ProcessorCategory


def _version_warnings(records):
    return [
        x for x in records
        if issubclass(x.category, UserWarning)
        and 'processor version' in str(x.message).lower()
    ]


# ---------------------------------------------------------------------------
# @processor_version decorator
# ---------------------------------------------------------------------------

class TestProcessorVersionDecorator:
    """@processor_version stamps the version string."""

    def test_stamps_version(self):
        @processor_version('2.1.0')
        class _Versioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert _Versioned.__processor_version__ == '2.1.0'

    def test_returns_same_class(self):
        class _Original(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert processor_version('1.0.0')(_Original) is _Original

    def test_without_version_uses_distribution(self):
        @processor_version()
        class _Auto(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert isinstance(_Auto.__processor_version__, str)
        assert _Auto.__processor_version__

    def test_library_processors_versioned(self):
        for cls in (UndecimatedWaveletTransform, ParticleDetectorUWT2D,
                    HyperStackParticleDetector):
            assert cls.__processor_version__ == '1.0.0'


# ---------------------------------------------------------------------------
# Version warning at instantiation
# ---------------------------------------------------------------------------

class TestMissingVersionWarning:
    """Unversioned concrete subclasses warn once."""

    def test_warns_once_for_undecorated_class(self):
        class _Unversioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        ImageProcessor._version_warned_classes.discard(_Unversioned)
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _Unversioned()
            _Unversioned()
            found = _version_warnings(w)
        assert len(found) == 1
        assert '_Unversioned' in str(found[0].message)

    def test_no_warning_for_decorated_class(self):
        @processor_version('1.0.0')
        class _Versioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        ImageProcessor._version_warned_classes.discard(_Versioned)
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _Versioned()
            assert _version_warnings(w) == []

    def test_abstract_subclass_not_instantiable(self):
        class _AbstractMiddle(ImageProcessor):
            @abstractmethod
            def process(self):
                ...

        with pytest.raises(TypeError):
            _AbstractMiddle()

    def test_detector_is_image_processor(self):
        assert issubclass(ParticleDetectorUWT2D, ImageDetector)
        assert issubclass(ImageDetector, ImageProcessor)


# ---------------------------------------------------------------------------
# @processor_tags decorator
# ---------------------------------------------------------------------------

class TestProcessorTagsDecorator:
    """@processor_tags stamps enum-based capability metadata."""

    def test_stamps_tags(self):
        @processor_tags(
            modalities=[ImageModality.FLUORESCENCE, ImageModality.CONFOCAL],
            category=ProcessorCategory.FIND_MAXIMA,
            detection_types=[DetectionType.PHENOMENON_SIGNATURE],
        )
        @processor_version('1.0.0')
        class _Tagged(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        tags = _Tagged.__processor_tags__
        assert tags['modalities'] == (ImageModality.FLUORESCENCE,
                                      ImageModality.CONFOCAL)
        assert tags['category'] is ProcessorCategory.FIND_MAXIMA
        assert tags['detection_types'] == (DetectionType.PHENOMENON_SIGNATURE,)

    def test_empty_tags(self):
        @processor_tags()
        @processor_version('1.0.0')
        class _Empty(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        tags = _Empty.__processor_tags__
        assert tags['modalities'] == ()
        assert tags['category'] is None
        assert tags['description'] is None
        assert tags['detection_types'] == ()

    def test_rejects_string_modality(self):
        with pytest.raises(TypeError, match="ImageModality"):
            processor_tags(modalities=['FLUORESCENCE'])

    def test_rejects_string_category(self):
        with pytest.raises(TypeError, match="ProcessorCategory"):
            processor_tags(category='threshold')

    def test_rejects_string_detection_type(self):
        with pytest.raises(TypeError, match="DetectionType"):
            processor_tags(detection_types=['classification'])

    def test_detector_tags(self):
        tags = ParticleDetectorUWT2D.__processor_tags__
        assert ImageModality.FLUORESCENCE in tags['modalities']
        assert tags['category'] is ProcessorCategory.FIND_MAXIMA


# ---------------------------------------------------------------------------
# Capability lookup
# ---------------------------------------------------------------------------

class TestFindProcessors:
    """find_processors filters tagged classes."""

    def test_by_category(self):
        found = find_processors(category=ProcessorCategory.THRESHOLD)
        assert GlobalThreshold in found
        assert ParticleDetectorUWT2D not in found

    def test_by_modality(self):
        found = find_processors(modality=ImageModality.CONFOCAL,
                                category=ProcessorCategory.FIND_MAXIMA)
        assert ParticleDetectorUWT2D in found
        assert HyperStackParticleDetector in found
        assert ParticleDetectorUWT2D not in find_processors(
            modality=ImageModality.BRIGHTFIELD,
            category=ProcessorCategory.FIND_MAXIMA)

    def test_untagged_modality_matches_any(self):
        found = find_processors(modality=ImageModality.BRIGHTFIELD,
                                category=ProcessorCategory.TRANSFORM)
        assert UndecimatedWaveletTransform in found

    def test_tagging_registers(self):
        @processor_tags(category=ProcessorCategory.NOISE)
        @processor_version('1.0.0')
        class _Registered(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert _Registered in find_processors(category=ProcessorCategory.NOISE)
