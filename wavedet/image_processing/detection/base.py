# -*- coding: utf-8 -*-
"""
Image Detector Base Class - Abstract interface for sparse vector detectors.

Defines the ``ImageDetector`` ABC for image processors that produce
sparse vector detections (bounding boxes around particles) rather than
dense raster arrays. Inherits from ``ImageProcessor`` for version
checking and tunable parameters.

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
from abc import abstractmethod
from typing import Any, Tuple

# Third-party
import numpy as np

# wavedet internal
from wavedet.image_processing.base import ImageProcessor
from wavedet.image_processing.detection.models import DetectionSet


class ImageDetector(ImageProcessor):
    """
    Abstract base class for image detectors producing sparse outputs.

    Unlike ``ImageTransform`` (ndarray in, ndarray out), an
    ``ImageDetector`` produces a ``DetectionSet``.

    Subclasses must implement:

    - ``detect()`` -- run detection on image data
    - ``output_fields`` (property) -- declare the property names set on
      each detection

    Examples
    --------
    >>> detector = SomeDetector(threshold=0.5)
    >>> detections = detector.detect(image)
    >>> len(detections)
    42
    """

    @abstractmethod
    def detect(self, source: np.ndarray, **kwargs: Any) -> DetectionSet:
        """
        Run detection on source imagery.

        Parameters
        ----------
        source : np.ndarray
            Input image ``(rows, cols)``.

        Returns
        -------
        DetectionSet
            Collection of sparse detections with metadata.
        """
        ...

    @property
    @abstractmethod
    def output_fields(self) -> Tuple[str, ...]:
        """Data dictionary names present in each detection's properties."""
        ...
