# -*- coding: utf-8 -*-
"""
Hyper-Stack Particle Detection - Run the 2D detector on every slice.

``HyperStackParticleDetector`` applies a configured
``ParticleDetectorUWT2D`` to each 2D plane of one channel of a
hyper-stack and returns one ``RegionSet`` per plane, tagged with its
``z``, ``t`` and ``c`` coordinates.

Accepted layouts:

- ``(rows, cols)``: a single plane.
- ``(z, rows, cols)``: a z-stack with one time step and one channel.
- ``(t, z, c, rows, cols)``: a full hyper-stack.

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
from typing import Annotated, Any, List, Optional

# Third-party
import numpy as np

# wavedet internal
from wavedet.exceptions import OperationCancelled, ValidationError
from wavedet.image_processing.base import ImageProcessor
from wavedet.image_processing.control import StatusEvent, StatusReporter
from wavedet.image_processing.detection.particles.uwt_detector import (
    ParticleDetectorUWT2D,
)
from wavedet.image_processing.params import Desc, Range
from wavedet.image_processing.regions import RegionSet
from wavedet.image_processing.versioning import processor_tags, processor_version
from wavedet.vocabulary import ImageModality, ProcessorCategory

logger = logging.getLogger(__name__)


def as_hyperstack(stack: np.ndarray) -> np.ndarray:
    """View *stack* as a ``(t, z, c, rows, cols)`` array."""
    if stack.ndim == 2:
        return stack[np.newaxis, np.newaxis, np.newaxis]
    if stack.ndim == 3:
        return stack[np.newaxis, :, np.newaxis]
    if stack.ndim == 5:
        return stack
    raise ValidationError(
        f"Expected a 2D, 3D (z, rows, cols) or 5D (t, z, c, rows, cols) "
        f"stack, got shape {stack.shape}"
    )


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.FLUORESCENCE, ImageModality.CONFOCAL],
    category=ProcessorCategory.FIND_MAXIMA,
    description='Slice-wise multiscale particle detection',
)
class HyperStackParticleDetector(StatusReporter, ImageProcessor):
    """Slice-wise particle detection on one channel of a hyper-stack.

    Parameters
    ----------
    detector : ParticleDetectorUWT2D, optional
        Configured 2D detector. A default one is created if None.
    channel : int
        Channel index processed. Default 0.

    Examples
    --------
    >>> stacked = HyperStackParticleDetector(
    ...     ParticleDetectorUWT2D(correlation_threshold=2.0), channel=1)
    >>> region_sets = stacked.run(movie)      # movie: (t, z, c, rows, cols)
    >>> region_sets[0].info
    'z=0,t=0,c=1'
    """

    channel: Annotated[int, Range(min=0), Desc('Channel index')] = 0

    def __init__(self, detector: Optional[ParticleDetectorUWT2D] = None,
                 channel: int = 0) -> None:
        self.detector = detector if detector is not None else ParticleDetectorUWT2D()
        self.channel = channel
        self._resolve_params({})

    def run(self, stack: np.ndarray, exclude_mask: Optional[np.ndarray] = None,
            **kwargs: Any) -> List[RegionSet]:
        """Detect particles in every ``(t, z)`` plane of the channel.

        Parameters
        ----------
        stack : np.ndarray
            Image stack, see module docstring for accepted layouts.
        exclude_mask : np.ndarray, optional
            2D mask applied to every plane.

        Returns
        -------
        List[RegionSet]
            Ordered by ``t`` then ``z``.

        Raises
        ------
        ValidationError
            If the layout is not supported or the channel is out of range.
        OperationCancelled
            If the 2D detector was stopped.
        """
        params = self._resolve_params(kwargs)
        channel = params['channel']
        hyper = as_hyperstack(stack)
        n_t, n_z, n_c = hyper.shape[:3]
        if not 0 <= channel < n_c:
            raise ValidationError(
                f"Channel index must be >= 0 and < number of channels "
                f"({n_c}), got {channel}"
            )

        n_slices = n_t * n_z
        results: List[RegionSet] = []
        for t in range(n_t):
            for z in range(n_z):
                info = f"z={z},t={t},c={channel}"
                self.notify_listeners(StatusEvent(
                    f"Detecting particles for slice {info}",
                    t * n_z + z, n_slices - 1,
                ))
                logger.debug("Detecting particles for slice %s", info)
                result = self.detector.run(hyper[t, z, channel],
                                           exclude_mask=exclude_mask)
                if result.cancelled:
                    raise OperationCancelled(
                        f"Detection stopped at slice {info}"
                    )
                result.regions.info = info
                results.append(result.regions)
                self._report_progress(kwargs, (t * n_z + z + 1) / n_slices)
        return results
