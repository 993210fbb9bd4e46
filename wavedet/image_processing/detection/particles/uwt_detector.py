# -*- coding: utf-8 -*-
"""
Multiscale Particle Detector - Wavelet-correlation blob detection in 2D.

``ParticleDetectorUWT2D`` finds compact bright structures ("particles",
e.g. fluorescent granules or spots) at the scale where they are most
significant. The pipeline executed by ``run()`` is:

1. Resolve tunable parameters and freeze them into a ``DetectorConfig``
   (``ConfigError`` on invalid scale settings).
2. Optionally stabilise Poisson noise with the Anscombe transform.
3. Decompose the image with a denoising undecimated wavelet transform
   on a worker thread (``TransformController``).
4. Multiply band-pass planes within sliding scale windows into
   correlation images.
5. Threshold and label every correlation image, and build its
   cumulative histogram.
6. Link regions across scales into a ``RegionTree`` and keep the most
   meaningful nodes of each subtree.
7. Fill holes, drop small or border-dominated regions, apply the
   exclusion mask and relabel.

``stop()``, ``pause()`` and ``resume()`` may be called from any thread.
The decomposition honours them at every scale and the orchestrating
thread checks them again after steps 4 and 5. A stopped run returns a
``ParticleDetectionResult`` with ``cancelled=True`` and no regions.
``detect()`` wraps ``run()`` and returns a ``DetectionSet``.

Dependencies
------------
scipy, shapely, scikit-image

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
from dataclasses import dataclass, field
from typing import Annotated, Any, List, Optional, Tuple

# Third-party
import numpy as np

# wavedet internal
from wavedet.exceptions import OperationCancelled, ValidationError
from wavedet.image_processing.control import ControllableProcessor, StatusEvent
from wavedet.image_processing.detection.base import ImageDetector
from wavedet.image_processing.detection.fields import Fields
from wavedet.image_processing.detection.models import Detection, DetectionSet
from wavedet.image_processing.detection.particles.binarize import ScaleBinarizer
from wavedet.image_processing.detection.particles.config import DetectorConfig
from wavedet.image_processing.detection.particles.controller import (
    TransformController,
)
from wavedet.image_processing.detection.particles.correlation import (
    correlation_images,
)
from wavedet.image_processing.detection.particles.meaningful import (
    MeaningfulRegionSelector,
)
from wavedet.image_processing.detection.particles.postprocess import PostProcessor
from wavedet.image_processing.detection.particles.region_tree import (
    RegionTree,
    build_region_tree,
)
from wavedet.image_processing.intensity import AnscombeTransform
from wavedet.image_processing.params import Desc, Options
from wavedet.image_processing.regions import RegionSet
from wavedet.image_processing.versioning import processor_tags, processor_version
from wavedet.image_processing.wavelet import UndecimatedWaveletTransform
from wavedet.vocabulary import (
    AggregationMode,
    DetectionType,
    ExecutionStatus,
    ImageModality,
    MaskPolarity,
    ParentLookup,
    ProcessorCategory,
)

logger = logging.getLogger(__name__)


@dataclass
class ParticleDetectionResult:
    """Outcome of one ``ParticleDetectorUWT2D.run()``.

    Attributes
    ----------
    regions : RegionSet or None
        Final particles; None when the run was cancelled.
    mask : np.ndarray or None
        ``uint8`` binary mask (polarity per ``mask_polarity``).
    overlay : np.ndarray or None
        RGB ``uint8`` input copy with orange particle contours.
    scale_levels : np.ndarray or None
        Per final region, the level of the selected region it came from.
    log_probabilities : np.ndarray or None
        Per final region, the area-normalised log tail probability of
        that selected region.
    level_counts : Tuple[int, ...]
        Number of meaningful regions selected at each level.
    correlation_images : np.ndarray or None
        ``(levels, rows, cols)`` stack, only with ``additional_results``.
    binary_correlation_images : np.ndarray or None
        Thresholded stack, only with ``additional_results``.
    cancelled : bool
        True if the run was stopped before producing regions.
    """

    regions: Optional[RegionSet]
    mask: Optional[np.ndarray] = None
    overlay: Optional[np.ndarray] = None
    scale_levels: Optional[np.ndarray] = None
    log_probabilities: Optional[np.ndarray] = None
    level_counts: Tuple[int, ...] = ()
    correlation_images: Optional[np.ndarray] = None
    binary_correlation_images: Optional[np.ndarray] = None
    cancelled: bool = False
    config: Optional[DetectorConfig] = field(default=None, repr=False)

    @property
    def count(self) -> int:
        """Number of detected particles (0 when cancelled)."""
        return 0 if self.regions is None else len(self.regions)


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.FLUORESCENCE, ImageModality.CONFOCAL],
    category=ProcessorCategory.FIND_MAXIMA,
    description='Multiscale wavelet-correlation particle detector',
    detection_types=[DetectionType.PHENOMENON_SIGNATURE],
)
class ParticleDetectorUWT2D(ControllableProcessor, ImageDetector):
    """Multiscale wavelet-correlation particle detector for 2D images.

    Parameters
    ----------
    j_min : int
        Finest band-pass scale used. Default 2.
    j_max : int
        Coarsest band-pass scale used. Default 4.
    scale_interval_size : int
        Number of consecutive scales multiplied per correlation image.
        Default 2.
    correlation_threshold : float
        Correlation values ``>=`` this are foreground. Default 1.5.
    min_region_size : int
        Smallest particle area in pixels. Default 1.
    poisson_to_gauss : bool
        Apply the Anscombe transform first. Default True.
    initial_sigma_half : bool
        Use the sigma=0.5 wavelet kernel instead of the B3-spline.
    aggregation : str
        How children's scores are combined when pruning the region tree:
        ``'weighted_mean'``, ``'unweighted_mean'`` (default), ``'min'``
        or ``'max'``.
    parent_lookup : str
        ``'majority'`` (default) or ``'least_overlap'``.
    mask_polarity : str
        ``'foreground_zero'`` (default, particles 0 on 255) or
        ``'foreground_white'``.
    additional_results : bool
        Keep correlation and binarized correlation stacks in the result.

    Examples
    --------
    >>> detector = ParticleDetectorUWT2D(j_min=1, j_max=3,
    ...                                  correlation_threshold=2.0)
    >>> result = detector.run(image)
    >>> result.count, result.mask.shape
    >>> detections = detector.detect(image)    # DetectionSet
    """

    j_min: Annotated[int, Desc('Finest band-pass scale')] = 2
    j_max: Annotated[int, Desc('Coarsest band-pass scale')] = 4
    scale_interval_size: Annotated[int, Desc('Scales per correlation image')] = 2
    correlation_threshold: Annotated[float, Desc('Correlation threshold')] = 1.5
    min_region_size: Annotated[int, Desc('Minimum particle area (pixels)')] = 1
    poisson_to_gauss: Annotated[bool, Desc('Poisson-to-Gauss transform')] = True
    initial_sigma_half: Annotated[bool, Desc('Use sigma=0.5 wavelet kernel')] = False
    aggregation: Annotated[str, Options(*[m.value for m in AggregationMode]),
                           Desc('Score aggregation of child regions')] = 'unweighted_mean'
    parent_lookup: Annotated[str, Options(*[m.value for m in ParentLookup]),
                             Desc('Coarser region selection')] = 'majority'
    mask_polarity: Annotated[str, Options(*[m.value for m in MaskPolarity]),
                             Desc('Binary mask polarity')] = 'foreground_zero'
    additional_results: Annotated[bool, Desc('Keep intermediate stacks')] = False

    # -----------------------------------------------------------------
    # Hooks
    # -----------------------------------------------------------------
    def _make_transform(self, config: DetectorConfig) -> ControllableProcessor:
        """Wavelet transform used for step 3."""
        return UndecimatedWaveletTransform(
            j_max=config.j_max,
            denoise=True,
            initial_sigma_half=config.initial_sigma_half,
        )

    def _cancelled(self, config: DetectorConfig) -> ParticleDetectionResult:
        logger.info("%s stopped!", type(self).__name__)
        return ParticleDetectionResult(regions=None, cancelled=True,
                                       config=config)

    # -----------------------------------------------------------------
    # Full pipeline
    # -----------------------------------------------------------------
    def run(
        self,
        source: np.ndarray,
        exclude_mask: Optional[np.ndarray] = None,
        **kwargs: Any,
    ) -> ParticleDetectionResult:
        """Detect particles in a 2D image.

        Parameters
        ----------
        source : np.ndarray
            2D image ``(rows, cols)``.
        exclude_mask : np.ndarray, optional
            Same-shape mask; no particles are reported where it is
            non-zero, and those pixels are ignored by denoising.
        **kwargs
            Parameter overrides and ``progress_callback``.

        Returns
        -------
        ParticleDetectionResult

        Raises
        ------
        ConfigError
            If the scale settings are invalid.
        ValidationError
            If the image is not 2D or the mask shape differs.
        ResourceError
            If per-scale data cannot be allocated.
        ProcessorError
            If the decomposition failed.
        """
        params = self._resolve_params(kwargs)
        config = DetectorConfig.from_params(params)
        if source.ndim != 2:
            raise ValidationError(
                f"Particle detector requires 2D input, got shape {source.shape}"
            )
        if exclude_mask is not None and exclude_mask.shape != source.shape:
            raise ValidationError(
                f"exclude_mask shape {exclude_mask.shape} does not match "
                f"image shape {source.shape}"
            )

        name = type(self).__name__
        self._set_execution_status(ExecutionStatus.RUNNING)
        self.notify_listeners(StatusEvent(f"[{name}] running particle detection..."))
        try:
            return self._run(source, exclude_mask, config, kwargs)
        finally:
            self._finish_run()

    def _run(self, source: np.ndarray, exclude_mask: Optional[np.ndarray],
             config: DetectorConfig, kwargs: dict) -> ParticleDetectionResult:
        if config.poisson_to_gauss:
            logger.debug("applying Poisson-to-Gauss transform")
            image = AnscombeTransform().apply(source)
        else:
            image = source.astype(np.float64)

        transform = self._make_transform(config)
        planes = TransformController(self, transform).run(
            image, exclude_mask=exclude_mask)
        if planes is None:
            return self._cancelled(config)
        self._report_progress(kwargs, 0.5)

        corr = correlation_images(planes, config.j_min, config.j_max,
                                  config.scale_interval_size)
        if not self._checkpoint():
            return self._cancelled(config)
        self._report_progress(kwargs, 0.6)

        levels = ScaleBinarizer(config.correlation_threshold).binarize(corr)
        if not self._checkpoint():
            return self._cancelled(config)
        self._report_progress(kwargs, 0.7)

        tree = build_region_tree(levels, config.parent_lookup)
        selector = MeaningfulRegionSelector(tree, levels, config.aggregation)
        selected = selector.select()
        self._report_progress(kwargs, 0.8)

        counts = [0] * len(levels)
        for index in selected:
            counts[tree.nodes[index].level] += 1
        for level, n in enumerate(counts):
            logger.debug("regions from interval %d: %d", level, n)
        logger.info("%d meaningful regions before post-processing", sum(counts))

        post = PostProcessor(config.min_region_size, config.mask_polarity).run(
            source, [tree.nodes[i].region for i in selected], exclude_mask)
        logger.info("%s detected %d particles", type(self).__name__,
                    len(post.regions))

        scale_levels, log_probs = self._region_origins(
            post.regions, tree, selector, selected)
        self._report_progress(kwargs, 1.0)

        return ParticleDetectionResult(
            regions=post.regions,
            mask=post.mask,
            overlay=post.overlay,
            scale_levels=scale_levels,
            log_probabilities=log_probs,
            level_counts=tuple(counts),
            correlation_images=corr if config.additional_results else None,
            binary_correlation_images=(
                np.stack([lv.binary for lv in levels])
                if config.additional_results else None
            ),
            config=config,
        )

    @staticmethod
    def _region_origins(regions: RegionSet, tree: RegionTree,
                        selector: MeaningfulRegionSelector,
                        selected: List[int]) -> Tuple[np.ndarray, np.ndarray]:
        """Level and score of the selected region covering most of each
        final region. Regions grown only by hole filling get level -1."""
        origin = np.zeros(regions.shape, dtype=np.int64)
        for rank, index in enumerate(selected, start=1):
            region = tree.nodes[index].region
            origin[region.ys, region.xs] = rank

        levels = np.full(len(regions), -1, dtype=np.int64)
        scores = np.full(len(regions), np.nan, dtype=np.float64)
        for i, region in enumerate(regions):
            ranks = region.values(origin)
            ranks = ranks[ranks > 0]
            if ranks.size == 0:
                continue
            index = selected[int(np.argmax(np.bincount(ranks))) - 1]
            levels[i] = tree.nodes[index].level
            scores[i] = selector.normalized_log_probability(index)
        return levels, scores

    # -----------------------------------------------------------------
    # ImageDetector interface
    # -----------------------------------------------------------------
    @property
    def output_fields(self) -> Tuple[str, ...]:
        return (
            Fields.identity.REGION_ID,
            Fields.physical.AREA,
            Fields.physical.CENTROID_X,
            Fields.physical.CENTROID_Y,
            Fields.physical.WIDTH,
            Fields.physical.HEIGHT,
            Fields.physical.TOUCHES_BORDER,
            Fields.particle.SCALE_LEVEL,
            Fields.particle.LOG_PROBABILITY,
            Fields.intensity.MEAN,
            Fields.intensity.MAX,
            Fields.intensity.INTEGRATED,
        )

    def detect(self, source: np.ndarray, **kwargs: Any) -> DetectionSet:
        """Run the detector and return bounding-box detections.

        Accepts the same arguments as ``run()``.

        Raises
        ------
        OperationCancelled
            If the run was stopped.
        """
        return self.to_detections(source, self.run(source, **kwargs))

    def to_detections(self, source: np.ndarray,
                      result: ParticleDetectionResult) -> DetectionSet:
        """Wrap the particles of a finished ``run()`` on *source*.

        Raises
        ------
        OperationCancelled
            If *result* is a cancelled run.
        """
        if result.cancelled:
            raise OperationCancelled(f"{type(self).__name__} was stopped")

        image = source.astype(np.float64)
        detections = [
            Detection.from_region(region, image, i + 1,
                                  scale_level=result.scale_levels[i],
                                  log_prob=result.log_probabilities[i])
            for i, region in enumerate(result.regions)
        ]
        metadata = result.config.as_dict()
        metadata['level_counts'] = list(result.level_counts)
        metadata['image_shape'] = list(source.shape)
        return DetectionSet(
            detections=detections,
            detector_name=type(self).__name__,
            detector_version=self.__processor_version__,
            output_fields=self.output_fields,
            metadata=metadata,
        )
