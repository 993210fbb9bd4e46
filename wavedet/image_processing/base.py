# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for image processors.

Defines ``ImageProcessor``, the common base of every processor in
wavedet (transforms, wavelet decompositions, detectors), and the
``ImageTransform`` ABC for dense raster transforms. ``ImageProcessor``
provides version checking at first instantiation, ``typing.Annotated``
tunable parameter declarations with automatic ``__init__`` generation,
runtime parameter resolution through ``**kwargs`` and fractional
progress reporting.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# wavedet internal
from wavedet.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all image processors.

    **Version checking**: concrete subclasses that do not declare a
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    at first instantiation. The check runs in ``__new__`` so that class
    decorators have already been applied.

    **Tunable parameters**: subclasses declare parameters as
    ``typing.Annotated`` class-body fields using the markers from
    :mod:`wavedet.image_processing.params`. ``__init_subclass__``
    collects them into ``__param_specs__`` and generates an
    ``__init__`` unless the subclass defines its own. At runtime
    ``_resolve_params(kwargs)`` merges instance values with keyword
    overrides and validates them.
    """

    _version_warned_classes: set = set()

    #: Specs collected from ``Annotated`` fields by ``__init_subclass__``.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        Keys of *kwargs* that are not declared parameters (e.g.
        ``progress_callback`` or ``exclude_mask``) are ignored.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        ValueError
            If a value violates range or choices constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs[spec.name] if spec.name in kwargs else getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def get_params(self) -> Dict[str, Any]:
        """Current instance values of the declared parameters."""
        return {spec.name: getattr(self, spec.name)
                for spec in type(self).__param_specs__}

    def __repr__(self) -> str:
        args = ', '.join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}({args})"

    def _report_progress(self, kwargs: Dict[str, Any], fraction: float) -> None:
        """Report progress to an optional ``progress_callback`` kwarg.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            The keyword arguments passed to the processor method.
        fraction : float
            Progress fraction in [0.0, 1.0].
        """
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Abstract base class for dense raster transforms.

    Subclasses implement ``apply``, which maps a source array to a new
    array without modifying the source.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source image array.

        Parameters
        ----------
        source : np.ndarray
            Input image, typically 2D ``(rows, cols)``.

        Returns
        -------
        np.ndarray
            Transformed image.
        """
        ...
