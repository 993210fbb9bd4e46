# -*- coding: utf-8 -*-
"""
Detector Configuration - Immutable parameter set of one detection run.

``DetectorConfig`` freezes the resolved parameters of a
``ParticleDetectorUWT2D`` run. Construction validates the scale
settings and raises ``ConfigError`` before any processing starts.

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
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict

# wavedet internal
from wavedet.exceptions import ConfigError
from wavedet.vocabulary import AggregationMode, MaskPolarity, ParentLookup


def validate_scale_config(j_min: int, j_max: int, scale_interval_size: int) -> None:
    """Check the scale window settings.

    Raises
    ------
    ConfigError
        If ``j_min <= 0``, ``j_max <= 0``, ``j_max < j_min``,
        ``scale_interval_size <= 0`` or
        ``scale_interval_size > j_max - j_min + 1``.
    """
    if j_min <= 0 or j_max <= 0 or j_max < j_min:
        raise ConfigError(
            f"j_min and j_max must be larger than 0 and j_max >= j_min, "
            f"got j_min={j_min}, j_max={j_max}"
        )
    if scale_interval_size <= 0:
        raise ConfigError(
            f"scale_interval_size must be larger than 0, "
            f"got {scale_interval_size}"
        )
    if scale_interval_size > j_max - j_min + 1:
        raise ConfigError(
            f"scale_interval_size must be <= j_max - j_min + 1 "
            f"({j_max - j_min + 1}), got {scale_interval_size}"
        )


@dataclass(frozen=True)
class DetectorConfig:
    """Frozen parameters of a multiscale particle detection.

    Enum fields also accept their string values, e.g.
    ``aggregation='min'``.

    Raises
    ------
    ConfigError
        On invalid scale settings, a negative ``min_region_size`` or an
        unknown enum value.
    """

    j_min: int = 2
    j_max: int = 4
    scale_interval_size: int = 2
    correlation_threshold: float = 1.5
    min_region_size: int = 1
    poisson_to_gauss: bool = True
    initial_sigma_half: bool = False
    aggregation: AggregationMode = AggregationMode.UNWEIGHTED_MEAN
    parent_lookup: ParentLookup = ParentLookup.MAJORITY
    mask_polarity: MaskPolarity = MaskPolarity.FOREGROUND_ZERO
    additional_results: bool = False

    def __post_init__(self) -> None:
        validate_scale_config(self.j_min, self.j_max, self.scale_interval_size)
        if self.min_region_size < 0:
            raise ConfigError(
                f"min_region_size must be >= 0, got {self.min_region_size}"
            )
        for name, enum_type in (('aggregation', AggregationMode),
                                ('parent_lookup', ParentLookup),
                                ('mask_polarity', MaskPolarity)):
            value = getattr(self, name)
            if not isinstance(value, enum_type):
                try:
                    value = enum_type(value)
                except ValueError as exc:
                    raise ConfigError(
                        f"Unknown {name} {value!r}; expected one of "
                        f"{[m.value for m in enum_type]}"
                    ) from exc
                object.__setattr__(self, name, value)

    @property
    def num_correlation_images(self) -> int:
        return self.j_max - self.j_min + 1 - self.scale_interval_size + 1

    def as_dict(self) -> Dict[str, Any]:
        """Plain-value copy, enums replaced by their string values."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.value if isinstance(value, Enum) else value
        return out

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> 'DetectorConfig':
        """Build from a resolved parameter dict, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in params.items() if k in names})
