# -*- coding: utf-8 -*-
"""
Detection Data Dictionary - Standardized field names for detection attributes.

Provides a hierarchical naming system for the properties attached to
each ``Detection``. Detectors are encouraged to use these names so that
downstream tools can read particle attributes without per-detector
configuration.

Field names use **dot notation**: ``domain.attribute`` (e.g.,
``'particle.scale_level'``). The ``Fields`` accessor class provides
IDE-friendly constants: ``Fields.particle.SCALE_LEVEL`` evaluates to
``'particle.scale_level'``.

Domains
-------
physical
    Pixel-space geometry (area, centroid, bounding box extent).
identity
    Identification within one detection run (region id, slice info).
particle
    Multiscale detection evidence (scale level, log-probability).
intensity
    Image samples inside the region (mean, max, integrated intensity).

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
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Dict, List, Optional


@dataclass(frozen=True)
class FieldDefinition:
    """One entry of the detection data dictionary.

    Attributes
    ----------
    name : str
        Dotted ``domain.attribute`` name (e.g., ``'physical.area'``).
    dtype : str
        ``'float'``, ``'int'``, ``'str'`` or ``'bool'``.
    description : str
        Human-readable description.
    units : str, optional
        Units such as ``'px'``. None when dimensionless.
    """

    name: str
    dtype: str
    description: str
    units: Optional[str] = None

    @property
    def domain(self) -> str:
        return self.name.partition('.')[0]

    def __repr__(self) -> str:
        unit = '' if self.units is None else f", units={self.units!r}"
        return f"FieldDefinition({self.name!r}, {self.dtype!r}{unit})"


# (name, dtype, description, units)
_FIELD_TABLE = (
    ('physical.area', 'int', 'Region area', 'px'),
    ('physical.centroid_x', 'float', 'Centroid column', 'px'),
    ('physical.centroid_y', 'float', 'Centroid row', 'px'),
    ('physical.width', 'int', 'Bounding box width', 'px'),
    ('physical.height', 'int', 'Bounding box height', 'px'),
    ('physical.touches_border', 'bool', 'Region touches the image border', None),
    ('identity.region_id', 'int', 'Label of the region in the result', None),
    ('identity.slice', 'str', 'Stack slice the region was found in', None),
    ('particle.scale_level', 'int',
     'Correlation-image index the region was selected at', None),
    ('particle.log_probability', 'float',
     'Area-normalised log tail probability of the region', None),
    ('intensity.mean', 'float', 'Mean input intensity', None),
    ('intensity.max', 'float', 'Maximum input intensity', None),
    ('intensity.integrated', 'float', 'Sum of input intensity', None),
)

DATA_DICTIONARY: Dict[str, FieldDefinition] = {
    row[0]: FieldDefinition(*row) for row in _FIELD_TABLE
}
"""Registry of standardized detection field definitions."""


def lookup_field(name: str) -> Optional[FieldDefinition]:
    """Definition registered under *name*, or None."""
    return DATA_DICTIONARY.get(name)


def is_dictionary_field(name: str) -> bool:
    return name in DATA_DICTIONARY


def list_fields(domain: Optional[str] = None) -> List[FieldDefinition]:
    """Field definitions sorted by name, optionally limited to *domain*."""
    return [DATA_DICTIONARY[name] for name in sorted(DATA_DICTIONARY)
            if domain is None or DATA_DICTIONARY[name].domain == domain]


def _domain_constants(domain: str) -> SimpleNamespace:
    prefix = domain + '.'
    return SimpleNamespace(**{
        name[len(prefix):].upper(): name
        for name in DATA_DICTIONARY if name.startswith(prefix)
    })


class Fields:
    """Field name constants grouped by domain.

    Usage::

        >>> Fields.physical.AREA
        'physical.area'
        >>> Fields.particle.LOG_PROBABILITY
        'particle.log_probability'
    """

    physical = _domain_constants('physical')
    identity = _domain_constants('identity')
    particle = _domain_constants('particle')
    intensity = _domain_constants('intensity')
