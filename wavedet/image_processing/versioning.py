# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability decorators for processors.

``@processor_version`` stamps a semantic version on a processor class;
``@processor_tags`` attaches modality/category metadata and registers
the class so that ``find_processors`` can discover it by capability.

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
import importlib.metadata
from typing import List, Optional, Sequence, Type, TypeVar

# wavedet internal
from wavedet.vocabulary import DetectionType, ImageModality, ProcessorCategory

T = TypeVar('T')

_TAGGED: List[type] = []


def processor_version(version: Optional[str] = None):
    """Class decorator that sets ``__processor_version__``.

    When *version* is omitted the installed ``wavedet`` distribution
    version is used (``'unknown'`` if the package is not installed).

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyFilter(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> MyFilter.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('wavedet')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def _check_members(values, enum_type, arg_name: str) -> None:
    for value in values or ():
        if not isinstance(value, enum_type):
            raise TypeError(
                f"{arg_name} must be {enum_type.__name__} members, "
                f"got {value!r}"
            )


def processor_tags(
    modalities: Optional[Sequence[ImageModality]] = None,
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
    detection_types: Optional[Sequence[DetectionType]] = None,
):
    """Class decorator for processor capability metadata.

    Stamps ``__processor_tags__`` on the class. Enum members are
    validated eagerly so a typo fails at import time.

    Parameters
    ----------
    modalities : Sequence[ImageModality], optional
        Imagery modalities the processor is designed for.
    category : ProcessorCategory, optional
        Processing category.
    description : str, optional
        Short description of the processor's purpose.
    detection_types : Sequence[DetectionType], optional
        Types of detection performed (detectors only).

    Raises
    ------
    TypeError
        If a value is not a member of the expected enum.
    """
    _check_members(modalities, ImageModality, 'modalities')
    _check_members(detection_types, DetectionType, 'detection_types')
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'modalities': tuple(modalities) if modalities else (),
            'category': category,
            'description': description,
            'detection_types': tuple(detection_types) if detection_types else (),
        }
        if cls not in _TAGGED:
            _TAGGED.append(cls)
        return cls
    return decorator


def find_processors(
    modality: Optional[ImageModality] = None,
    category: Optional[ProcessorCategory] = None,
) -> List[type]:
    """Tagged processor classes matching *modality* and *category*.

    A class without declared modalities matches any modality. Classes
    are returned in the order they were tagged (import order).

    Examples
    --------
    >>> find_processors(category=ProcessorCategory.THRESHOLD)
    [<class '...GlobalThreshold'>, <class '...OtsuThreshold'>, ...]
    """
    found = []
    for cls in _TAGGED:
        tags = cls.__processor_tags__
        if category is not None and tags['category'] is not category:
            continue
        if (modality is not None and tags['modalities']
                and modality not in tags['modalities']):
            continue
        found.append(cls)
    return found
