# -*- coding: utf-8 -*-
"""
Tunable Parameters - Declarative processor parameters via typing.Annotated.

Processors declare their tunable parameters as class-body annotations
carrying constraint markers (``Range``, ``Options``, ``Desc``)::

    from typing import Annotated
    from wavedet.image_processing.params import Range, Options, Desc

    class MyDetector(ImageDetector):
        j_max: Annotated[int, Range(min=1, max=12), Desc('Coarsest scale')] = 4
        lookup: Annotated[str, Options('majority', 'least_overlap')] = 'majority'

``ImageProcessor.__init_subclass__`` turns the annotations into a tuple
of ``ParamSpec`` objects stored on ``cls.__param_specs__`` and, unless
the class defines its own ``__init__``, generates a keyword-only
constructor that validates every value.

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
import inspect
from typing import (
    Annotated,
    Any,
    Callable,
    List,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

Number = Union[int, float]


# =====================================================================
# Constraint markers
# =====================================================================

class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types."""


class Range(ParamMeta):
    """Inclusive numeric bounds.

    Parameters
    ----------
    min : int or float, optional
        Smallest allowed value.
    max : int or float, optional
        Largest allowed value.
    """

    __slots__ = ('min', 'max')

    def __init__(self, min: Optional[Number] = None,
                 max: Optional[Number] = None) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        bounds = [f"{k}={v!r}" for k, v in (('min', self.min), ('max', self.max))
                  if v is not None]
        return f"Range({', '.join(bounds)})"


class Options(ParamMeta):
    """Closed set of allowed values."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Human-readable description of a parameter."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec
# =====================================================================

class ParamSpec:
    """Resolved declaration of one tunable parameter.

    Attributes
    ----------
    name : str
        Keyword-argument name.
    param_type : type
        Expected type. ``int`` is accepted for ``float`` parameters and
        ``bool`` is rejected for ``int`` parameters.
    default : Any
        Default value (``None`` when the parameter is required).
    description : str
        Text from ``Desc``.
    min_value, max_value : int, float or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    __slots__ = (
        'name', 'param_type', 'default', '_has_default',
        'description', 'min_value', 'max_value', 'choices',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any = None,
        has_default: bool = True,
        description: str = '',
        min_value: Optional[Number] = None,
        max_value: Optional[Number] = None,
        choices: Optional[Tuple] = None,
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self._has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices

    @property
    def required(self) -> bool:
        """Whether the parameter has no default."""
        return not self._has_default

    def _type_ok(self, value: Any) -> bool:
        if self.param_type is object:
            return True
        if self.param_type is float:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self.param_type is int:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, self.param_type)

    def validate(self, value: Any) -> None:
        """Check *value* against type, bounds and choices.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        ValueError
            If *value* is out of bounds or not an allowed choice.
        """
        if not self._type_ok(value):
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )
        if self.min_value is not None and value < self.min_value:
            raise ValueError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValueError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise ValueError(
                f"Parameter '{self.name}' value {value!r} "
                f"is not in allowed choices {self.choices!r}"
            )

    def __repr__(self) -> str:
        text = (f"ParamSpec(name={self.name!r}, "
                f"param_type={self.param_type.__name__}, "
                f"required={self.required!r}")
        if not self.required:
            text += f", default={self.default!r}"
        for attr in ('min_value', 'max_value', 'choices'):
            val = getattr(self, attr)
            if val is not None:
                text += f", {attr}={val!r}"
        return text + ")"


# =====================================================================
# Collection from class annotations
# =====================================================================

_MISSING = object()


def _ordered_annotation_names(cls: type, hints: dict) -> List[str]:
    """Annotation names in MRO order, parents first."""
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        for name in klass.__dict__.get('__annotations__', {}):
            if name in hints and name not in names:
                names.append(name)
    return names


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Build ``ParamSpec`` objects from the ``Annotated`` hints of *cls*.

    Only annotations whose metadata contains a ``ParamMeta`` instance
    are collected.

    Raises
    ------
    TypeError
        If one field carries both ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    specs: List[ParamSpec] = []
    for name in _ordered_annotation_names(cls, hints):
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue

        rng = next((m for m in metas if isinstance(m, Range)), None)
        opts = next((m for m in metas if isinstance(m, Options)), None)
        desc = next((m for m in metas if isinstance(m, Desc)), None)
        if rng is not None and opts is not None:
            raise TypeError(
                f"Parameter '{name}' on {cls.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )

        default = getattr(cls, name, _MISSING)
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=None if default is _MISSING else default,
            has_default=default is not _MISSING,
            description=desc.text if desc else '',
            min_value=rng.min if rng else None,
            max_value=rng.max if rng else None,
            choices=opts.choices if opts else None,
        ))
    return tuple(specs)


def _make_init(param_specs: Tuple[ParamSpec, ...]) -> Callable[..., None]:
    """Generate a validating keyword-only ``__init__`` for *param_specs*.

    Calls ``self.__post_init__()`` afterwards when the class defines it.
    """
    known = {s.name for s in param_specs}

    def __init__(self, **kwargs):
        unexpected = set(kwargs) - known
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in param_specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif not spec.required:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{spec.name}'"
                )
            spec.validate(value)
            object.__setattr__(self, spec.name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in param_specs:
        params.append(inspect.Parameter(
            spec.name,
            inspect.Parameter.KEYWORD_ONLY,
            default=inspect.Parameter.empty if spec.required else spec.default,
        ))
    __init__.__signature__ = inspect.Signature(params)
    __init__.__qualname__ = '__init__'
    return __init__
