# -*- coding: utf-8 -*-
"""
Exception Hierarchy Tests.

Checks that every wavedet exception is catchable both as WavedetError
and as the matching built-in, and that the package re-exports them.

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

import pytest

import wavedet
from wavedet.exceptions import (
    ConfigError,
    DependencyError,
    OperationCancelled,
    ProcessorError,
    ResourceError,
    ValidationError,
    WavedetError,
)


@pytest.mark.parametrize('exc_type, builtin', [
    (ValidationError, ValueError),
    (ConfigError, ValueError),
    (ProcessorError, RuntimeError),
    (ResourceError, MemoryError),
    (OperationCancelled, RuntimeError),
    (DependencyError, ImportError),
])
def test_dual_inheritance(exc_type, builtin):
    with pytest.raises(WavedetError):
        raise exc_type("x")
    with pytest.raises(builtin):
        raise exc_type("x")


def test_config_error_is_validation_error():
    assert issubclass(ConfigError, ValidationError)


def test_package_exports():
    for name in wavedet.__all__:
        assert hasattr(wavedet, name)
    assert wavedet.ConfigError is ConfigError
    assert isinstance(wavedet.__version__, str)
