# -*- coding: utf-8 -*-
"""
wavedet Exception Hierarchy - Domain-specific exceptions for wavedet operations.

Provides a small exception hierarchy that lets callers catch wavedet
errors distinctly from Python built-in exceptions. Every exception
subclasses both ``WavedetError`` and the closest built-in exception so
that generic ``except ValueError`` handlers keep working.

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


class WavedetError(Exception):
    """Base exception for all wavedet errors."""


class ValidationError(WavedetError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for shape mismatches, out-of-range parameters, invalid
    channel indices, and other input validation failures.
    """


class ConfigError(ValidationError):
    """Invalid scale configuration of a multiscale detector.

    Raised before any processing starts when ``j_min``, ``j_max`` and
    ``scale_interval_size`` do not describe at least one correlation
    image. Never retried.
    """


class ProcessorError(WavedetError, RuntimeError):
    """Algorithm or processing failure during apply()/detect().

    Raised when a processor encounters a non-recoverable error during
    execution, e.g. a wavelet decomposition that terminated without
    producing coefficient images.
    """


class ResourceError(WavedetError, MemoryError):
    """Allocation failure for per-scale images or histograms.

    Fatal for the current run.
    """


class OperationCancelled(WavedetError, RuntimeError):
    """A controllable operation was stopped cooperatively.

    Only raised by convenience APIs that cannot return an explicit
    cancelled result (e.g. ``ParticleDetectorUWT2D.detect``).
    """


class DependencyError(WavedetError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a module requires an optional package (matplotlib)
    that is not installed.
    """
