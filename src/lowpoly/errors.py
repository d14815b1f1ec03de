"""
errors.py
---------

Exception hierarchy raised by the pattern pipeline.

All errors are raised synchronously where they are detected; nothing in
the pipeline retries or falls back to a degraded pattern.
"""

__all__ = [
    "PatternError",
    "ConfigurationError",
    "GeometryError",
    "EnvironmentUnavailableError",
]


class PatternError(Exception):
    """Base class for every error raised by lowpoly."""


class ConfigurationError(PatternError, ValueError):
    """Invalid options: padding/size relationship, dimensions, gradients, opacity."""


class GeometryError(PatternError):
    """Point field cannot be triangulated (too few points, degenerate input)."""


class EnvironmentUnavailableError(PatternError, RuntimeError):
    """A document, serialization or host collaborator is missing or unusable."""
