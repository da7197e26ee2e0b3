"""Typed errors raised by the composition engine.

All errors derive from ``Exception`` rather than ``ValueError`` so that they
pass through pydantic validators untouched and reach the caller at the
combinator call site.
"""

from __future__ import annotations


class CollageError(Exception):
    """Base error for the package."""


class SingularTransform(CollageError):
    """Inversion of a transform whose determinant is (nearly) zero."""


class InvalidLayoutSpec(CollageError):
    """Negative sizes or padding, or an alignment fraction outside [0, 1]."""


class InvalidGradientStops(CollageError):
    """Empty stop list, offsets outside [0, 1], or offsets not strictly increasing."""


class MissingHandler(CollageError):
    """No engine handler is registered for a node kind."""


class DuplicateHandler(CollageError):
    """A handler for the same (stage, kind) pair was registered twice."""
