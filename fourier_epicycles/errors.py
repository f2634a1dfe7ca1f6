"""Typed input errors raised at the analyzer boundary.

Both errors subclass :class:`ValueError` so that callers already handling the
package's other ``ValueError`` conditions keep working.
"""

from __future__ import annotations


class EpicycleInputError(ValueError):
    """Base class for rejected point sequences."""


class EmptyInputError(EpicycleInputError):
    """The point sequence has no samples (N = 0)."""


class NonFiniteInputError(EpicycleInputError):
    """At least one coordinate is NaN or +/-Inf."""
