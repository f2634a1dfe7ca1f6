"""Validation utilities.

This package contains *non-interactive* checks applied before any transform runs.

Design goals
------------
1) Reject empty and non-finite input at the boundary, before any arithmetic.
2) Offer a non-raising form (:class:`ValidationResult`) for GUI and CLI callers.
"""

from .points import ValidationResult, as_point_array, check_points, validate_points

__all__ = [
    "ValidationResult",
    "as_point_array",
    "check_points",
    "validate_points",
]
