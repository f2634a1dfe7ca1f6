"""
Input point validation.

This module validates the ordered point sequence consumed by the analyzer.
It does not compute coefficients; it only verifies that the caller handed over
a usable closed path.

Accepted inputs
---------------
- a sequence of ``(x, y)`` pairs
- an ``(N, 2)`` real array
- a 1-D complex array ``x + 1j*y``

Two failures are fatal: an empty sequence and a non-finite coordinate. Both are
reported as a :class:`ValidationResult` (recoverable form) or raised as the
matching typed error by :func:`check_points`.

Examples
--------
>>> from fourier_epicycles.validation.points import validate_points
>>> validate_points([(0, 0), (1, 0), (0, 1)]).ok
True
>>> validate_points([]).ok
False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np

from fourier_epicycles.errors import EmptyInputError, NonFiniteInputError


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating one point sequence.

    Attributes
    ----------
    ok:
        True if no errors were found.
    errors:
        Fatal issues; the analyzer must not run.
    warnings:
        Non-fatal issues; the caller may continue but should review.
    n_points:
        Number of points seen (0 if the input could not be interpreted).
    empty:
        True if the sequence has no points.
    nonfinite_indices:
        Indices of points with a NaN/Inf coordinate.

    Examples
    --------
    >>> ValidationResult(ok=True, errors=[], warnings=[]).ok
    True
    """
    ok: bool
    errors: List[str]
    warnings: List[str]
    n_points: int = 0
    empty: bool = False
    nonfinite_indices: Tuple[int, ...] = ()

    def raise_if_errors(self) -> None:
        """
        Raise the typed error matching the first fatal issue.

        Examples
        --------
        >>> r = ValidationResult(ok=False, errors=["bad"], warnings=[], empty=True)
        >>> try:
        ...     r.raise_if_errors()
        ... except ValueError:
        ...     pass
        """
        if not self.errors:
            return
        msg = "Validation failed:\n" + "\n".join(f"- {e}" for e in self.errors)
        if self.empty:
            raise EmptyInputError(msg)
        if self.nonfinite_indices:
            raise NonFiniteInputError(msg)
        raise ValueError(msg)


def as_point_array(points: Any) -> np.ndarray:
    """
    Convert an accepted point input into an ``(N, 2)`` float64 array.

    Raises ValueError if the input cannot be read as 2D points. Emptiness and
    finiteness are *not* checked here.

    Examples
    --------
    >>> as_point_array([(1, 2), (3, 4)]).shape
    (2, 2)
    >>> as_point_array(np.array([1 + 2j])).tolist()
    [[1.0, 2.0]]
    """
    try:
        arr = np.asarray(points)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot interpret points as an array: {e}") from e

    if arr.size == 0:
        return np.empty((0, 2), dtype=float)

    if np.iscomplexobj(arr):
        if arr.ndim != 1:
            raise ValueError(f"Complex points must be 1D, got shape {arr.shape}")
        return np.column_stack([arr.real, arr.imag]).astype(np.float64)

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Points must have shape (N, 2), got {arr.shape}")

    try:
        return arr.astype(np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Point coordinates must be real numbers: {e}") from e


def _consecutive_duplicates(xy: np.ndarray) -> List[int]:
    """Indices n where point n equals point n+1 (wrapping at the end)."""
    if xy.shape[0] < 2:
        return []
    nxt = np.roll(xy, -1, axis=0)
    same = np.all(xy == nxt, axis=1)
    return np.where(same)[0].astype(int).tolist()


def validate_points(points: Any) -> ValidationResult:
    """
    Validate an ordered, closed point sequence without raising.

    Returns
    -------
    ValidationResult

    Examples
    --------
    >>> validate_points([(0.0, float("nan"))]).nonfinite_indices
    (0,)
    """
    try:
        xy = as_point_array(points)
    except ValueError as e:
        return ValidationResult(ok=False, errors=[str(e)], warnings=[])
    return _validate_array(xy)


def _validate_array(xy: np.ndarray) -> ValidationResult:
    """Checks on an already converted ``(N, 2)`` array."""
    errors: list[str] = []
    warnings: list[str] = []

    n = int(xy.shape[0])
    if n == 0:
        errors.append("Point sequence is empty; at least one point is required.")
        return ValidationResult(ok=False, errors=errors, warnings=warnings, empty=True)

    finite = np.all(np.isfinite(xy), axis=1)
    if not np.all(finite):
        bad = np.where(~finite)[0].astype(int)
        errors.append(f"Non-finite coordinates at points {bad[:10].tolist()} (showing up to 10).")
        return ValidationResult(
            ok=False,
            errors=errors,
            warnings=warnings,
            n_points=n,
            nonfinite_indices=tuple(bad.tolist()),
        )

    if n < 3:
        warnings.append(f"Only {n} point(s): the path degenerates to a point or a segment.")

    dups = _consecutive_duplicates(xy)
    if dups:
        warnings.append(f"Consecutive duplicate points at indices {dups[:10]} (showing up to 10).")

    return ValidationResult(ok=True, errors=errors, warnings=warnings, n_points=n)


def check_points(points: Any) -> np.ndarray:
    """
    Return the ``(N, 2)`` array for ``points`` or raise the matching typed error.

    Raises
    ------
    EmptyInputError
        No points.
    NonFiniteInputError
        Any coordinate is NaN or infinite.
    ValueError
        The input is not a 2D point sequence.
    """
    xy = as_point_array(points)
    _validate_array(xy).raise_if_errors()
    return xy
