"""DFT-based spectral analysis of a closed 2D point path.

Each point ``(x_n, y_n)`` is treated as the complex sample ``z_n = x_n + i*y_n``
taken at angle ``theta_n = 2*pi*n/N`` over one period. Coefficients use the
standard ``sum/N`` normalisation so that their magnitude is the epicycle radius.

Functions
---------
dft_direct
    Direct O(N^2) evaluation of the DFT definition.
dft_fft
    Numerically equivalent ``numpy.fft`` fast path.
analyze
    Points -> ordered tuple of :class:`FourierCoefficient`, with optional
    recentring / amplitude ordering.
drop_dc, sort_by_amplitude
    Explicit post-processing policies.
"""

from __future__ import annotations

import math
from functools import reduce
from typing import Any, Sequence, Tuple

import numpy as np

from fourier_epicycles.models.coefficients import FourierCoefficient
from fourier_epicycles.models.profile import TRANSFORM_METHODS, EpicycleProfile
from fourier_epicycles.validation.points import check_points

Coefficients = Tuple[FourierCoefficient, ...]


def _to_complex_samples(xy: np.ndarray) -> np.ndarray:
    return xy[:, 0] + 1j * xy[:, 1]


def _dft_bin(z: Sequence[complex], k: int) -> complex:
    """Normalized DFT bin ``k`` of ``z`` as a fold over the samples."""
    N = len(z)

    def _accumulate(acc: complex, item: Tuple[int, complex]) -> complex:
        n, zn = item
        theta = 2.0 * math.pi * k * n / N
        return acc + zn * complex(math.cos(theta), -math.sin(theta))

    total = reduce(_accumulate, enumerate(z), 0j)
    return complex(total.real / N, total.imag / N)


def dft_direct(z: np.ndarray) -> np.ndarray:
    r"""Direct discrete Fourier transform with ``1/N`` normalisation.

    Parameters
    ----------
    z:
        1-D complex samples of length ``N >= 1``.

    Returns
    -------
    np.ndarray
        Complex coefficients ``c_k``, ``k = 0..N-1``.

    Notes
    -----
    This is the O(N^2) definition
    \(c_k = \frac{1}{N}\sum_n z_n e^{-2\pi i k n / N}\), evaluated bin by bin.
    """
    samples = [complex(v) for v in np.asarray(z, dtype=complex).ravel()]
    if not samples:
        raise ValueError("dft_direct requires at least one sample")
    return np.array([_dft_bin(samples, k) for k in range(len(samples))], dtype=complex)


def dft_fft(z: np.ndarray) -> np.ndarray:
    """Same coefficients as :func:`dft_direct`, computed as ``FFT(z)/N``."""
    x = np.asarray(z, dtype=complex).ravel()
    Ns = x.size
    if Ns <= 0:
        raise ValueError("dft_fft requires at least one sample")
    return np.fft.fft(x) / float(Ns)


def coefficients_from_complex(c: np.ndarray) -> Coefficients:
    """Wrap normalized complex bins into frequency-ordered coefficients."""
    return tuple(FourierCoefficient.from_complex(k, complex(ck)) for k, ck in enumerate(np.asarray(c)))


def drop_dc(coefficients: Sequence[FourierCoefficient]) -> Coefficients:
    """Remove the frequency-0 term, recentring the drawing on the origin."""
    return tuple(c for c in coefficients if c.frequency != 0)


def sort_by_amplitude(coefficients: Sequence[FourierCoefficient]) -> Coefficients:
    """Order by descending amplitude; ties keep ascending frequency order.

    Only the intermediate epicycle centers change; the final reconstructed point
    at any time is the same sum in a different order.
    """
    return tuple(sorted(coefficients, key=lambda c: (-c.amplitude, c.frequency)))


# analyze() takes keyword flags with the same names.
_drop_dc = drop_dc
_sort_by_amplitude = sort_by_amplitude


def analyze(
    points: Any,
    *,
    drop_dc: bool = False,
    sort_by_amplitude: bool = False,
    method: str = "direct",
) -> Coefficients:
    """Compute the epicycle coefficients of an ordered, closed point path.

    Parameters
    ----------
    points:
        ``N >= 1`` points: sequence of ``(x, y)``, ``(N, 2)`` array or 1-D complex array.
        Point ``n`` is the path position at ``t = 2*pi*n/N``.
    drop_dc:
        Remove the k=0 (centroid) coefficient.
    sort_by_amplitude:
        Reorder coefficients by descending amplitude (frequency as tie-break).
    method:
        ``"direct"`` for the O(N^2) definition, ``"fft"`` for the numpy fast path.

    Returns
    -------
    tuple of FourierCoefficient
        Ascending frequency ``0..N-1`` unless a policy flag reorders or drops entries.

    Raises
    ------
    EmptyInputError
        ``points`` is empty.
    NonFiniteInputError
        A coordinate is NaN or infinite.
    ValueError
        Unknown ``method`` or malformed input.
    """
    if method not in TRANSFORM_METHODS:
        raise ValueError(f"method must be one of {TRANSFORM_METHODS}, got {method!r}")

    xy = check_points(points)
    z = _to_complex_samples(xy)

    c = dft_direct(z) if method == "direct" else dft_fft(z)
    coeffs = coefficients_from_complex(c)

    if drop_dc:
        coeffs = _drop_dc(coeffs)
    if sort_by_amplitude:
        coeffs = _sort_by_amplitude(coeffs)
    return coeffs


def analyze_with_profile(points: Any, profile: EpicycleProfile) -> Coefficients:
    """:func:`analyze` with the analysis fields of ``profile``."""
    return analyze(
        points,
        drop_dc=profile.drop_dc,
        sort_by_amplitude=profile.sort_by_amplitude,
        method=profile.method,
    )


def centroid(coefficients: Sequence[FourierCoefficient]) -> Tuple[float, float]:
    """``(re, im)`` of the frequency-0 coefficient, or ``(0, 0)`` if it was dropped."""
    for c in coefficients:
        if c.frequency == 0:
            return (c.re, c.im)
    return (0.0, 0.0)
