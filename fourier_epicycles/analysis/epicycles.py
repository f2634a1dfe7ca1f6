"""Epicycle reconstruction.

The path is rebuilt as the tip of a chain of rotating vectors: epicycle ``i``
has radius ``amplitude_i`` and angle ``frequency_i * t + phase_i`` at time ``t``,
and is centred on the tip of epicycle ``i-1``. The chain starts at the origin;
a retained frequency-0 term is a fixed first vector (the centroid).

Everything here is a pure function of ``(coefficients, t, visible_fraction)``.
Wrapping ``t`` into ``[0, 2*pi)`` and resetting traces is the caller's job.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from fourier_epicycles.models.coefficients import EpicycleChain, FourierCoefficient, Point

TWO_PI = 2.0 * math.pi


def clamp_fraction(visible_fraction: float) -> float:
    """Clamp to [0, 1]; NaN counts as 0 (nothing visible)."""
    f = float(visible_fraction)
    if math.isnan(f):
        return 0.0
    return min(1.0, max(0.0, f))


def visible_count(n_coefficients: int, visible_fraction: float = 1.0) -> int:
    """Number of leading epicycles drawn: ``ceil(M * clamp(visible_fraction, 0, 1))``."""
    M = int(n_coefficients)
    if M <= 0:
        return 0
    return min(M, int(math.ceil(M * clamp_fraction(visible_fraction))))


def reconstruct(
    coefficients: Sequence[FourierCoefficient],
    t: float,
    visible_fraction: float = 1.0,
) -> EpicycleChain:
    """Evaluate the epicycle chain at time ``t``.

    Parameters
    ----------
    coefficients:
        Coefficients in chain order (ascending frequency or amplitude-sorted).
    t:
        Angle in radians; the path has period ``2*pi``.
    visible_fraction:
        Share of leading epicycles to use, clamped to [0, 1]. ``1.0`` evaluates the
        full sum, which reproduces input point ``n`` at ``t = 2*pi*n/M``.

    Returns
    -------
    EpicycleChain
        Final point plus the center, radius and angle of each visible epicycle.
        With no visible epicycles the point is ``(0, 0)`` and the chain is empty.
    """
    t = float(t)
    n_vis = visible_count(len(coefficients), visible_fraction)

    x, y = 0.0, 0.0
    centers: List[Point] = []
    radii: List[float] = []
    angles: List[float] = []

    for c in list(coefficients)[:n_vis]:
        theta = c.angle_at(t)
        centers.append((x, y))
        radii.append(c.amplitude)
        angles.append(theta)
        x += c.amplitude * math.cos(theta)
        y += c.amplitude * math.sin(theta)

    return EpicycleChain(
        point=(x, y),
        centers=tuple(centers),
        radii=tuple(radii),
        angles=tuple(angles),
    )


def reconstruct_path(
    coefficients: Sequence[FourierCoefficient],
    n_samples: int,
    visible_fraction: float = 1.0,
    *,
    t: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Final reconstructed points over one period.

    Parameters
    ----------
    coefficients:
        Coefficients in chain order.
    n_samples:
        Number of evenly spaced times ``t_n = 2*pi*n/n_samples``.
    visible_fraction:
        As in :func:`reconstruct`.
    t:
        Optional explicit time vector; overrides ``n_samples``.

    Returns
    -------
    np.ndarray
        Array of shape ``(n_samples, 2)`` (or ``(len(t), 2)``).
    """
    if t is None:
        n_samples = int(n_samples)
        if n_samples <= 0:
            raise ValueError(f"n_samples must be > 0, got {n_samples}")
        tt = TWO_PI * np.arange(n_samples, dtype=float) / float(n_samples)
    else:
        tt = np.asarray(t, dtype=float).ravel()

    n_vis = visible_count(len(coefficients), visible_fraction)
    if n_vis == 0:
        return np.zeros((tt.size, 2), dtype=float)

    vis = list(coefficients)[:n_vis]
    freq = np.array([c.frequency for c in vis], dtype=float)
    amp = np.array([c.amplitude for c in vis], dtype=float)
    phase = np.array([c.phase for c in vis], dtype=float)

    theta = tt[:, None] * freq[None, :] + phase[None, :]  # (S, M)
    x = np.sum(amp[None, :] * np.cos(theta), axis=1)
    y = np.sum(amp[None, :] * np.sin(theta), axis=1)
    return np.column_stack([x, y])


def sample_time(n: int, n_samples: int) -> float:
    """Time of sample ``n`` out of ``n_samples`` per period."""
    n_samples = int(n_samples)
    if n_samples <= 0:
        raise ValueError(f"n_samples must be > 0, got {n_samples}")
    return TWO_PI * (int(n) % n_samples) / float(n_samples)
