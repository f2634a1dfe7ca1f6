"""Tests for epicycle reconstruction.

Covers:
- inverse-DFT identity at the sample times
- periodicity in t
- progressive reveal (visible_fraction)
- square, single-point and zero-visibility scenarios
- vectorised path evaluation
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from fourier_epicycles.analysis.epicycles import (
    TWO_PI,
    clamp_fraction,
    reconstruct,
    reconstruct_path,
    sample_time,
    visible_count,
)
from fourier_epicycles.analysis.fourier import analyze, drop_dc, sort_by_amplitude
from fourier_epicycles.ingest.shapes import square_path, star_polygon

SQUARE = [(-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0)]


def _random_path(n: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.uniform(-3.0, 3.0, size=(n, 2))


# -----------------------------------------------------------------------
# Inverse-DFT identity
# -----------------------------------------------------------------------


@pytest.mark.parametrize("n,seed", [(1, 0), (2, 1), (7, 2), (16, 3), (33, 4)])
def test_round_trip_at_sample_times(n: int, seed: int) -> None:
    pts = _random_path(n, seed)
    coeffs = analyze(pts)
    for i in range(n):
        chain = reconstruct(coeffs, TWO_PI * i / n)
        np.testing.assert_allclose(chain.point, pts[i], atol=1e-9)


def test_square_round_trip() -> None:
    coeffs = analyze(SQUARE)
    for i, expected in enumerate(SQUARE):
        chain = reconstruct(coeffs, sample_time(i, 8), visible_fraction=1.0)
        assert chain.point == pytest.approx(expected, abs=1e-9)
        assert len(chain.centers) == 8


@pytest.mark.parametrize("method", ["direct", "fft"])
def test_sorting_keeps_final_point(method: str) -> None:
    pts = star_polygon()
    plain = analyze(pts, method=method)
    ordered = sort_by_amplitude(plain)
    n = len(pts)
    for i in range(n):
        a = reconstruct(plain, sample_time(i, n))
        b = reconstruct(ordered, sample_time(i, n))
        np.testing.assert_allclose(a.point, b.point, atol=1e-9)
        np.testing.assert_allclose(b.point, pts[i], atol=1e-9)


def test_dropping_dc_recentres_path() -> None:
    offset = np.array([4.0, -7.0])
    pts = square_path(2.0) + offset
    coeffs = drop_dc(analyze(pts))
    for i in range(len(pts)):
        chain = reconstruct(coeffs, sample_time(i, len(pts)))
        np.testing.assert_allclose(chain.point, pts[i] - offset, atol=1e-9)


# -----------------------------------------------------------------------
# Periodicity / purity
# -----------------------------------------------------------------------


@pytest.mark.parametrize("t", [0.0, 0.3, 1.7, 3.0, 5.9, -2.2])
def test_periodic_in_two_pi(t: float) -> None:
    coeffs = analyze(_random_path(12, 9), sort_by_amplitude=True)
    a = reconstruct(coeffs, t)
    b = reconstruct(coeffs, t + TWO_PI)
    np.testing.assert_allclose(a.point, b.point, atol=1e-9)
    np.testing.assert_allclose(np.array(a.centers), np.array(b.centers), atol=1e-9)


def test_reconstruct_is_memoryless() -> None:
    coeffs = analyze(SQUARE)
    first = reconstruct(coeffs, 1.234, 0.6)
    reconstruct(coeffs, 4.0, 0.1)
    assert reconstruct(coeffs, 1.234, 0.6) == first


def test_chain_geometry() -> None:
    coeffs = analyze(_random_path(9, 21))
    chain = reconstruct(coeffs, 0.77)

    assert chain.centers[0] == (0.0, 0.0)
    assert len(chain.radii) == len(chain.angles) == len(chain.centers) == 9
    tips = chain.tips()
    assert tips[-1] == chain.point
    for center, tip, r, ang in zip(chain.centers, tips, chain.radii, chain.angles):
        assert tip[0] == pytest.approx(center[0] + r * math.cos(ang))
        assert tip[1] == pytest.approx(center[1] + r * math.sin(ang))


# -----------------------------------------------------------------------
# Visible fraction
# -----------------------------------------------------------------------


def test_visible_count_rounds_up() -> None:
    assert visible_count(8, 1.0) == 8
    assert visible_count(8, 0.5) == 4
    assert visible_count(8, 0.51) == 5
    assert visible_count(8, 0.01) == 1
    assert visible_count(8, 0.0) == 0
    assert visible_count(8, 2.0) == 8
    assert visible_count(8, -1.0) == 0
    assert visible_count(0, 1.0) == 0


def test_clamp_fraction_nan_is_zero() -> None:
    assert clamp_fraction(float("nan")) == 0.0
    assert clamp_fraction(0.25) == 0.25


def test_monotone_reveal() -> None:
    coeffs = analyze(_random_path(20, 13), sort_by_amplitude=True)
    t = 2.1
    prev = reconstruct(coeffs, t, 0.0).centers
    for f in np.linspace(0.0, 1.0, 41):
        cur = reconstruct(coeffs, t, float(f)).centers
        assert len(cur) >= len(prev)
        assert cur[: len(prev)] == prev
        prev = cur
    assert len(prev) == 20


@pytest.mark.parametrize("t", [0.0, 1.0, 4.5])
def test_zero_visibility(t: float) -> None:
    chain = reconstruct(analyze(SQUARE), t, visible_fraction=0.0)
    assert chain.point == (0.0, 0.0)
    assert chain.centers == ()
    assert len(chain) == 0


def test_empty_coefficients() -> None:
    chain = reconstruct((), 1.0)
    assert chain.point == (0.0, 0.0)
    assert chain.centers == ()
    assert chain.tips() == ()


def test_single_point_reconstructs_everywhere() -> None:
    coeffs = analyze([(5.0, 5.0)])
    for t in (0.0, 1.0, 2.5, 6.0):
        assert reconstruct(coeffs, t).point == pytest.approx((5.0, 5.0))
    assert reconstruct(drop_dc(coeffs), 1.0).point == (0.0, 0.0)


# -----------------------------------------------------------------------
# Vectorised path
# -----------------------------------------------------------------------


def test_reconstruct_path_matches_pointwise() -> None:
    coeffs = analyze(_random_path(10, 17), sort_by_amplitude=True)
    path = reconstruct_path(coeffs, 25, visible_fraction=0.4)
    assert path.shape == (25, 2)
    for i in range(25):
        chain = reconstruct(coeffs, sample_time(i, 25), 0.4)
        np.testing.assert_allclose(path[i], chain.point, atol=1e-12)


def test_reconstruct_path_recovers_samples() -> None:
    pts = _random_path(14, 23)
    np.testing.assert_allclose(reconstruct_path(analyze(pts), 14), pts, atol=1e-9)


def test_reconstruct_path_explicit_times_and_errors() -> None:
    coeffs = analyze(SQUARE)
    out = reconstruct_path(coeffs, 0, t=np.array([0.0, TWO_PI / 8]))
    np.testing.assert_allclose(out, np.array(SQUARE[:2], dtype=float), atol=1e-9)
    np.testing.assert_array_equal(reconstruct_path(coeffs, 4, visible_fraction=0.0), np.zeros((4, 2)))
    with pytest.raises(ValueError):
        reconstruct_path(coeffs, 0)
    with pytest.raises(ValueError):
        sample_time(0, 0)


def test_chain_angles_come_from_coefficients() -> None:
    coeffs = analyze(star_polygon(), sort_by_amplitude=True)
    t = 1.3
    chain = reconstruct(coeffs, t)
    assert chain.angles == tuple(c.angle_at(t) for c in coeffs)
