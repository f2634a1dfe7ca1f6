"""Built-in point sources.

All functions return an ``(N, 2)`` float array ordered along the path, with
the closing point omitted (the path is implicitly closed).
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Optional

import numpy as np

from fourier_epicycles.validation.points import check_points


def square_path(half_size: float = 1.0) -> np.ndarray:
    """Corners and edge midpoints of an axis-aligned square, clockwise from the top-left corner."""
    h = float(half_size)
    return np.array(
        [
            (-h, h),
            (0.0, h),
            (h, h),
            (h, 0.0),
            (h, -h),
            (0.0, -h),
            (-h, -h),
            (-h, 0.0),
        ],
        dtype=float,
    )


def regular_polygon(n_vertices: int, radius: float = 1.0, phase: float = 0.0) -> np.ndarray:
    """Vertices of a regular polygon, counter-clockwise, first vertex at angle ``phase``."""
    n = int(n_vertices)
    if n < 3:
        raise ValueError(f"n_vertices must be >= 3, got {n_vertices}")
    ang = float(phase) + 2.0 * math.pi * np.arange(n, dtype=float) / n
    return float(radius) * np.column_stack([np.cos(ang), np.sin(ang)])


def star_polygon(n_tips: int = 5, outer: float = 1.0, inner: float = 0.4) -> np.ndarray:
    """Alternating outer/inner vertices of a star, first tip pointing up."""
    n = int(n_tips)
    if n < 2:
        raise ValueError(f"n_tips must be >= 2, got {n_tips}")
    k = np.arange(2 * n, dtype=float)
    ang = math.pi / 2.0 + math.pi * k / n
    r = np.where(k % 2 == 0, float(outer), float(inner))
    return np.column_stack([r * np.cos(ang), r * np.sin(ang)])


def sample_polyline(vertices: Any, spacing: float, *, closed: bool = True) -> np.ndarray:
    """Resample a polyline at (at most) ``spacing`` arc length between neighbours.

    The number of samples is ``ceil(L / spacing)`` for total length ``L``, and the
    samples are spread evenly along the arc so that they stay equally spaced in
    time once fed to the analyzer.

    Parameters
    ----------
    vertices:
        Polyline vertices, any input accepted by the analyzer.
    spacing:
        Maximum distance between consecutive samples (same unit as the vertices).
    closed:
        Include the segment from the last vertex back to the first.

    Returns
    -------
    np.ndarray
        ``(n, 2)`` samples starting at the first vertex. A zero-length polyline
        yields its first vertex only.
    """
    spacing = float(spacing)
    if not spacing > 0 or not math.isfinite(spacing):
        raise ValueError(f"spacing must be a positive finite number, got {spacing}")

    xy = check_points(vertices)
    path = np.vstack([xy, xy[:1]]) if closed else xy

    seg = np.hypot(np.diff(path[:, 0]), np.diff(path[:, 1]))
    s = np.concatenate([[0.0], np.cumsum(seg)])
    L = float(s[-1])
    if L <= 0.0:
        return xy[:1].copy()

    n = max(1, int(math.ceil(L / spacing)))
    if closed:
        s_new = L * np.arange(n, dtype=float) / n
    else:
        s_new = np.linspace(0.0, L, n + 1)

    x = np.interp(s_new, s, path[:, 0])
    y = np.interp(s_new, s, path[:, 1])
    return np.column_stack([x, y])


BUILTIN_SHAPES: Dict[str, Callable[[], np.ndarray]] = {
    "square": square_path,
    "triangle": lambda: regular_polygon(3, phase=math.pi / 2.0),
    "hexagon": lambda: regular_polygon(6),
    "star": star_polygon,
}


def builtin_shape(name: str, sample_spacing: Optional[float] = None) -> np.ndarray:
    """Points of a named built-in shape, optionally resampled along its outline."""
    try:
        make = BUILTIN_SHAPES[name]
    except KeyError:
        raise ValueError(f"Unknown shape {name!r}. Available: {sorted(BUILTIN_SHAPES)}") from None
    pts = make()
    if sample_spacing is not None:
        pts = sample_polyline(pts, sample_spacing, closed=True)
    return pts
