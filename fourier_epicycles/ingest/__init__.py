"""Ingest package - point sources.

This package handles:
- Built-in shapes (square, regular polygons, star)
- Evenly spaced resampling of polylines at a caller-chosen spacing
- Reading ordered x/y point tables (CSV / whitespace text)

Design principle:
- Sources produce ``(N, 2)`` float arrays ordered along the path
- The closing point is never repeated; paths are implicitly closed
"""

from .readers import PointsData, read_points_csv
from .shapes import (
    BUILTIN_SHAPES,
    builtin_shape,
    regular_polygon,
    sample_polyline,
    square_path,
    star_polygon,
)

__all__ = [
    "PointsData",
    "read_points_csv",
    "BUILTIN_SHAPES",
    "builtin_shape",
    "regular_polygon",
    "sample_polyline",
    "square_path",
    "star_polygon",
]
