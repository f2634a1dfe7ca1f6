from __future__ import annotations

from typing import List, Tuple

from fourier_epicycles.models.coefficients import Point


class TraceBuffer:
    """Reconstructed points of the current period, in tick order.

    The buffer holds at most ``period`` points (one per sample step). Once it is
    full, :meth:`segments` closes the loop back to the first point. The owner
    must call :meth:`reset` when its time counter completes a revolution;
    pushing into a full buffer is an error rather than a silent overwrite.
    """

    def __init__(self, period: int) -> None:
        period = int(period)
        if period <= 0:
            raise ValueError(f"period must be > 0, got {period}")
        self._period = period
        self._points: List[Point] = []

    @property
    def period(self) -> int:
        return self._period

    @property
    def points(self) -> Tuple[Point, ...]:
        """Read-only view of the accumulated points."""
        return tuple(self._points)

    @property
    def is_closed(self) -> bool:
        return len(self._points) == self._period

    def __len__(self) -> int:
        return len(self._points)

    def push(self, point: Point) -> None:
        if self.is_closed:
            raise ValueError(
                f"Trace buffer is full ({self._period} points); reset() must be called at the period wrap"
            )
        x, y = point
        self._points.append((float(x), float(y)))

    def reset(self) -> None:
        self._points.clear()

    def segments(self) -> List[Tuple[Point, Point]]:
        """Consecutive point pairs; includes the closing segment once the period is complete."""
        pts = self._points
        segs = [(pts[i], pts[i + 1]) for i in range(len(pts) - 1)]
        if self.is_closed and len(pts) > 1:
            segs.append((pts[-1], pts[0]))
        return segs
