"""Headless animation driver.

Advances time by ``2*pi/n_samples`` per tick, evaluates the epicycle chain,
and accumulates the reconstructed points into a :class:`TraceBuffer`. Time
wraps to 0 after a full revolution and the trace is reset at that boundary,
so no segment is ever drawn across the wrap.

Single-threaded: the driver is the only writer and reader of its trace.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from fourier_epicycles.analysis.epicycles import TWO_PI, clamp_fraction, reconstruct
from fourier_epicycles.analysis.trace import TraceBuffer
from fourier_epicycles.models.coefficients import EpicycleChain, FourierCoefficient, Point
from fourier_epicycles.models.profile import EpicycleProfile


@dataclass(frozen=True)
class EpicycleFrame:
    """Snapshot of one tick.

    Attributes
    ----------
    index:
        Sample step within the current period, ``0..n_samples-1``.
    t:
        Time at which the chain was evaluated.
    chain:
        Epicycle chain at ``t``.
    trace:
        Trace points of the current period, including this tick's point.
    closed:
        True when the trace covers the whole period.
    """

    index: int
    t: float
    chain: EpicycleChain
    trace: Tuple[Point, ...]
    closed: bool


class EpicycleDriver:
    """Frame-driven evaluation of a fixed coefficient set.

    ``n_samples`` defaults to ``max(frequency) + 1``, i.e. the number of input
    points the coefficients were computed from.
    """

    def __init__(
        self,
        coefficients: Sequence[FourierCoefficient],
        n_samples: Optional[int] = None,
        *,
        visible_fraction: float = 1.0,
    ) -> None:
        self._coefficients = tuple(coefficients)
        if n_samples is None:
            # One tick per input point; still correct after drop_dc or reordering.
            n_samples = max((c.frequency for c in self._coefficients), default=0) + 1
        n_samples = int(n_samples)
        if n_samples <= 0:
            raise ValueError(f"n_samples must be > 0, got {n_samples}")

        self._n_samples = n_samples
        self._step = 0
        self._visible_fraction = clamp_fraction(visible_fraction)
        self.trace = TraceBuffer(n_samples)

    @classmethod
    def from_profile(cls, coefficients: Sequence[FourierCoefficient], profile: EpicycleProfile) -> EpicycleDriver:
        return cls(coefficients, profile.n_samples, visible_fraction=profile.visible_fraction)

    @property
    def coefficients(self) -> Tuple[FourierCoefficient, ...]:
        return self._coefficients

    @property
    def n_samples(self) -> int:
        return self._n_samples

    @property
    def dt(self) -> float:
        return TWO_PI / self._n_samples

    @property
    def t(self) -> float:
        """Time of the next tick, always in ``[0, 2*pi)``."""
        return self._step * self.dt

    @property
    def visible_fraction(self) -> float:
        return self._visible_fraction

    @visible_fraction.setter
    def visible_fraction(self, value: float) -> None:
        self._visible_fraction = clamp_fraction(value)

    def tick(self) -> EpicycleFrame:
        """Evaluate the chain at the current time, record the point and advance."""
        if self._step == 0:
            self.trace.reset()

        index = self._step
        t = self.t
        chain = reconstruct(self._coefficients, t, self._visible_fraction)
        self.trace.push(chain.point)

        frame = EpicycleFrame(
            index=index,
            t=t,
            chain=chain,
            trace=self.trace.points,
            closed=self.trace.is_closed,
        )

        self._step = (self._step + 1) % self._n_samples
        return frame

    def frames(self, n: int) -> Iterator[EpicycleFrame]:
        """Yield ``n`` successive ticks."""
        for _ in range(int(n)):
            yield self.tick()

    def rewind(self) -> None:
        """Restart at ``t = 0`` with an empty trace."""
        self._step = 0
        self.trace.reset()

    def seek(self, step: int) -> None:
        """Make ``step`` (modulo ``n_samples``) the next tick.

        Sequential access is free. Any other jump rewinds and replays the
        period up to ``step`` so the trace matches the new position.
        """
        step = int(step) % self._n_samples
        if step == self._step:
            return
        self.rewind()
        for _ in range(step):
            self.tick()
