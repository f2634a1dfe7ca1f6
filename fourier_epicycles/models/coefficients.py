from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class FourierCoefficient:
    """One epicycle of the reconstruction chain.

    Attributes
    ----------
    frequency:
        Harmonic index ``k`` (``0..N-1``). The epicycle turns ``k`` times per period.
    amplitude:
        Magnitude of the complex coefficient, i.e. the circle radius. Always ``>= 0``.
    phase:
        Angle of the complex coefficient in ``(-pi, pi]``, i.e. the rotation offset at ``t = 0``.

    Notes
    -----
    Normalization is ``sum / N`` so that ``amplitude`` is the true radius of the
    circle rather than a value scaled by the number of samples.
    """

    frequency: int
    amplitude: float
    phase: float

    @property
    def re(self) -> float:
        return self.amplitude * math.cos(self.phase)

    @property
    def im(self) -> float:
        return self.amplitude * math.sin(self.phase)

    def as_complex(self) -> complex:
        return complex(self.re, self.im)

    def angle_at(self, t: float) -> float:
        """Rotation angle of this epicycle at time ``t`` (radians)."""
        return self.frequency * t + self.phase

    @classmethod
    def from_complex(cls, frequency: int, c: complex) -> FourierCoefficient:
        """Build from a normalized complex coefficient (keeps ``atan2(im, re)`` order)."""
        phase = math.atan2(c.imag, c.real)
        # atan2 returns -pi for a negative real axis with im == -0.0; fold into (-pi, pi].
        if phase <= -math.pi:
            phase = math.pi
        return cls(
            frequency=int(frequency),
            amplitude=math.hypot(c.real, c.imag),
            phase=phase,
        )


@dataclass(frozen=True)
class EpicycleChain:
    """Result of evaluating the epicycle chain at one time value.

    Attributes
    ----------
    point:
        Reconstructed point (tip of the last visible epicycle).
    centers:
        Center of each visible epicycle, in chain order. ``centers[0]`` is the origin.
    radii:
        Radius of each visible epicycle (same length as ``centers``).
    angles:
        Rotation angle of each visible epicycle at the evaluated time.
    """

    point: Point
    centers: Tuple[Point, ...] = ()
    radii: Tuple[float, ...] = ()
    angles: Tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.centers)

    def tips(self) -> Tuple[Point, ...]:
        """End point of each visible epicycle (the next center, or ``point`` for the last)."""
        if not self.centers:
            return ()
        return tuple(self.centers[1:]) + (self.point,)
