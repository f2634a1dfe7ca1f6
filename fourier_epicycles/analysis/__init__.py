"""Analysis package.

Design principle:
  - The analyzer turns an ordered, closed point path into immutable coefficients.
  - The reconstructor is a pure function of (coefficients, t, visible_fraction).
  - Trace accumulation and time wrapping belong to the driver.

Time convention:
  - ``t`` is an angle in radians; point ``n`` of ``N`` is sampled at ``2*pi*n/N``.
"""

from .fourier import (
    analyze,
    analyze_with_profile,
    centroid,
    dft_direct,
    dft_fft,
    drop_dc,
    sort_by_amplitude,
)
from .epicycles import reconstruct, reconstruct_path, sample_time, visible_count
from .trace import TraceBuffer
from .driver import EpicycleDriver, EpicycleFrame

__all__ = [
    "analyze",
    "analyze_with_profile",
    "centroid",
    "dft_direct",
    "dft_fft",
    "drop_dc",
    "sort_by_amplitude",
    "reconstruct",
    "reconstruct_path",
    "sample_time",
    "visible_count",
    "TraceBuffer",
    "EpicycleDriver",
    "EpicycleFrame",
]
