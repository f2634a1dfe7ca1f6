"""Epicycle profile -- bundles all configuration that affects the drawing.

An EpicycleProfile groups every parameter that changes the coefficients, the
reconstruction or the rendered animation into one frozen dataclass.  It can be:

- Constructed with defaults and overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance (see :func:`save_profile`)
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

TRANSFORM_METHODS = ("direct", "fft")


@dataclass(frozen=True)
class EpicycleProfile:
    """Frozen configuration for analysis, reconstruction and rendering.

    Analysis
    --------
    drop_dc : bool
        Remove the k=0 coefficient so the drawing is centred on the origin.
    sort_by_amplitude : bool
        Order epicycles by descending radius (largest circle first).
    method : str
        ``"direct"`` (O(N^2) definition) or ``"fft"`` (numpy fast path).

    Reconstruction
    --------------
    visible_fraction : float
        Share of epicycles drawn, in [0, 1].
    n_samples : int or None
        Ticks per period for the animation driver. ``None`` means one tick per
        input point.

    Input / rendering
    -----------------
    sample_spacing : float or None
        Spacing used when sampling polylines into points. ``None`` keeps the
        vertices as given.
    fps : int
        Frames per second for saved animations.
    show_circles : bool
        Draw the epicycle circles (arrows and trace are always drawn).
    """

    drop_dc: bool = False
    sort_by_amplitude: bool = False
    method: str = "direct"

    visible_fraction: float = 1.0
    n_samples: Optional[int] = None

    sample_spacing: Optional[float] = None
    fps: int = 30
    show_circles: bool = True

    def __post_init__(self) -> None:
        if self.method not in TRANSFORM_METHODS:
            raise ValueError(f"method must be one of {TRANSFORM_METHODS}, got {self.method!r}")
        if not (0.0 <= float(self.visible_fraction) <= 1.0):
            raise ValueError(f"visible_fraction must be in [0, 1], got {self.visible_fraction}")
        if self.n_samples is not None and int(self.n_samples) <= 0:
            raise ValueError(f"n_samples must be > 0, got {self.n_samples}")
        if self.sample_spacing is not None and not float(self.sample_spacing) > 0:
            raise ValueError(f"sample_spacing must be > 0, got {self.sample_spacing}")
        if int(self.fps) <= 0:
            raise ValueError(f"fps must be > 0, got {self.fps}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> EpicycleProfile:
        """Reconstruct from a dict (e.g. loaded from JSON). Unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown EpicycleProfile keys: {unknown}")
        return cls(**dict(d))


def save_profile(profile: EpicycleProfile, path: str) -> None:
    """Write the profile as a JSON sidecar."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(profile.to_dict(), indent=2, sort_keys=True), encoding="utf-8")


def load_profile(path: str) -> EpicycleProfile:
    """Read a profile written by :func:`save_profile`."""
    try:
        d = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid profile JSON in {path!r}") from e
    if not isinstance(d, dict):
        raise ValueError(f"Profile file {path!r} must contain a JSON object")
    return EpicycleProfile.from_dict(d)
