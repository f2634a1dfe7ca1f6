"""
Coefficient export / import.

The only externally meaningful data format of the package: one row per
epicycle with ``frequency, amplitude, phase``, in chain order.

Supported formats (chosen by file suffix)
-----------------------------------------
1) CSV:
   - ``# key: value`` provenance lines at the top
   - header ``frequency,amplitude,phase``
   - floats written with 17 significant digits (lossless round-trip)

2) JSON:
   - ``{"metadata": {...}, "coefficients": [{"frequency": k, "amplitude": a, "phase": p}, ...]}``

Examples
--------
>>> from fourier_epicycles.scripts.io_coefficients import write_coefficients, load_coefficients
>>> # write_coefficients(coeffs, "out/square.csv", metadata={"source": "square"})
>>> # coeffs2, meta = load_coefficients("out/square.csv")
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from fourier_epicycles.models.coefficients import FourierCoefficient

COLUMNS = ("frequency", "amplitude", "phase")


def now_iso() -> str:
    """Return current UTC time as ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def coefficients_to_dataframe(coefficients: Sequence[FourierCoefficient]) -> pd.DataFrame:
    """One row per coefficient, in the given order, plus derived ``re``/``im`` columns."""
    rows = [
        {
            "frequency": int(c.frequency),
            "amplitude": float(c.amplitude),
            "phase": float(c.phase),
            "re": c.re,
            "im": c.im,
        }
        for c in coefficients
    ]
    return pd.DataFrame(rows, columns=list(COLUMNS) + ["re", "im"])


def coefficients_from_dataframe(df: pd.DataFrame) -> Tuple[FourierCoefficient, ...]:
    """Inverse of :func:`coefficients_to_dataframe` (extra columns are ignored)."""
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Coefficient table requires columns {COLUMNS}. Missing={missing}. Present={list(df.columns)}")

    freq = df["frequency"].to_numpy()
    amp = df["amplitude"].to_numpy(dtype=float)
    phase = df["phase"].to_numpy(dtype=float)

    if not (np.all(np.isfinite(amp)) and np.all(np.isfinite(phase))):
        raise ValueError("Non-finite amplitude or phase in coefficient table")
    if np.any(amp < 0):
        raise ValueError("Negative amplitude in coefficient table")
    if not np.all(np.asarray(freq, dtype=float) == np.round(np.asarray(freq, dtype=float))):
        raise ValueError("Frequencies must be integers")

    return tuple(
        FourierCoefficient(frequency=int(k), amplitude=float(a), phase=float(p))
        for k, a, p in zip(freq, amp, phase)
    )


def build_metadata(coefficients: Sequence[FourierCoefficient], extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Flat provenance dictionary written alongside exported coefficients."""
    d: Dict[str, Any] = {
        "n_coefficients": len(coefficients),
        "timestamp": now_iso(),
    }
    if extra:
        for k, v in extra.items():
            d[str(k)] = v
    return d


def write_coefficients(
    coefficients: Sequence[FourierCoefficient],
    path: str,
    *,
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """Write coefficients to ``.csv`` or ``.json`` (by suffix)."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    meta = build_metadata(coefficients, metadata)
    suffix = out.suffix.lower()

    if suffix == ".csv":
        df = coefficients_to_dataframe(coefficients)[list(COLUMNS)]
        with open(out, "w", encoding="utf-8", newline="") as f:
            for k, v in meta.items():
                f.write(f"# {k}: {v}\n")
            df.to_csv(f, index=False, float_format="%.17g")
        return

    if suffix == ".json":
        payload = {
            "metadata": meta,
            "coefficients": [
                {"frequency": int(c.frequency), "amplitude": float(c.amplitude), "phase": float(c.phase)}
                for c in coefficients
            ],
        }
        out.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return

    raise ValueError(f"Unsupported coefficient format for '{out}'. Use .csv or .json.")


def _read_csv_metadata(p: Path) -> Dict[str, str]:
    meta: Dict[str, str] = {}
    with open(p, "r", encoding="utf-8") as f:
        for line in f:
            s = line.strip()
            if not s.startswith("#"):
                break
            key, sep, value = s[1:].partition(":")
            if sep:
                meta[key.strip()] = value.strip()
    return meta


def load_coefficients(path: str) -> Tuple[Tuple[FourierCoefficient, ...], Dict[str, Any]]:
    """Read coefficients written by :func:`write_coefficients`.

    Returns
    -------
    (coefficients, metadata)
    """
    p = Path(path)
    suffix = p.suffix.lower()

    if suffix == ".csv":
        df = pd.read_csv(p, comment="#")
        return coefficients_from_dataframe(df), _read_csv_metadata(p)

    if suffix == ".json":
        try:
            payload = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid coefficient JSON in {str(p)!r}") from e
        rows = payload.get("coefficients") if isinstance(payload, dict) else None
        if rows is None:
            raise ValueError(f"{p.name}: missing 'coefficients' list")
        df = pd.DataFrame(rows, columns=list(COLUMNS))
        return coefficients_from_dataframe(df), dict(payload.get("metadata") or {})

    raise ValueError(f"Unsupported coefficient format for '{p}'. Use .csv or .json.")
