"""
Point table reader.

Reads an ordered ``x, y`` table into an ``(N, 2)`` array ready for
:func:`fourier_epicycles.analysis.analyze`.

Supported inputs
----------------
- comma, semicolon or whitespace separated numeric text
- headered or headerless (auto-detected from the first data line)
- ``#`` comment lines are ignored

If headered, we accept canonical names or common aliases:
  - x / X / re / real -> x
  - y / Y / im / imag -> y

Examples
--------
>>> from fourier_epicycles.ingest.readers import read_points_csv
>>> # pts = read_points_csv("outline.csv")
>>> # pts.xy.shape
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from fourier_epicycles.validation.points import ValidationResult, validate_points

_SEP_REGEX = r"[\s,;]+"
_X_ALIASES = ("x", "X", "re", "real")
_Y_ALIASES = ("y", "Y", "im", "imag")


@dataclass(frozen=True)
class PointsData:
    """Points read from one file.

    Attributes
    ----------
    source_path:
        File the points came from.
    xy:
        Float array of shape ``(N, 2)`` in file order.
    validation:
        Result of :func:`validate_points` on ``xy``.
    dropped_nonfinite_rows:
        Rows removed because ``drop_nonfinite`` was requested.
    """

    source_path: str
    xy: np.ndarray
    validation: ValidationResult
    dropped_nonfinite_rows: int = 0

    @property
    def n_points(self) -> int:
        return int(self.xy.shape[0])


def _first_data_line(p: Path) -> Optional[str]:
    with open(p, "r", encoding="utf-8") as f:
        for line in f:
            s = line.strip()
            if s and not s.startswith("#"):
                return s
    return None


def _looks_like_header(line: str) -> bool:
    for tok in re.split(_SEP_REGEX, line.strip()):
        if not tok:
            continue
        try:
            float(tok)
        except ValueError:
            return True
    return False


def _resolve_column(columns, aliases) -> Optional[str]:
    colset = set(columns)
    for c in aliases:
        if c in colset:
            return c
    return None


def read_points_csv(
    path: str,
    *,
    has_header: Optional[bool] = None,
    drop_nonfinite: bool = False,
) -> PointsData:
    """
    Read an ordered point table.

    Parameters
    ----------
    path:
        Text file with at least two numeric columns.
    has_header:
        Force header / headerless mode. ``None`` auto-detects.
    drop_nonfinite:
        Remove rows with NaN/Inf coordinates instead of reporting them as errors.

    Returns
    -------
    PointsData

    Raises
    ------
    ValueError
        File has no data, fewer than two columns, or missing x/y header columns.
    """
    p = Path(path)
    first = _first_data_line(p)
    if first is None:
        raise ValueError(f"Empty point file: {str(p)!r}")

    if has_header is None:
        has_header = _looks_like_header(first)

    if has_header:
        df = pd.read_csv(p, sep=_SEP_REGEX, comment="#", engine="python")
        xcol = _resolve_column(df.columns, _X_ALIASES)
        ycol = _resolve_column(df.columns, _Y_ALIASES)
        if xcol is None or ycol is None:
            raise ValueError(
                f"{p.name}: header mode requires x/y columns (aliases {_X_ALIASES} / {_Y_ALIASES}). "
                f"Present={list(df.columns)}"
            )
        df = df[[xcol, ycol]].rename(columns={xcol: "x", ycol: "y"})
    else:
        df = pd.read_csv(p, sep=_SEP_REGEX, comment="#", header=None, engine="python")
        if df.shape[1] < 2:
            raise ValueError(f"{p.name}: expected >= 2 columns, got {df.shape[1]}")
        df = df.iloc[:, :2]
        df.columns = ["x", "y"]

    try:
        df = df.astype(np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{p.name}: x/y columns must be numeric") from e

    dropped = 0
    if drop_nonfinite:
        mask = np.isfinite(df["x"].to_numpy()) & np.isfinite(df["y"].to_numpy())
        dropped = int((~mask).sum())
        df = df.loc[mask].reset_index(drop=True)

    xy = df[["x", "y"]].to_numpy(dtype=np.float64)
    return PointsData(
        source_path=str(p),
        xy=xy,
        validation=validate_points(xy),
        dropped_nonfinite_rows=dropped,
    )
