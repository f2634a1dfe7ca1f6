import json

import pandas as pd
import pytest

from fourier_epicycles.analysis.fourier import analyze
from fourier_epicycles.ingest.shapes import star_polygon
from fourier_epicycles.scripts.io_coefficients import (
    coefficients_from_dataframe,
    coefficients_to_dataframe,
    load_coefficients,
    write_coefficients,
)


def _assert_same(a, b):
    assert len(a) == len(b)
    for x, y in zip(a, b):
        assert x.frequency == y.frequency
        assert x.amplitude == pytest.approx(y.amplitude, rel=1e-15, abs=1e-300)
        assert x.phase == pytest.approx(y.phase, rel=1e-15, abs=1e-300)


def test_csv_reload_keeps_order_and_metadata(tmp_path):
    coeffs = analyze(star_polygon(), drop_dc=True, sort_by_amplitude=True)
    out = tmp_path / "sub" / "star.csv"

    write_coefficients(coeffs, str(out), metadata={"source": "star"})

    text = out.read_text(encoding="utf-8")
    assert text.startswith("# n_coefficients: 9\n")
    assert "frequency,amplitude,phase" in text

    loaded, meta = load_coefficients(str(out))
    _assert_same(loaded, coeffs)
    assert meta["source"] == "star"
    assert meta["n_coefficients"] == "9"
    assert "timestamp" in meta


def test_json_reload(tmp_path):
    coeffs = analyze(star_polygon())
    out = tmp_path / "star.json"

    write_coefficients(coeffs, str(out), metadata={"n_points": 10})

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["metadata"]["n_coefficients"] == 10
    assert payload["coefficients"][0] == {
        "frequency": 0,
        "amplitude": coeffs[0].amplitude,
        "phase": coeffs[0].phase,
    }

    loaded, meta = load_coefficients(str(out))
    assert loaded == coeffs
    assert meta["n_points"] == 10


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError, match="Unsupported coefficient format"):
        write_coefficients(analyze([(0, 0), (1, 1)]), str(tmp_path / "c.txt"))
    with pytest.raises(ValueError, match="Unsupported coefficient format"):
        load_coefficients(str(tmp_path / "c.parquet"))


def test_invalid_json(tmp_path):
    p = tmp_path / "c.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid coefficient JSON"):
        load_coefficients(str(p))

    p.write_text(json.dumps({"metadata": {}}), encoding="utf-8")
    with pytest.raises(ValueError, match="missing 'coefficients'"):
        load_coefficients(str(p))


def test_dataframe_helpers():
    coeffs = analyze([(1, 0), (0, 1), (-1, 0), (0, -1)])
    df = coefficients_to_dataframe(coeffs)

    assert list(df.columns) == ["frequency", "amplitude", "phase", "re", "im"]
    assert df["re"].iloc[1] == pytest.approx(1.0)
    assert coefficients_from_dataframe(df) == coeffs


@pytest.mark.parametrize(
    "frame,match",
    [
        (pd.DataFrame({"frequency": [1], "amplitude": [1.0]}), "Missing"),
        (pd.DataFrame({"frequency": [1], "amplitude": [-1.0], "phase": [0.0]}), "Negative amplitude"),
        (pd.DataFrame({"frequency": [1], "amplitude": [float("nan")], "phase": [0.0]}), "Non-finite"),
        (pd.DataFrame({"frequency": [1.5], "amplitude": [1.0], "phase": [0.0]}), "integers"),
    ],
)
def test_dataframe_rejects_bad_tables(frame, match):
    with pytest.raises(ValueError, match=match):
        coefficients_from_dataframe(frame)
