from __future__ import annotations

"""Headless smoke tests for the notebook GUI.

These tests run without a display and verify that:
1. panel builders return valid ipywidgets containing an Output plot area
2. clicking Analyze fills the shared state
3. the export tab writes the analyzed coefficients
"""

import matplotlib

matplotlib.use("Agg")

import ipywidgets as w
import pytest

from fourier_epicycles.scripts.io_coefficients import load_coefficients


def _walk(widget):
    yield widget
    for child in getattr(widget, "children", ()):
        yield from _walk(child)


def _find(widget, cls, description=None):
    for wd in _walk(widget):
        if isinstance(wd, cls) and (description is None or wd.description == description):
            return wd
    return None


def test_build_gui_has_two_tabs():
    from fourier_epicycles.gui.app import build_gui

    gui = build_gui()

    assert isinstance(gui, w.Tab)
    assert len(gui.children) == 2


def test_epicycle_panel_creates_output_widget():
    from fourier_epicycles.gui.app import build_epicycle_panel

    panel = build_epicycle_panel()

    assert isinstance(panel, w.Widget)
    assert _find(panel, w.Output) is not None, "Epicycle panel should contain an Output widget for plots"
    assert _find(panel, w.Play) is not None


def test_analyze_button_fills_state():
    from fourier_epicycles.gui.app import EpicycleGuiState, build_epicycle_panel

    state = EpicycleGuiState()
    panel = build_epicycle_panel(state, default_shape="square")

    _find(panel, w.Button, "Analyze").click()

    assert state.n_samples == 8
    assert len(state.coefficients) == 8
    assert state.coefficients[0].frequency == 7
    assert state.source == "square"
    assert state.settings["method"] == "direct"
    assert _find(panel, w.IntSlider, "Step").max == 7
    assert not state.busy


def test_analyze_with_missing_csv_keeps_state_empty(tmp_path):
    from fourier_epicycles.gui.app import EpicycleGuiState, build_epicycle_panel

    state = EpicycleGuiState()
    panel = build_epicycle_panel(state)
    _find(panel, w.Dropdown, "Shape").value = "csv"
    _find(panel, w.Text, "CSV").value = str(tmp_path / "missing.csv")

    _find(panel, w.Button, "Analyze").click()

    assert state.points is None
    assert state.coefficients == ()


def test_export_tab_writes_coefficients(tmp_path):
    from fourier_epicycles.gui.app import EpicycleGuiState, build_epicycle_panel, build_export_panel

    state = EpicycleGuiState()
    panel = build_epicycle_panel(state, default_shape="hexagon")
    export = build_export_panel(state)

    _find(panel, w.Button, "Analyze").click()
    target = tmp_path / "hex.json"
    _find(export, w.Text, "File").value = str(target)
    _find(export, w.Button, "Export").click()

    loaded, meta = load_coefficients(str(target))
    assert loaded == state.coefficients
    assert meta["source"] == "hexagon"
    assert meta["n_points"] == 6


class TestHtmlLog:
    def test_coalesces_repeats(self):
        from fourier_epicycles.gui.log_view import HtmlLog

        log = HtmlLog()
        log.warning("same")
        log.warning("same")
        log.info("other")

        assert log.entries == [("warning", "same", 2), ("info", "other", 1)]
        assert "(x2)" in log.widget.value

    @pytest.mark.parametrize(
        "line,level",
        [
            ("ERROR: boom", "error"),
            ("Traceback (most recent call last):", "error"),
            ("[warn] careful", "warning"),
            ("WARNING: careful", "warning"),
            ("[info] fine", "info"),
        ],
    )
    def test_classify(self, line, level):
        from fourier_epicycles.gui.log_view import HtmlLog

        assert HtmlLog.classify(line) == level

    def test_capture_and_bounded_history(self):
        from fourier_epicycles.gui.log_view import HtmlLog

        log = HtmlLog(max_entries=3)
        with log.capture():
            print("[warn] a")
            print("b")
            print("[error] c")
            print("d")

        assert [e[1] for e in log.entries] == ["b", "[error] c", "d"]
        assert log.entries[1][0] == "error"

    def test_report_validation(self):
        from fourier_epicycles.gui.log_view import HtmlLog
        from fourier_epicycles.validation.points import validate_points

        log = HtmlLog(title="Log")
        assert isinstance(log.panel, w.VBox)

        log.report(validate_points([(0, 0), (0, 0)]))
        levels = [e[0] for e in log.entries]
        assert levels.count("warning") == 2
        assert log.entries[-1] == ("info", "2 points OK", 1)

        log.clear()
        log.report(validate_points([]))
        assert log.entries[0][0] == "error"
