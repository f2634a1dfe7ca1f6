from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np
import ipywidgets as w
import matplotlib.pyplot as plt
from IPython.display import display

from fourier_epicycles.analysis.driver import EpicycleFrame
from fourier_epicycles.analysis.epicycles import reconstruct, reconstruct_path, sample_time
from fourier_epicycles.analysis.fourier import analyze
from fourier_epicycles.errors import EpicycleInputError
from fourier_epicycles.ingest.readers import read_points_csv
from fourier_epicycles.ingest.shapes import BUILTIN_SHAPES, builtin_shape, sample_polyline
from fourier_epicycles.models.coefficients import FourierCoefficient
from fourier_epicycles.presentation.render import draw_frame, plot_limits
from fourier_epicycles.scripts.io_coefficients import coefficients_to_dataframe, write_coefficients
from fourier_epicycles.validation.points import validate_points
from .log_view import HtmlLog


@dataclass
class EpicycleGuiState:
    points: Optional[np.ndarray] = None
    coefficients: Tuple[FourierCoefficient, ...] = ()
    source: str = ""
    settings: Dict[str, Any] = field(default_factory=dict)
    busy: bool = False

    @property
    def n_samples(self) -> int:
        return 0 if self.points is None else int(self.points.shape[0])


def _load_points(shape: str, csv_path: str, spacing: float, log: HtmlLog) -> Optional[np.ndarray]:
    sp = float(spacing) if spacing and spacing > 0 else None
    if shape == "csv":
        data = read_points_csv(csv_path.strip())
        if data.dropped_nonfinite_rows:
            log.warning(f"WARNING: dropped {data.dropped_nonfinite_rows} non-finite rows")
        pts = data.xy
        if sp is not None and data.validation.ok:
            pts = sample_polyline(pts, sp, closed=True)
    else:
        pts = builtin_shape(shape, sample_spacing=sp)
    return pts


def _frame_at(state: EpicycleGuiState, step: int, visible_fraction: float) -> EpicycleFrame:
    n = max(1, state.n_samples)
    step = int(step) % n
    t = sample_time(step, n)
    chain = reconstruct(state.coefficients, t, visible_fraction)
    times = 2.0 * np.pi * np.arange(step + 1, dtype=float) / n
    trace = reconstruct_path(state.coefficients, n, visible_fraction, t=times)
    return EpicycleFrame(
        index=step,
        t=t,
        chain=chain,
        trace=tuple(map(tuple, trace)),
        closed=(step + 1 == n),
    )


def build_epicycle_panel(state: Optional[EpicycleGuiState] = None, *, default_shape: str = "square") -> w.Widget:
    """
    Analyze + animate panel.

    Controls: point source (built-in shape or CSV), sampling spacing, analysis
    policy (drop DC, sort by amplitude, method), visible-fraction and time-step sliders.
    """
    state = state if state is not None else EpicycleGuiState()
    log = HtmlLog(title="Log")

    shape_options = [(name, name) for name in sorted(BUILTIN_SHAPES)] + [("CSV file", "csv")]
    dd_shape = w.Dropdown(options=shape_options, value=default_shape, description="Shape", layout=w.Layout(width="220px"))
    csv_path = w.Text(description="CSV", placeholder="path/to/points.csv", layout=w.Layout(width="60%"))
    spacing = w.BoundedFloatText(value=0.0, min=0.0, max=1e6, step=0.05, description="Spacing", layout=w.Layout(width="180px"))

    cb_drop_dc = w.Checkbox(value=False, description="Drop DC", indent=False, layout=w.Layout(width="110px"))
    cb_sort = w.Checkbox(value=True, description="Sort by amplitude", indent=False, layout=w.Layout(width="160px"))
    dd_method = w.Dropdown(options=[("direct", "direct"), ("fft", "fft")], value="direct", description="Method", layout=w.Layout(width="180px"))
    cb_circles = w.Checkbox(value=True, description="Circles", indent=False, layout=w.Layout(width="100px"))

    btn_analyze = w.Button(description="Analyze", button_style="primary")
    btn_table = w.Button(description="Show coefficients")

    sl_fraction = w.FloatSlider(value=1.0, min=0.0, max=1.0, step=0.01, description="Visible", continuous_update=False)
    sl_step = w.IntSlider(value=0, min=0, max=0, description="Step", continuous_update=False)
    play = w.Play(value=0, min=0, max=0, step=1, interval=100, description="Play")
    w.jslink((play, "value"), (sl_step, "value"))

    out = w.Output(layout=w.Layout(border="1px solid #ddd", padding="6px"))

    def _redraw(*_):
        if not state.coefficients and state.points is None:
            return
        with out:
            out.clear_output(wait=True)
            plt.close("all")
            fig, ax = plt.subplots(figsize=(5.0, 5.0))
            x0, x1, y0, y1 = plot_limits(state.coefficients)
            ax.set_xlim(x0, x1)
            ax.set_ylim(y0, y1)
            frame = _frame_at(state, sl_step.value, sl_fraction.value)
            draw_frame(ax, frame, show_circles=cb_circles.value, reference=state.points)
            ax.set_title(f"step {frame.index}/{state.n_samples}  epicycles {len(frame.chain)}/{len(state.coefficients)}")
            plt.show()

    def _analyze(_):
        if state.busy:
            return
        state.busy = True
        try:
            log.clear()
            try:
                pts = _load_points(dd_shape.value, csv_path.value, spacing.value, log)
            except (OSError, ValueError) as e:
                log.error(f"ERROR: {e}")
                return

            rep = validate_points(pts)
            log.report(rep)
            if not rep.ok:
                return

            try:
                coeffs = analyze(
                    pts,
                    drop_dc=cb_drop_dc.value,
                    sort_by_amplitude=cb_sort.value,
                    method=dd_method.value,
                )
            except EpicycleInputError as e:
                log.error(f"ERROR: {e}")
                return

            state.points = pts
            state.coefficients = coeffs
            state.source = csv_path.value.strip() if dd_shape.value == "csv" else dd_shape.value
            state.settings = {
                "drop_dc": bool(cb_drop_dc.value),
                "sort_by_amplitude": bool(cb_sort.value),
                "method": dd_method.value,
            }

            n = state.n_samples
            sl_step.max = n - 1
            play.max = n - 1
            sl_step.value = 0
            log.info(f"{len(coeffs)} coefficients from {n} points ({state.source}, {dd_method.value})")
            _redraw()
        finally:
            state.busy = False

    def _show_table(_):
        with out:
            out.clear_output(wait=True)
            if not state.coefficients:
                print("No coefficients yet. Click 'Analyze' first.")
                return
            display(coefficients_to_dataframe(state.coefficients))

    btn_analyze.on_click(_analyze)
    btn_table.on_click(_show_table)
    sl_step.observe(_redraw, names="value")
    sl_fraction.observe(_redraw, names="value")
    cb_circles.observe(_redraw, names="value")

    row_src = w.HBox([dd_shape, csv_path, spacing])
    row_policy = w.HBox([cb_drop_dc, cb_sort, dd_method, cb_circles, btn_analyze, btn_table])
    row_anim = w.HBox([play, sl_step, sl_fraction])
    return w.VBox([row_src, row_policy, row_anim, out, log.panel])


def build_export_panel(state: EpicycleGuiState) -> w.Widget:
    """Write the current coefficients to CSV or JSON."""
    log = HtmlLog(title="Export log", height_px=100)
    path = w.Text(description="File", placeholder="coefficients.csv", layout=w.Layout(width="60%"))
    btn = w.Button(description="Export", button_style="success")

    def _export(_):
        if not state.coefficients:
            log.warning("WARNING: nothing to export; run Analyze first")
            return
        target = path.value.strip()
        if not target:
            log.warning("WARNING: choose an output file")
            return
        try:
            meta = {"source": state.source, "n_points": state.n_samples}
            meta.update(state.settings)
            write_coefficients(state.coefficients, target, metadata=meta)
        except (OSError, ValueError) as e:
            log.error(f"ERROR: {e}")
            return
        log.info(f"wrote {len(state.coefficients)} coefficients to {target}")

    btn.on_click(_export)
    return w.VBox([w.HBox([path, btn]), log.panel])


def build_gui() -> w.Tab:
    """
    Notebook GUI entry point.

        from fourier_epicycles.gui.app import build_gui
        build_gui()
    """
    state = EpicycleGuiState()
    tabs = w.Tab(children=[build_epicycle_panel(state), build_export_panel(state)])
    tabs.set_title(0, "Epicycles")
    tabs.set_title(1, "Export")
    return tabs
