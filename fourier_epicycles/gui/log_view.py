from __future__ import annotations

import html
import io
import re
from contextlib import redirect_stderr, redirect_stdout
from dataclasses import dataclass
from typing import List, Literal, Optional

import ipywidgets as w

from fourier_epicycles.validation.points import ValidationResult

Level = Literal["info", "warning", "error"]

_COLORS = {
    "error": "#b00020",
    "warning": "#b26a00",
    "info": "#222222",
}


@dataclass
class _Entry:
    level: Level
    message: str
    count: int = 1


class HtmlLog:
    """
    Notebook log panel rendered into a single HTML widget.

    - warnings in orange, errors in red
    - consecutive identical messages are coalesced (shown as xN)
    - history is bounded to ``max_entries``
    - :meth:`capture` routes printed lines through the same severity rules
    """

    def __init__(self, *, title: str | None = None, height_px: int = 160, max_entries: int = 500) -> None:
        self._entries: List[_Entry] = []
        self._height_px = int(height_px)
        self._max_entries = int(max_entries)
        self.widget = w.HTML()
        if title:
            self.panel = w.VBox([w.HTML(f"<b>{html.escape(str(title))}</b>"), self.widget])
        else:
            self.panel = self.widget
        self.clear()

    @property
    def entries(self) -> List[tuple[str, str, int]]:
        return [(e.level, e.message, e.count) for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()
        self._render()

    def info(self, message: str) -> None:
        self._add("info", message)

    def warning(self, message: str) -> None:
        self._add("warning", message)

    def error(self, message: str) -> None:
        self._add("error", message)

    def report(self, result: ValidationResult) -> None:
        """Log every error and warning of a point validation."""
        for e in result.errors:
            self.error(f"ERROR: {e}")
        for msg in result.warnings:
            self.warning(f"WARNING: {msg}")
        if result.ok:
            self.info(f"{result.n_points} points OK")

    def capture(self) -> "_Capture":
        """Context manager capturing stdout/stderr into this log, line by line."""
        return _Capture(self)

    @staticmethod
    def classify(line: str) -> Level:
        s = (line or "").lstrip()
        if s.startswith(("ERROR:", "Error:", "Traceback", "[error]")):
            return "error"
        if s.startswith(("WARNING:", "Warning:", "[warn]")):
            return "warning"
        return "info"

    def write(self, message: str) -> None:
        """Route free text (HTML tags stripped) through :meth:`classify`."""
        plain = re.sub(r"<[^>]+>", "", "" if message is None else str(message))
        for line in plain.splitlines() or [""]:
            self._add(self.classify(line), line)

    def _add(self, level: Level, message: str) -> None:
        msg = "" if message is None else str(message)

        if self._entries and self._entries[-1].level == level and self._entries[-1].message == msg:
            self._entries[-1].count += 1
        else:
            self._entries.append(_Entry(level=level, message=msg))
            if len(self._entries) > self._max_entries:
                self._entries = self._entries[-self._max_entries :]
        self._render()

    def _render(self) -> None:
        rows = []
        for e in self._entries:
            suffix = f" (x{e.count})" if e.count > 1 else ""
            rows.append(
                f"<div style='color:{_COLORS[e.level]}; white-space:pre-wrap; font-family:monospace;'>"
                f"{html.escape(e.message)}{html.escape(suffix)}</div>"
            )
        inner = "".join(rows) if rows else "<div style='color:#666;'>Log is empty.</div>"
        self.widget.value = (
            f"<div style='border:1px solid #ddd; padding:6px; height:{self._height_px}px; "
            f"overflow-y:auto; background:#fff;'>{inner}</div>"
        )


class _Capture:
    def __init__(self, log: HtmlLog) -> None:
        self._log = log
        self._buf = io.StringIO()
        self._cm_out: Optional[redirect_stdout] = None
        self._cm_err: Optional[redirect_stderr] = None

    def __enter__(self) -> "_Capture":
        self._cm_out = redirect_stdout(self._buf)
        self._cm_err = redirect_stderr(self._buf)
        self._cm_out.__enter__()
        self._cm_err.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if self._cm_err is not None:
                self._cm_err.__exit__(exc_type, exc, tb)
        finally:
            if self._cm_out is not None:
                self._cm_out.__exit__(exc_type, exc, tb)

        for line in self._buf.getvalue().splitlines():
            self._log.write(line)
        return False
