"""Desktop viewer: reading charts on one side, comparison matrices on the other."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from matplotlib.figure import Figure

from impview.calculators import (
    CalculatorError,
    DefaultCalculator,
    MatrixValueCalculator,
    ScriptCalculator,
)
from impview.matrix import Color, ComparisonMatrix, Workspace
from impview.reading import ImpedanceReading, Point, ReadingError, load_reading

try:
    import tkinter as tk
    from tkinter import filedialog, messagebox

    from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
except ImportError:  # tkinter is an optional part of some Python installs
    tk = None  # type: ignore[assignment]

MAGNITUDE = "Magnitude"
PHASE = "Phase"

_READING_FILE_TYPES = [("Text files", "*.txt *.csv *.lvm"), ("All Files", "*")]
_SCRIPT_FILE_TYPES = [
    ("Python Files", "*.py"),
    ("Text Files", "*.txt"),
    ("All Files", "*"),
]
_EMPTY_CELL_BG = "white"
_GLOW_COLOR = "lightgray"


def format_value(value: Optional[float]) -> str:
    """Text shown in a matrix cell: six significant digits, empty for no value."""
    if value is None:
        return ""
    return format(value, "g")


def rgb_hex(color: Sequence[int]) -> str:
    """Turn an ``(r, g, b)`` triple of 0-255 integers into ``#rrggbb``."""
    components = tuple(color)
    if len(components) != 3:
        raise ValueError(f"expected three colour components, got {len(components)}")
    for component in components:
        if isinstance(component, bool) or not isinstance(component, int):
            raise ValueError(f"colour component {component!r} is not an integer")
        if not 0 <= component <= 255:
            raise ValueError(f"colour component {component} is outside 0-255")
    return "#{:02x}{:02x}{:02x}".format(*components)


def _plot(figure: Figure, series: Sequence[Point], title: str) -> None:
    axes = figure.add_subplot()
    axes.plot([point.x for point in series], [point.y for point in series])
    axes.set_title(title)
    axes.grid(True)
    figure.tight_layout()


@dataclass
class _Row:
    """One reading in the chart list: its frame and the canvases drawn in it."""

    frame: Any
    canvases: list[Any] = field(default_factory=list)


class _MatrixPanel:
    """A titled table of matrix values with buttons to switch calculators."""

    def __init__(
        self,
        parent: Any,
        title: str,
        on_change: Callable[[], None],
        on_default: Callable[[], None],
    ) -> None:
        self.frame = tk.LabelFrame(parent, text=title, padx=6, pady=6)
        buttons = tk.Frame(self.frame)
        buttons.pack(side=tk.TOP, fill=tk.X)
        tk.Button(buttons, text="Change calculator", command=on_change).pack(
            side=tk.LEFT
        )
        self._default_button = tk.Button(
            buttons, text="Use default calculator", command=on_default
        )
        self._grid = tk.Frame(self.frame)
        self._grid.pack(side=tk.TOP, fill=tk.BOTH, expand=True, pady=(6, 0))

    def show_default_button(self, visible: bool) -> None:
        if visible:
            self._default_button.pack(side=tk.LEFT, padx=(6, 0))
        else:
            self._default_button.pack_forget()

    def render(self, matrix: ComparisonMatrix) -> None:
        for child in self._grid.winfo_children():
            child.destroy()
        colors = matrix.colors()
        for index in range(len(matrix)):
            tk.Label(self._grid, text=str(index + 1)).grid(row=0, column=index + 1)
            tk.Label(self._grid, text=str(index + 1)).grid(row=index + 1, column=0)
        for row, values in enumerate(matrix):
            for col, value in enumerate(values):
                color: Optional[Color] = colors[row][col]
                tk.Label(
                    self._grid,
                    text=format_value(value),
                    bg=rgb_hex(color) if color is not None else _EMPTY_CELL_BG,
                    relief=tk.RIDGE,
                    width=11,
                ).grid(row=row + 1, column=col + 1, sticky="nsew")


class ViewerApp:
    """Main window: a list of readings and the two matrices comparing them."""

    def __init__(self, root: Any) -> None:
        self.root = root
        self.workspace = Workspace()
        self._rows: list[_Row] = []

        root.title("Impedance Viewer")
        root.minsize(900, 600)

        toolbar = tk.Frame(root)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=6, pady=6)
        tk.Button(toolbar, text="Add reading", command=self.add_readings).pack(
            side=tk.LEFT
        )

        body = tk.PanedWindow(root, orient=tk.HORIZONTAL)
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        charts = tk.Frame(body)
        self._canvas = tk.Canvas(charts, highlightthickness=0)
        scrollbar = tk.Scrollbar(charts, orient=tk.VERTICAL, command=self._canvas.yview)
        self._canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self._canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self._list = tk.Frame(self._canvas)
        self._canvas.create_window((0, 0), window=self._list, anchor="nw")
        self._list.bind(
            "<Configure>",
            lambda _event: self._canvas.configure(scrollregion=self._canvas.bbox("all")),
        )
        body.add(charts, stretch="always")

        matrices = tk.Frame(body)
        body.add(matrices)
        self._panels = {
            MAGNITUDE: _MatrixPanel(
                matrices,
                MAGNITUDE,
                lambda: self._change_calculator(MAGNITUDE),
                lambda: self._use_default(MAGNITUDE),
            ),
            PHASE: _MatrixPanel(
                matrices,
                PHASE,
                lambda: self._change_calculator(PHASE),
                lambda: self._use_default(PHASE),
            ),
        }
        for panel in self._panels.values():
            panel.frame.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=6, pady=6)
        self._refresh()

    # Matrices -----------------------------------------------------------

    def _matrix(self, kind: str) -> ComparisonMatrix:
        return self.workspace.magnitude if kind == MAGNITUDE else self.workspace.phase

    def _refresh(self) -> None:
        for kind, panel in self._panels.items():
            panel.render(self._matrix(kind))

    def _apply_calculator(self, kind: str, calculator: MatrixValueCalculator) -> None:
        setter = (
            self.workspace.set_magnitude_calculator
            if kind == MAGNITUDE
            else self.workspace.set_phase_calculator
        )
        try:
            setter(calculator)
        except CalculatorError as exc:
            messagebox.showinfo("Script runtime error", str(exc), parent=self.root)

    def _change_calculator(self, kind: str) -> None:
        path = filedialog.askopenfilename(
            parent=self.root, title="Script selection", filetypes=_SCRIPT_FILE_TYPES
        )
        if not path:
            return
        try:
            calculator = ScriptCalculator(path)
        except CalculatorError as exc:
            messagebox.showinfo("Script parsing error", str(exc), parent=self.root)
            return
        self._apply_calculator(kind, calculator)
        self._panels[kind].show_default_button(True)
        self._refresh()

    def _use_default(self, kind: str) -> None:
        self._apply_calculator(kind, DefaultCalculator())
        self._panels[kind].show_default_button(False)
        self._refresh()

    # Readings -----------------------------------------------------------

    def add_readings(self) -> None:
        """Ask for reading files and add every one that loads."""
        paths = filedialog.askopenfilenames(
            parent=self.root,
            title="Reading file selection",
            filetypes=_READING_FILE_TYPES,
        )
        for path in paths or ():
            try:
                reading = load_reading(path)
            except ReadingError:
                continue
            self._add_row(reading)
            try:
                self.workspace.add_reading(reading)
            except CalculatorError as exc:
                messagebox.showinfo("Script runtime error", str(exc), parent=self.root)
                break
        self._refresh()

    def _add_row(self, reading: ImpedanceReading) -> None:
        frame = tk.Frame(self._list, pady=5)
        frame.pack(side=tk.TOP, fill=tk.X)
        row = _Row(frame)
        for series, title in ((reading.magnitudes, MAGNITUDE), (reading.phases, PHASE)):
            canvas = self._chart(frame, series, title)
            canvas.get_tk_widget().pack(side=tk.LEFT, padx=5)
            row.canvases.append(canvas)
        tk.Button(frame, text="Remove", command=lambda: self._remove_row(row)).pack(
            side=tk.LEFT, padx=5
        )
        self._rows.append(row)

    def _remove_row(self, row: _Row) -> None:
        index = self._rows.index(row)
        del self._rows[index]
        row.frame.destroy()
        self.workspace.remove_reading(index)
        self._refresh()

    # Charts -------------------------------------------------------------

    def _chart(self, parent: Any, series: Sequence[Point], title: str) -> Any:
        figure = Figure(figsize=(3.2, 3.0), dpi=80)
        _plot(figure, series, title)
        canvas = FigureCanvasTkAgg(figure, master=parent)
        canvas.draw()
        widget = canvas.get_tk_widget()
        resting = parent.cget("bg")
        widget.configure(cursor="hand2", highlightthickness=3, highlightbackground=resting)
        widget.bind("<Enter>", lambda _e: widget.configure(highlightbackground=_GLOW_COLOR))
        widget.bind("<Leave>", lambda _e: widget.configure(highlightbackground=resting))
        widget.bind("<Double-Button-1>", lambda _e: self._show_popup(series, title))
        return canvas

    def _show_popup(self, series: Sequence[Point], title: str) -> None:
        popup = tk.Toplevel(self.root)
        popup.title("Enlarged Chart View")
        popup.minsize(800, 600)
        figure = Figure(figsize=(10, 7.5), dpi=80)
        _plot(figure, list(series), title)
        canvas = FigureCanvasTkAgg(figure, master=popup)
        canvas.draw()
        canvas.get_tk_widget().pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        tk.Button(popup, text="Close", command=popup.destroy).pack(side=tk.TOP, pady=6)
        popup.transient(self.root)
        popup.grab_set()
        popup.wait_window()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the viewer window."""
    parser = argparse.ArgumentParser(
        prog="impview",
        description="Compare impedance readings side by side.",
    )
    parser.parse_args(argv)
    if tk is None:
        parser.exit(1, "impview: tkinter is not available\n")
    root = tk.Tk()
    ViewerApp(root)
    root.mainloop()
    return 0