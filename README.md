# impview

impview is a desktop viewer for impedance measurements. It loads sweep
files, plots each reading's magnitude and phase side by side, and keeps two
symmetric comparison matrices up to date. One compares the magnitude curves
of every pair of readings. The other compares their phase curves. Cells
above and below the diagonal are shaded from green, for the smallest value,
towards red as values grow.

## Installing

```
pip install .
```

The window is built with tkinter and matplotlib's Tk backend. tkinter must
be present in your Python installation. If it is missing, `impview` prints
`impview: tkinter is not available` and exits with status 1.

To install the test suite and run it:

```
pip install ".[test]"
pytest
```

## Starting the viewer

```
impview
```

The command takes no options apart from `--help`. From the window you can:

- **Add reading:** choose one or more files (`*.txt`, `*.csv`, `*.lvm` or any
  other file). Files that hold no usable data are skipped without a message.
- **Enlarge a plot:** double-click a plot to open a larger copy in its own
  window.
- **Remove a reading:** this also removes its row and column from both
  matrices.
- **Change calculator:** replace the calculator of either matrix with an
  external script. **Use default calculator** switches back.

If a script fails while the matrices are being computed, its error is shown
in a message box. The cells it did not reach are left as they were, or
empty.

## Reading files

Each data line holds at least three numeric columns, in this order:

1. frequency
2. magnitude
3. phase

Further columns are ignored. Columns may be separated by spaces, by tabs, or
by commas followed by whitespace. A comma inside a column is read as a
decimal point.

- Blank lines and lines starting with `#` are ignored.
- The first line is skipped if it contains `freq`, `magnitude` or `phase`, in
  any letter case.
- Lines whose first three columns are not all numbers are skipped.

`load_reading` raises `ReadingError` if the file cannot be opened or yields
no data points.

```
Frequency, Magnitude, Phase
100, 1523.4, -12.5
200, 1498.0, -14.1
# a comment
400	1401,7	-18,9
```

## Calculators

`DefaultCalculator` sums the absolute differences of the y values of two
curves, point by point. It stops at the end of the shorter curve, and it
assumes that both readings were sampled at the same frequencies.

`ScriptCalculator(path)` runs an external script as its own process for
every pair of curves it compares:

- **Input:** the script receives a JSON object on standard input:
  `{"reading1": [{"x": ..., "y": ...}, ...], "reading2": [...]}`
- **Output:** the script must write a single number to standard output.
- **Python scripts (`.py`):** these run under the current interpreter. When
  the calculator is created, the file must parse and must define a
  `calculate` function at top level. The script still does its own reading
  and printing.
- **Other files:** these are run directly as programs.

`CalculatorError` is raised in any of these cases:

- the script file cannot be opened;
- a Python script cannot be parsed, or defines no `calculate` function;
- the process cannot be started;
- the process exits with a non-zero status;
- the process does not print a number.

## Using the package from Python

The loading and comparison logic works without the window:

```python
from impview.calculators import DefaultCalculator
from impview.matrix import Workspace
from impview.reading import ReadingError, load_reading

workspace = Workspace()
try:
    workspace.add_reading(load_reading("sweep1.csv"))
    workspace.add_reading(load_reading("sweep2.csv"))
except ReadingError as error:
    print(f"could not load reading: {error}")

print(workspace.magnitude.value(0, 1))
print(workspace.phase.colors())
workspace.set_phase_calculator(DefaultCalculator())
```

### `impview.reading`

- `Point`: a frozen `(x, y)` sample.
- `ImpedanceReading`: holds the `magnitudes` and `phases` lists and has an
  `add(frequency, magnitude, phase)` method.
- `parse_line(line)`: returns a `(frequency, magnitude, phase)` tuple, or
  `None` for a line that is skipped.
- `load_reading(path)`
- `ReadingError`

### `impview.calculators`

- `MatrixValueCalculator`: the abstract base, with a `value(reading1, reading2)`
  method.
- `DefaultCalculator`
- `ScriptCalculator`
- `CalculatorError`

### `impview.matrix`

- `ComparisonMatrix`: holds the series and has these methods:
  - `add_series`
  - `remove`
  - `set_calculator`
  - `value(row, col)`
  - `colors()`
- `Workspace`: holds `readings`, `magnitude` and `phase`, and has these
  methods:
  - `add_reading`
  - `remove_reading`
  - `set_magnitude_calculator`
  - `set_phase_calculator`
- `find_min(matrix)`: returns the smallest value above the diagonal.
- `cell_color(min_value, value)`: returns the `(r, g, b)` shade of a cell.

### `impview.app`

- `ViewerApp(root)`: the window, built on a `tkinter.Tk` root.
- `main()`: the entry point of the `impview` command.
- `format_value(value)`: the text shown in a cell.
- `rgb_hex(color)`: turns an `(r, g, b)` triple into `#rrggbb`.

## What it does not do

impview keeps everything in memory. It does not do any of the following:

- save or export the matrices;
- save a session of loaded readings;
- save the plots.

It has no command-line mode for comparing files without the window.