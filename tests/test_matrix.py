import sys

import pytest

from impview.calculators import CalculatorError, DefaultCalculator, MatrixValueCalculator
from impview.matrix import ComparisonMatrix, Workspace, cell_color, find_min
from impview.reading import ImpedanceReading, Point


class ConstantCalculator(MatrixValueCalculator):
    def __init__(self, result):
        self.result = result

    def value(self, reading1, reading2):
        return self.result


class FailingCalculator(MatrixValueCalculator):
    def __init__(self, allowed=0):
        self.allowed = allowed

    def value(self, reading1, reading2):
        if self.allowed <= 0:
            raise CalculatorError("boom")
        self.allowed -= 1
        return 1.0


def series(*ys):
    return [Point(float(index), float(y)) for index, y in enumerate(ys)]


def reading(*samples):
    result = ImpedanceReading()
    for frequency, magnitude, phase in samples:
        result.add(frequency, magnitude, phase)
    return result


def filled_matrix():
    matrix = ComparisonMatrix(DefaultCalculator())
    matrix.add_series(series(1, 1))
    matrix.add_series(series(2, 4))
    matrix.add_series(series(0, 9))
    return matrix


def test_find_min_ignores_diagonal_and_empty():
    assert find_min([[0.0, 3.0, None], [3.0, 0.0, 2.0], [None, 2.0, 0.0]]) == 2.0


def test_find_min_empty():
    assert find_min([]) == sys.float_info.max


def test_cell_color_minimum_is_green():
    assert cell_color(2.0, 2.0) == (0, 255, 0)


def test_cell_color_zero_is_green():
    assert cell_color(0.0, 0.0) == (0, 255, 0)


def test_cell_color_twice_minimum():
    assert cell_color(1.0, 2.0) == (127, 127, 0)


@pytest.mark.parametrize("value", [1.0, 1.5, 3.0, 10.0, 1000.0])
def test_cell_color_channels_span_range(value):
    red, green, blue = cell_color(1.0, value)
    assert blue == 0
    assert 0 <= red <= 255 and 0 <= green <= 255
    assert 254 <= red + green <= 255


def test_cell_color_redder_for_larger_values():
    assert cell_color(1.0, 5.0)[0] > cell_color(1.0, 2.0)[0]


def test_add_series_fills_symmetric_matrix():
    matrix = filled_matrix()
    assert len(matrix) == 3
    for i in range(3):
        assert matrix.value(i, i) == 0.0
        for j in range(3):
            assert matrix.value(i, j) == matrix.value(j, i)
    assert matrix.value(0, 1) == DefaultCalculator().value(series(1, 1), series(2, 4))


def test_iteration_yields_rows():
    rows = list(filled_matrix())
    assert len(rows) == 3
    assert all(len(row) == 3 for row in rows)


def test_remove_keeps_remaining_values():
    matrix = filled_matrix()
    kept = matrix.value(0, 2)
    matrix.remove(1)
    assert len(matrix) == 2
    assert matrix.value(0, 1) == kept
    assert matrix.value(1, 0) == kept


def test_remove_out_of_range():
    with pytest.raises(IndexError):
        filled_matrix().remove(5)


def test_set_calculator_recomputes_all_cells():
    matrix = filled_matrix()
    matrix.set_calculator(ConstantCalculator(7.0))
    assert all(value == 7.0 for row in matrix for value in row)


def test_failed_add_leaves_empty_cells():
    matrix = ComparisonMatrix(ConstantCalculator(1.0))
    matrix.add_series(series(1))
    matrix.calculator = FailingCalculator(allowed=0)
    with pytest.raises(CalculatorError):
        matrix.add_series(series(2))
    assert len(matrix) == 2
    assert matrix.value(0, 1) is None
    assert matrix.value(0, 0) == 1.0


def test_colors_layout():
    matrix = filled_matrix()
    colors = matrix.colors()
    assert all(colors[i][i] is None for i in range(3))
    assert colors[0][1] == colors[1][0]
    assert colors[1][2] == colors[2][1]
    smallest = find_min(matrix)
    greens = [
        colors[i][j]
        for i in range(3)
        for j in range(i + 1, 3)
        if matrix.value(i, j) == smallest
    ]
    assert greens and all(color == (0, 255, 0) for color in greens)


def test_colors_skip_empty_cells():
    matrix = ComparisonMatrix(ConstantCalculator(1.0))
    matrix.add_series(series(1))
    matrix.calculator = FailingCalculator()
    with pytest.raises(CalculatorError):
        matrix.add_series(series(2))
    assert matrix.colors() == [[None, None], [None, None]]


def test_workspace_add_and_remove():
    workspace = Workspace()
    workspace.add_reading(reading((1, 1, 10), (2, 2, 20)))
    workspace.add_reading(reading((1, 3, 10), (2, 2, 25)))
    assert len(workspace) == 2
    assert len(workspace.magnitude) == 2 and len(workspace.phase) == 2
    assert workspace.magnitude.value(0, 1) == DefaultCalculator().value(
        workspace.readings[0].magnitudes, workspace.readings[1].magnitudes
    )
    assert workspace.phase.value(1, 0) == DefaultCalculator().value(
        workspace.readings[0].phases, workspace.readings[1].phases
    )
    workspace.remove_reading(0)
    assert len(workspace) == 1
    assert workspace.magnitude.value(0, 0) == 0.0


def test_workspace_calculators_are_independent():
    workspace = Workspace()
    workspace.add_reading(reading((1, 1, 10)))
    workspace.add_reading(reading((1, 4, 12)))
    phase_before = workspace.phase.value(0, 1)
    workspace.set_magnitude_calculator(ConstantCalculator(3.5))
    assert workspace.magnitude.value(0, 1) == 3.5
    assert workspace.phase.value(0, 1) == phase_before
    workspace.set_phase_calculator(ConstantCalculator(-1.0))
    assert workspace.phase.value(1, 1) == -1.0


def test_workspace_failure_keeps_matrices_aligned():
    workspace = Workspace()
    workspace.add_reading(reading((1, 1, 10)))
    workspace.set_phase_calculator(FailingCalculator())
    with pytest.raises(CalculatorError):
        workspace.add_reading(reading((1, 2, 11)))
    assert len(workspace) == 2
    assert len(workspace.magnitude) == len(workspace.phase) == 2
    assert workspace.magnitude.value(0, 1) == DefaultCalculator().value(
        series(1), series(2)
    )
    assert workspace.phase.value(0, 1) is None