"""Symmetric comparison matrices over loaded readings, with their colouring."""

from __future__ import annotations

import math
import sys
from collections.abc import Iterable, Iterator, Sequence
from typing import Optional

from impview.calculators import CalculatorError, DefaultCalculator, MatrixValueCalculator
from impview.reading import ImpedanceReading, Point

Color = tuple[int, int, int]
Cell = Optional[float]

_ZERO_SUBSTITUTE = 0.000000001


def find_min(matrix: Iterable[Sequence[Cell]]) -> float:
    """Smallest value above the diagonal, ignoring empty cells.

    Returns the largest float when there is no such value.
    """
    values = [
        value
        for row_index, row in enumerate(matrix)
        for value in list(row)[row_index + 1:]
        if value is not None
    ]
    return min(values, default=sys.float_info.max)


def cell_color(min_value: float, value: float) -> Color:
    """Green for the best (smallest) value, shading to red as values grow."""
    if min_value == 0:
        min_value = _ZERO_SUBSTITUTE
    normalized = 1.0 if value == 0 else min_value / value
    if math.isnan(normalized):
        normalized = 0.0
    normalized = min(max(normalized, 0.0), 1.0)
    return int(255 * (1 - normalized)), int(255 * normalized), 0


class ComparisonMatrix:
    """Pairwise values of a list of series under one calculator."""

    def __init__(self, calculator: MatrixValueCalculator) -> None:
        self.calculator = calculator
        self._series: list[Sequence[Point]] = []
        self._cells: list[list[Cell]] = []

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        for row in self._cells:
            yield tuple(row)

    def _set(self, row: int, col: int, value: float) -> None:
        self._cells[row][col] = value
        self._cells[col][row] = value

    def add_series(self, series: Sequence[Point]) -> None:
        """Add a series and compare it with every series held, itself included.

        If the calculator fails, the series stays added, the cells not yet
        computed stay empty and the error is raised.
        """
        self._series.append(series)
        for row in self._cells:
            row.append(None)
        self._cells.append([None] * len(self._series))
        last = len(self._series) - 1
        for index, other in enumerate(self._series):
            self._set(index, last, self.calculator.value(series, other))

    def remove(self, index: int) -> None:
        """Drop a series together with its row and column."""
        del self._series[index]
        del self._cells[index]
        for row in self._cells:
            del row[index]

    def set_calculator(self, calculator: MatrixValueCalculator) -> None:
        """Switch calculators and recompute every cell.

        If the new calculator fails, cells not yet recomputed keep their old
        values and the error is raised.
        """
        self.calculator = calculator
        for i, first in enumerate(self._series):
            for j, second in enumerate(self._series[i:], start=i):
                self._set(i, j, calculator.value(first, second))

    def value(self, row: int, col: int) -> Cell:
        """The value in a cell, or None if it was never computed."""
        return self._cells[row][col]

    def colors(self) -> list[list[Optional[Color]]]:
        """Background colours of the cells; diagonal and empty cells get None."""
        min_value = find_min(self)
        size = len(self._cells)
        result: list[list[Optional[Color]]] = [[None] * size for _ in range(size)]
        for row_index, row in enumerate(self._cells):
            for col_index, value in enumerate(row[row_index + 1:], start=row_index + 1):
                if value is None:
                    continue
                color = cell_color(min_value, value)
                result[row_index][col_index] = color
                result[col_index][row_index] = color
        return result


class Workspace:
    """Loaded readings with a magnitude matrix and a phase matrix over them."""

    def __init__(self) -> None:
        self.readings: list[ImpedanceReading] = []
        self.magnitude = ComparisonMatrix(DefaultCalculator())
        self.phase = ComparisonMatrix(DefaultCalculator())

    def __len__(self) -> int:
        return len(self.readings)

    def add_reading(self, reading: ImpedanceReading) -> None:
        """Add a reading to both matrices.

        Both matrices always grow together; the first calculator error met is
        raised once both have been updated as far as they could be.
        """
        self.readings.append(reading)
        errors: list[CalculatorError] = []
        for matrix, series in (
            (self.magnitude, reading.magnitudes),
            (self.phase, reading.phases),
        ):
            try:
                matrix.add_series(series)
            except CalculatorError as exc:
                errors.append(exc)
        if errors:
            raise errors[0]

    def remove_reading(self, index: int) -> None:
        """Remove a reading and its row and column from both matrices."""
        del self.readings[index]
        self.magnitude.remove(index)
        self.phase.remove(index)

    def set_magnitude_calculator(self, calculator: MatrixValueCalculator) -> None:
        """Switch the magnitude calculator and recompute its matrix."""
        self.magnitude.set_calculator(calculator)

    def set_phase_calculator(self, calculator: MatrixValueCalculator) -> None:
        """Switch the phase calculator and recompute its matrix."""
        self.phase.set_calculator(calculator)