"""Calculators that turn a pair of series into one comparison value."""

from __future__ import annotations

import ast
import json
import os
import subprocess
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Union

from impview.reading import Point

PathType = Union[str, "os.PathLike[str]"]


class CalculatorError(RuntimeError):
    """Raised when a calculator script cannot be loaded or fails to run."""


class MatrixValueCalculator(ABC):
    """Compares two series and returns a single number."""

    @abstractmethod
    def value(self, reading1: Sequence[Point], reading2: Sequence[Point]) -> float:
        """Return the comparison value of two series."""


class DefaultCalculator(MatrixValueCalculator):
    """Sum of absolute differences of the y values, sample by sample.

    Both series are assumed to share the same frequency steps; samples past the
    end of the shorter series are ignored.
    """

    def value(self, reading1: Sequence[Point], reading2: Sequence[Point]) -> float:
        return float(sum(abs(a.y - b.y) for a, b in zip(reading1, reading2)))


def _as_script_points(series: Sequence[Point]) -> list[dict[str, float]]:
    return [{"x": point.x, "y": point.y} for point in series]


def _defines_calculate(tree: ast.Module) -> bool:
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            if node.name == "calculate":
                return True
        elif isinstance(node, ast.Assign):
            if any(
                isinstance(target, ast.Name) and target.id == "calculate"
                for target in node.targets
            ):
                return True
    return False


class ScriptCalculator(MatrixValueCalculator):
    """Delegates the comparison to an external script run as its own process.

    The script receives a JSON object ``{"reading1": [...], "reading2": [...]}``
    on standard input, where each reading is a list of ``{"x": ..., "y": ...}``
    objects, and must write one number to standard output. A Python script
    (``.py``) is run with the current interpreter and must define a
    ``calculate`` function; any other file is run directly as a program.
    """

    def __init__(self, path: PathType) -> None:
        self.path = os.fspath(path)
        try:
            with open(self.path, "rb") as handle:
                contents = handle.read()
        except OSError as exc:
            raise CalculatorError(f"Failed to open script file: {self.path}") from exc

        if self.path.lower().endswith(".py"):
            try:
                tree = ast.parse(contents, filename=self.path)
            except (SyntaxError, ValueError) as exc:
                raise CalculatorError(f"Script evaluation error: {exc}") from exc
            if not _defines_calculate(tree):
                raise CalculatorError("Script must implement a calculate() function")
            self._command = [sys.executable, self.path]
        else:
            self._command = [self.path]

    def value(self, reading1: Sequence[Point], reading2: Sequence[Point]) -> float:
        payload = json.dumps(
            {
                "reading1": _as_script_points(reading1),
                "reading2": _as_script_points(reading2),
            }
        )
        try:
            completed = subprocess.run(
                self._command,
                input=payload,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise CalculatorError(f"Script evaluation error: {exc}") from exc
        if completed.returncode != 0:
            message = completed.stderr.strip() or f"exit status {completed.returncode}"
            raise CalculatorError(f"Script evaluation error: {message}")
        output = completed.stdout.strip()
        try:
            return float(output)
        except ValueError as exc:
            raise CalculatorError("Script function did not return a number") from exc