"""Impedance readings and the text files they are loaded from."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import ClassVar, Union

PathType = Union[str, "os.PathLike[str]"]

# Columns are separated by whitespace, or by a comma that is followed by whitespace.
_SEPARATOR = re.compile(r"\s+|,(?=\s)|\t")
_NUMBER = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|nan)",
    re.IGNORECASE,
)
_HEADER_WORDS = ("freq", "magnitude", "phase")


class ReadingError(ValueError):
    """Raised when a reading file cannot be read or holds no usable data."""


@dataclass(frozen=True)
class Point:
    """One sample of a series: frequency on x, measured value on y."""

    x: float
    y: float


@dataclass
class ImpedanceReading:
    """A magnitude series and a phase series sampled at the same frequencies."""

    MAGNITUDE_NAME: ClassVar[str] = "Magnitude"
    PHASE_NAME: ClassVar[str] = "Phase"

    magnitudes: list[Point] = field(default_factory=list)
    phases: list[Point] = field(default_factory=list)

    def add(self, frequency: float, magnitude: float, phase: float) -> None:
        """Append one sample to both series."""
        self.magnitudes.append(Point(frequency, magnitude))
        self.phases.append(Point(frequency, phase))

    def __len__(self) -> int:
        return min(len(self.magnitudes), len(self.phases))


def _to_float(text: str) -> float | None:
    text = text.replace(",", ".")
    if not _NUMBER.fullmatch(text):
        return None
    return float(text)


def parse_line(line: str) -> tuple[float, float, float] | None:
    """Parse a ``frequency magnitude phase`` line.

    Returns None for blank lines, ``#`` comments, lines with fewer than three
    columns and lines whose first three columns are not all numbers. A comma
    inside a column is taken as the decimal separator.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    parts = [part for part in _SEPARATOR.split(line) if part]
    if len(parts) < 3:
        return None
    frequency, magnitude, phase = (_to_float(part) for part in parts[:3])
    if frequency is None or magnitude is None or phase is None:
        return None
    return frequency, magnitude, phase


def _is_header(line: str) -> bool:
    lowered = line.strip().lower()
    return any(word in lowered for word in _HEADER_WORDS)


def load_reading(path: PathType) -> ImpedanceReading:
    """Load a reading from a text file, skipping a header line if there is one."""
    reading = ImpedanceReading()
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            for number, line in enumerate(handle):
                if number == 0 and _is_header(line):
                    continue
                parsed = parse_line(line)
                if parsed is not None:
                    reading.add(*parsed)
    except OSError as exc:
        raise ReadingError(f"cannot open reading file {os.fspath(path)}: {exc}") from exc
    if not reading:
        raise ReadingError(f"no readable data in {os.fspath(path)}")
    return reading