"""Impedance reading loader, pairwise comparison matrices and a Tk viewer."""

__version__ = "0.1.0"