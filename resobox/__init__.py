"""Deterministic fractal box layout for signed price deviations."""

__version__ = "0.1.0"
