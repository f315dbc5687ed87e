"""
errors.py - Error taxonomy and parameter checks.
================================================

Every model validates its inputs at the entry point and fails fast with
enough context (parameter name, offending value) for the caller to
report the cause.  Nothing is retried: all models are pure functions.
"""

from __future__ import annotations

import numpy as np


class InvalidPhysicalParameter(ValueError):
    """A physical parameter is outside its valid domain.

    Raised for non-positive B0, gyromagnetic ratio, T1, T2 or temperature,
    negative M0, and non-finite values.
    """

    def __init__(self, name: str, value, requirement: str = "positive"):
        self.name = name
        self.value = value
        self.requirement = requirement
        super().__init__(f"{name} must be {requirement}, got {value!r}")


class ShapeMismatch(ValueError):
    """Two sequences that must share an axis do not."""

    def __init__(self, message: str, shape_a=None, shape_b=None):
        self.shape_a = shape_a
        self.shape_b = shape_b
        super().__init__(message)


class DivisionSingularity(RuntimeWarning):
    """A ratio denominator was zero; the affected entries are NaN."""


def _offending(arr: np.ndarray, mask: np.ndarray) -> float:
    # first bad entry; boolean indexing also works on 0-d arrays
    return float(arr[mask][0])


def require_positive(name: str, value) -> np.ndarray:
    """Return *value* as a float array, raising unless every entry is finite and > 0."""
    arr = np.asarray(value, dtype=float)
    mask = ~np.isfinite(arr) | (arr <= 0)
    if np.any(mask):
        raise InvalidPhysicalParameter(name, _offending(arr, mask), "positive")
    return arr


def require_non_negative(name: str, value) -> np.ndarray:
    """Return *value* as a float array, raising unless every entry is finite and >= 0."""
    arr = np.asarray(value, dtype=float)
    mask = ~np.isfinite(arr) | (arr < 0)
    if np.any(mask):
        raise InvalidPhysicalParameter(name, _offending(arr, mask), "non-negative")
    return arr
