"""Shared grid/array validation so every code path raises the same errors."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def assert_strictly_increasing(x: np.ndarray, name: str) -> None:
    if x.ndim != 1:
        raise ValueError(f"{name} must be 1D")
    if np.any(np.diff(x) <= 0):
        raise ValueError(f"{name} must be strictly increasing")


def assert_min_points(x: np.ndarray, n: int, name: str) -> None:
    if x.size < n:
        raise ValueError(f"{name} must have at least {n} points")


def validate_inputs(y: NDArray, x: NDArray, axis: int) -> int:
    """Check a (y, x) pair for axis-wise differentiation; return the normalized axis."""
    if x.ndim != 1:
        raise ValueError("x must be 1D.")
    if x.size < 3:
        raise ValueError("x must have at least 3 points.")
    if np.any(np.diff(x) <= 0):
        raise ValueError("x must be strictly increasing.")

    if axis < 0:
        axis = y.ndim + axis
    if axis < 0 or axis >= y.ndim:
        raise ValueError(f"axis {axis} out of bounds for y.ndim={y.ndim}.")

    if y.shape[axis] != x.size:
        raise ValueError(f"y.shape[{axis}] must match len(x) ({x.size}).")

    return axis
