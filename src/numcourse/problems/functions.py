"""Sample functions used throughout the lectures, with exact derivatives."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

type FloatLike = float | NDArray[np.floating]


def runge(x: FloatLike) -> FloatLike:
    """Runge's function 1 / (1 + 25 x^2) on [-1, 1]."""
    x = np.asarray(x, dtype=float)
    return 1.0 / (1.0 + 25.0 * x * x)


def runge_prime(x: FloatLike) -> FloatLike:
    x = np.asarray(x, dtype=float)
    return -50.0 * x / (1.0 + 25.0 * x * x) ** 2


def gaussian(x: FloatLike) -> FloatLike:
    """exp(-x^2)."""
    x = np.asarray(x, dtype=float)
    return np.exp(-x * x)


def gaussian_prime(x: FloatLike) -> FloatLike:
    x = np.asarray(x, dtype=float)
    return -2.0 * x * np.exp(-x * x)


# Homework 1 data table
HW1_NODES = np.array([0.0, 2.0, 3.0, 4.0])
HW1_VALUES = np.array([1.0, 1.0, 2.0, 0.0])
