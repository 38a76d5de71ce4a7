"""Pytest helpers for the numcourse library."""

from __future__ import annotations

import numpy as np
import pytest

from numcourse.problems import AdvectionDiffusionParams, TransportParams


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng


@pytest.fixture
def irregular_grid():
    """Factory for strictly increasing grids with mildly irregular spacing."""

    def _make(rng: np.random.Generator, n: int, x0: float = 0.0) -> np.ndarray:
        if n < 2:
            raise ValueError("n must be >= 2")
        steps = rng.uniform(0.05, 0.35, size=n - 1)
        return np.concatenate(([x0], x0 + np.cumsum(steps))).astype(float)

    return _make


@pytest.fixture
def ad_params() -> AdvectionDiffusionParams:
    """Homework 2 steady advection-diffusion setup."""
    return AdvectionDiffusionParams(L=1.0, V=1.0, D=0.01)


@pytest.fixture
def transport_params() -> TransportParams:
    """Homework 3 transient setup."""
    return TransportParams(L=1.0, V=1.0, D=0.01, K=1e-4)
