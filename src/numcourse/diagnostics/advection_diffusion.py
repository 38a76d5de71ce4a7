from __future__ import annotations

import warnings
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..exceptions import OscillationWarning
from ..numerics.grids import nodes_for_spacing
from ..problems.advection_diffusion import (
    AdvectionDiffusionParams,
    grid_peclet,
    numerical_diffusion,
    optimal_upstream_weight,
    solve_steady_advection_diffusion,
    steady_advection_diffusion_exact,
)
from .tables import to_frame, order_columns

type AlphaChoice = float | str  # a weight in [0, 1] or "optimal"


@dataclass(frozen=True, slots=True)
class SteadyADRun:
    pe: float  # realised grid Peclet number
    dx: float
    Nx: int
    alpha: float
    scheme: str  # "optimal" or the fixed weight as text
    num_diff: float  # alpha |V| dx / 2
    max_err: float  # max nodal error against the exact solution
    oscillates: bool


def is_oscillating(u: NDArray[np.floating], tol: float = 1e-12) -> bool:
    """True if consecutive differences of ``u`` change sign (node-to-node wiggles)."""
    d = np.diff(np.asarray(u, dtype=float))
    d = np.where(np.abs(d) <= tol, 0.0, d)
    return bool(np.any(d[:-1] * d[1:] < 0.0))


def _resolve_alpha(alpha: AlphaChoice, pe: float) -> float:
    if isinstance(alpha, str):
        if alpha != "optimal":
            raise ValueError(f"Unknown alpha '{alpha}'. Use a number in [0, 1] or 'optimal'")
        return float(optimal_upstream_weight(pe))
    return float(alpha)


def _run(params: AdvectionDiffusionParams, dx: float, alpha: AlphaChoice) -> SteadyADRun:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", OscillationWarning)
        Nx = nodes_for_spacing(0.0, params.L, dx)
        h = params.L / (Nx - 1)
        pe = grid_peclet(params.V, h, params.D)
        w = _resolve_alpha(alpha, pe)
        x, u = solve_steady_advection_diffusion(params, Nx=Nx, alpha=w)

    err = np.abs(u - steady_advection_diffusion_exact(x, params))
    return SteadyADRun(
        pe=pe,
        dx=h,
        Nx=int(x.size),
        alpha=w,
        scheme=alpha if isinstance(alpha, str) else f"{float(alpha):g}",
        num_diff=numerical_diffusion(params.V, h, w),
        max_err=float(np.max(err)),
        oscillates=is_oscillating(u),
    )


def dx_sweep(
    params: AdvectionDiffusionParams,
    dxs: Sequence[float] = (0.01, 0.02, 0.1, 0.2, 0.5),
    alphas: Sequence[AlphaChoice] = (0.0, 1.0, 0.5),
) -> pd.DataFrame:
    """One steady solve per (dx, alpha)."""
    runs = [_run(params, float(dx), a) for a in alphas for dx in dxs]
    return order_columns(to_frame(runs))


def peclet_sweep(
    params: AdvectionDiffusionParams,
    pe_list: Sequence[float] = (0.1, 1.0, 2.0, 5.0, 10.0),
    alphas: Sequence[AlphaChoice] = (0.0, 1.0, "optimal"),
) -> pd.DataFrame:
    """Like :func:`dx_sweep` with dx = Pe * D / |V| chosen from target Peclet numbers.

    Rounding to a whole number of cells makes the realised ``pe`` column
    differ slightly from the targets.
    """
    if params.V == 0.0:
        raise ValueError("peclet_sweep needs V != 0")
    dxs = [float(pe) * params.D / abs(params.V) for pe in pe_list]
    return dx_sweep(params, dxs, alphas)
