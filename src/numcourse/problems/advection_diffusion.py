"""
Steady advection-diffusion and diffusion-reaction on (0, L).

Advection-diffusion:     V u' - D u'' = 0,   u(0) = 1, u(L) = 0
Diffusion-reaction:      D u'' - k u  = 0,   u(0) = 0, u(L) = C1

Both are solved with the steady tridiagonal solver and have closed-form
solutions for comparison. With grid Peclet number Pe = |V| dx / D the
upstream-weighted scheme is free of node-to-node oscillations iff
(1 - alpha) Pe <= 2, and nodally exact for alpha = coth(Pe/2) - 2/Pe.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..exceptions import OscillationWarning
from ..numerics.grids import nodes_for_spacing
from ..numerics.pde import LinearBVP1D, RobinBC, dirichlet_side, solve_steady_1d
from ..numerics.pde.operators import Advection, upstream_weight

_OSC_RTOL = 1e-12


@dataclass(frozen=True, slots=True)
class AdvectionDiffusionParams:
    L: float = 1.0
    V: float = 1.0
    D: float = 0.01

    def __post_init__(self) -> None:
        if self.L <= 0.0:
            raise ValueError("L must be > 0")
        if self.D <= 0.0:
            raise ValueError("D must be > 0")

    @property
    def peclet(self) -> float:
        """Global Peclet number |V| L / D."""
        return abs(self.V) * self.L / self.D


def grid_peclet(V: float, dx: float, D: float) -> float:
    if D <= 0.0:
        raise ValueError("D must be > 0")
    if dx <= 0.0:
        raise ValueError("dx must be > 0")
    return abs(V) * dx / D


def numerical_diffusion(V: float, dx: float, alpha: Advection) -> float:
    """Artificial diffusion alpha |V| dx / 2 added by upstream weighting.

    From the modified equation: to leading order in dx the weighted scheme
    solves the original problem with D replaced by D + alpha |V| dx / 2.
    """
    if dx <= 0.0:
        raise ValueError("dx must be > 0")
    return upstream_weight(alpha) * abs(V) * dx / 2.0


def uniform_nodes(L: float, *, dx: float | None = None, Nx: int | None = None) -> NDArray[np.floating]:
    """Uniform nodes on [0, L] from either a target spacing or a node count."""
    if (dx is None) == (Nx is None):
        raise ValueError("Provide exactly one of dx or Nx")
    n = nodes_for_spacing(0.0, L, dx) if dx is not None else int(Nx)  # type: ignore[arg-type]
    if n < 3:
        raise ValueError("Nx must be >= 3")
    return np.linspace(0.0, L, n)


def steady_advection_diffusion_exact(
    x: float | NDArray[np.floating], params: AdvectionDiffusionParams
) -> NDArray[np.floating]:
    """u(x) = (exp(Vx/D) - exp(VL/D)) / (1 - exp(VL/D)), evaluated without overflow."""
    x = np.asarray(x, dtype=float)
    L, V, D = params.L, params.V, params.D
    if V == 0.0:
        return 1.0 - x / L
    if V > 0.0:
        # divide through by exp(VL/D)
        return np.expm1(V * (x - L) / D) / np.expm1(-V * L / D)
    return (np.expm1(V * x / D) - np.expm1(V * L / D)) / (-np.expm1(V * L / D))


def optimal_upstream_weight(pe: float | NDArray[np.floating]) -> NDArray[np.floating]:
    """alpha*(Pe) = coth(Pe/2) - 2/Pe.

    With this weight the upstream-weighted scheme reproduces the exact
    solution at the nodes. Tends to Pe/6 as Pe -> 0 and to 1 as Pe -> inf.
    """
    pe = np.abs(np.asarray(pe, dtype=float))
    small = pe < 1e-3
    safe = np.where(small, 1.0, pe)
    with np.errstate(over="ignore"):
        full = 1.0 / np.tanh(0.5 * safe) - 2.0 / safe
    series = pe / 6.0 - pe**3 / 360.0
    return np.where(small, series, full)


def oscillation_free(pe: float, alpha: float) -> bool:
    """True when the discrete operator keeps non-negative off-diagonals.

    The bound carries a relative slack of 1e-12: the optimal weight sits just
    inside it in exact arithmetic but can round onto either side.
    """
    return (1.0 - alpha) * pe <= 2.0 * (1.0 + _OSC_RTOL)


def solve_steady_advection_diffusion(
    params: AdvectionDiffusionParams,
    *,
    dx: float | None = None,
    Nx: int | None = None,
    alpha: Advection = 0.0,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Return nodes and discrete solution of V u' - D u'' = 0, u(0)=1, u(L)=0.

    ``alpha`` is the upstream weight (0 central, 1 upwind) or an
    :class:`~numcourse.numerics.pde.AdvectionScheme`. Emits
    :class:`~numcourse.exceptions.OscillationWarning` when the chosen weight
    cannot suppress oscillations at this grid Peclet number.
    """
    x = uniform_nodes(params.L, dx=dx, Nx=Nx)
    w = upstream_weight(alpha)
    pe = grid_peclet(params.V, float(x[1] - x[0]), params.D)
    if not oscillation_free(pe, w):
        warnings.warn(
            f"grid Peclet number {pe:.3g} with upstream weight {w:g}: "
            "(1 - alpha) * Pe > 2, expect node-to-node oscillations",
            OscillationWarning,
            stacklevel=2,
        )

    V, D = params.V, params.D
    problem = LinearBVP1D(
        a=lambda _x: D,
        b=lambda _x: -V,
        c=lambda _x: 0.0,
        bc=RobinBC(left=dirichlet_side(1.0), right=dirichlet_side(0.0)),
    )
    return x, solve_steady_1d(problem, x, advection=w)


def diffusion_reaction_exact(
    x: float | NDArray[np.floating],
    *,
    D: float,
    k: float,
    L: float = 1.0,
    C1: float = 1.0,
) -> NDArray[np.floating]:
    """u = C1 sinh(lam x) / sinh(lam L), lam = sqrt(k/D)."""
    if D <= 0.0 or k < 0.0:
        raise ValueError("Require D > 0 and k >= 0")
    x = np.asarray(x, dtype=float)
    lam = np.sqrt(k / D)
    if lam == 0.0:
        return C1 * x / L
    # sinh(lam x)/sinh(lam L) = exp(lam (x-L)) (1 - exp(-2 lam x)) / (1 - exp(-2 lam L))
    return C1 * np.exp(lam * (x - L)) * np.expm1(-2.0 * lam * x) / np.expm1(-2.0 * lam * L)


def solve_diffusion_reaction(
    *,
    D: float,
    k: float,
    L: float = 1.0,
    C1: float = 1.0,
    dx: float | None = None,
    Nx: int | None = None,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    if D <= 0.0 or k < 0.0:
        raise ValueError("Require D > 0 and k >= 0")
    x = uniform_nodes(L, dx=dx, Nx=Nx)
    problem = LinearBVP1D(
        a=lambda _x: D,
        b=lambda _x: 0.0,
        c=lambda _x: -k,
        bc=RobinBC(left=dirichlet_side(0.0), right=dirichlet_side(C1)),
    )
    return x, solve_steady_1d(problem, x)
