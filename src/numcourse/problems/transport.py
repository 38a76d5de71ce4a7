"""
Transient advection-diffusion-reaction of a solute

    u_t + V u_x - D u_xx + K u = 0,    0 < x < L, t > 0
    u(0, t) = 1,   u_x(L, t) = 0,   u(x, 0) = 0

discretized with upstream weight alpha in space and the theta scheme in
time. The analytic comparison is the semi-infinite-domain solution
(valid while the front is far from x = L):

    u = 1/2 exp((V-U) x / 2D) erfc((x - U t) / 2 sqrt(D t))
      + 1/2 exp((V+U) x / 2D) erfc((x + U t) / 2 sqrt(D t)),   U = sqrt(V^2 + 4 K D)
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Literal

import numpy as np
from numpy.typing import NDArray
from scipy.special import erfc, erfcx

from ..config import DEFAULT_NUMERICS, NumericsConfig
from ..exceptions import StabilityWarning
from ..numerics.grids import GridConfig, nodes_for_spacing
from ..numerics.pde import (
    LinearParabolicPDE1D,
    PDESolution1D,
    RobinBC,
    dirichlet_side,
    neumann_side,
    solve_pde_1d,
)
from ..numerics.pde.operators import Advection, upstream_weight
from ..numerics.root_finding import NoBracketError, bisection_method, ensure_bracket


@dataclass(frozen=True, slots=True)
class TransportParams:
    L: float = 1.0
    V: float = 1.0
    D: float = 0.01
    K: float = 1e-4

    def __post_init__(self) -> None:
        if self.L <= 0.0:
            raise ValueError("L must be > 0")
        if self.D < 0.0 or self.K < 0.0:
            raise ValueError("D and K must be >= 0")

    @property
    def front_speed(self) -> float:
        """U = sqrt(V^2 + 4 K D)."""
        return math.sqrt(self.V * self.V + 4.0 * self.K * self.D)

    def dx_for_peclet(self, pe: float) -> float:
        """Grid spacing that realises grid Peclet number ``pe`` = |V| dx / D."""
        if pe <= 0.0 or self.V == 0.0 or self.D == 0.0:
            raise ValueError("Need pe > 0, V != 0 and D > 0")
        return pe * self.D / abs(self.V)


def transport_exact(
    x: float | NDArray[np.floating],
    t: float | NDArray[np.floating],
    params: TransportParams,
) -> NDArray[np.floating]:
    """Semi-infinite erfc solution; at t = 0 it is 1 at x = 0 and 0 elsewhere."""
    if params.D <= 0.0:
        raise ValueError("The analytic solution needs D > 0")
    x, t = np.broadcast_arrays(np.asarray(x, dtype=float), np.asarray(t, dtype=float))
    V, D = params.V, params.D
    U = params.front_speed

    out = np.where(x <= 0.0, 1.0, 0.0)
    pos = t > 0.0
    if np.any(pos):
        xp, tp = x[pos], t[pos]
        s = 2.0 * np.sqrt(D * tp)
        z_minus = (xp - U * tp) / s
        z_plus = (xp + U * tp) / s
        first = 0.5 * np.exp((V - U) * xp / (2.0 * D)) * erfc(z_minus)
        # exp(a) erfc(z) = exp(a - z^2) erfcx(z) avoids overflow; z_plus >= 0 here
        second = 0.5 * np.exp((V + U) * xp / (2.0 * D) - z_plus**2) * erfcx(z_plus)
        out[pos] = first + second
    return out


def _symbol(
    xi: NDArray[np.floating], params: TransportParams, dx: float, alpha: float
) -> NDArray[np.complexfloating]:
    """Fourier symbol of the semi-discrete operator on a uniform grid."""
    V, D, K = params.V, params.D, params.K
    diffusion = D * (2.0 * np.cos(xi) - 2.0) / dx**2
    central = 1j * np.sin(xi) / dx
    if V >= 0.0:
        one_sided = (1.0 - np.exp(-1j * xi)) / dx
    else:
        one_sided = (np.exp(1j * xi) - 1.0) / dx
    return diffusion - V * (alpha * one_sided + (1.0 - alpha) * central) - K


def amplification_factor(
    xi: float | NDArray[np.floating],
    params: TransportParams,
    *,
    dx: float,
    dt: float,
    alpha: Advection = 0.0,
    theta: float = 0.5,
) -> NDArray[np.complexfloating]:
    """von Neumann amplification factor G(xi) = (1 + (1-theta) dt lam) / (1 - theta dt lam)."""
    if dx <= 0.0 or dt <= 0.0:
        raise ValueError("dx and dt must be > 0")
    if not (0.0 <= theta <= 1.0):
        raise ValueError("theta must be in [0, 1]")
    lam = _symbol(np.asarray(xi, dtype=float), params, dx, upstream_weight(alpha))
    return (1.0 + (1.0 - theta) * dt * lam) / (1.0 - theta * dt * lam)


def stability_threshold_dt(
    params: TransportParams,
    *,
    dx: float,
    alpha: Advection = 0.0,
    theta: float = 0.0,
    config: NumericsConfig = DEFAULT_NUMERICS,
) -> float:
    """Largest dt with max_xi |G| <= 1 + growth_tol.

    Returns ``inf`` when every dt is stable (always for theta >= 1/2) and
    ``0.0`` when no dt is.
    """
    if theta >= 0.5:
        return math.inf

    xi = np.linspace(0.0, np.pi, config.n_modes)

    def excess(dt: float) -> float:
        G = amplification_factor(xi, params, dx=dx, dt=dt, alpha=alpha, theta=theta)
        return float(np.max(np.abs(G))) - 1.0 - config.growth_tol

    if params.D > 0.0:
        scale = dx * dx / (2.0 * params.D)
    elif params.V != 0.0:
        scale = dx / abs(params.V)
    else:
        scale = 1.0 / max(params.K, 1.0)

    lo = 1e-6 * scale
    if excess(lo) > 0.0:
        return 0.0
    try:
        lo, hi = ensure_bracket(
            excess, lo, scale, hi_max=1e8 * scale, grow=2.0, max_steps=200
        )
    except NoBracketError:
        return math.inf

    res = bisection_method(
        excess, lo, hi, tol_f=0.0, tol_x=config.rel_tol * hi, max_iter=config.max_iter
    )
    if res.f_at_root <= 0.0:
        return float(res.root)
    # the midpoint landed on the unstable side; the left end never does
    assert res.bracket is not None
    return float(res.bracket[0])


def solve_transport(
    params: TransportParams,
    *,
    t_end: float,
    dx: float | None = None,
    Nx: int | None = None,
    dt: float | None = None,
    Nt: int | None = None,
    alpha: Advection = 0.0,
    theta: float = 0.5,
    store: Literal["all", "final"] = "all",
) -> PDESolution1D:
    """Theta-scheme solution on a uniform grid.

    Space is given by ``dx`` or ``Nx``, time by ``dt`` or ``Nt`` (number of
    time nodes including t = 0). Emits
    :class:`~numcourse.exceptions.StabilityWarning` when a conditionally
    stable run uses a step above the von Neumann threshold.
    """
    if t_end <= 0.0:
        raise ValueError("t_end must be > 0")
    if (dx is None) == (Nx is None):
        raise ValueError("Provide exactly one of dx or Nx")
    if (dt is None) == (Nt is None):
        raise ValueError("Provide exactly one of dt or Nt")

    n_x = nodes_for_spacing(0.0, params.L, dx) if dx is not None else int(Nx)  # type: ignore[arg-type]
    if dt is not None:
        if dt <= 0.0:
            raise ValueError("dt must be > 0")
        n_t = max(2, int(round(t_end / dt)) + 1)
    else:
        n_t = int(Nt)  # type: ignore[arg-type]

    cfg = GridConfig(Nx=n_x, Nt=n_t, x_lb=0.0, x_ub=params.L, T=float(t_end))
    cfg.validate()

    w = upstream_weight(alpha)
    if theta < 0.5:
        dt_max = stability_threshold_dt(params, dx=cfg.dx, alpha=w, theta=theta)
        if cfg.dt > dt_max:
            warnings.warn(
                f"dt={cfg.dt:.3g} exceeds the von Neumann limit {dt_max:.3g} "
                f"for theta={theta:g}, alpha={w:g}; the solution will grow",
                StabilityWarning,
                stacklevel=2,
            )

    V, D, K = params.V, params.D, params.K
    problem = LinearParabolicPDE1D(
        a=lambda _x, _t: D,
        b=lambda _x, _t: -V,
        c=lambda _x, _t: -K,
        bc=RobinBC(left=dirichlet_side(1.0), right=neumann_side(0.0)),
        ic=lambda _x: 0.0,
    )
    return solve_pde_1d(
        problem, grid_cfg=cfg, theta=theta, advection=w, store=store
    )
