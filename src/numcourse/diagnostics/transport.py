from __future__ import annotations

import warnings
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..exceptions import StabilityWarning
from ..problems.transport import (
    TransportParams,
    solve_transport,
    stability_threshold_dt,
    transport_exact,
)
from .tables import discrete_l2_norm, order_columns, to_frame


@dataclass(frozen=True, slots=True)
class TransportRun:
    pe: float
    alpha: float
    theta: float
    dx: float
    dt: float
    Nx: int
    Nt: int
    dt_max: float  # von Neumann threshold (inf when unconditionally stable)
    stable: bool
    l2_err: float  # at t_end against the analytic solution
    max_abs_u: float


def transport_run(
    params: TransportParams,
    *,
    pe: float,
    alpha: float,
    theta: float,
    dt: float,
    t_end: float,
) -> TransportRun:
    dx = params.dx_for_peclet(pe)
    with warnings.catch_warnings(), np.errstate(over="ignore", invalid="ignore"):
        warnings.simplefilter("ignore", StabilityWarning)
        sol = solve_transport(
            params, t_end=t_end, dx=dx, dt=dt, alpha=alpha, theta=theta, store="final"
        )

    x = sol.grid.x
    h = float(x[1] - x[0])
    dt_real = float(sol.grid.t[1] - sol.grid.t[0])
    dt_max = stability_threshold_dt(params, dx=h, alpha=alpha, theta=theta)
    u = sol.u_final
    err = u - transport_exact(x, t_end, params)
    return TransportRun(
        pe=float(abs(params.V) * h / params.D),
        alpha=float(alpha),
        theta=float(theta),
        dx=h,
        dt=dt_real,
        Nx=int(x.size),
        Nt=int(sol.grid.t.size),
        dt_max=dt_max,
        stable=bool(dt_real <= dt_max),
        l2_err=discrete_l2_norm(err, h),
        max_abs_u=float(np.max(np.abs(u))),
    )


def transport_sweep(
    params: TransportParams,
    pe_list: Sequence[float] = (0.1, 1.0, 2.0, 5.0, 10.0),
    alphas: Sequence[float] = (0.0, 0.5, 1.0),
    thetas: Sequence[float] = (0.0, 0.5, 1.0),
    *,
    dt: float = 0.01,
    t_end: float = 0.5,
) -> pd.DataFrame:
    """One transient run per (Pe, alpha, theta) combination.

    Unstable explicit runs are kept in the table (``stable`` False,
    typically huge ``max_abs_u``) rather than raising.
    """
    runs = [
        transport_run(params, pe=pe, alpha=a, theta=th, dt=dt, t_end=t_end)
        for pe in pe_list
        for a in alphas
        for th in thetas
    ]
    return order_columns(to_frame(runs))
