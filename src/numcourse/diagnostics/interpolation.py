from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..numerics.interp import (
    CubicSpline,
    LagrangeInterpolant,
    PiecewiseLinear,
    make_nodes,
)
from ..problems.functions import runge
from .tables import to_frame


def runge_table(
    degrees: Sequence[int] = (4, 8, 12, 16, 20),
    node_kinds: Sequence[str] = ("equispaced", "chebyshev"),
    *,
    f: Callable[[NDArray], NDArray] = runge,
    a: float = -1.0,
    b: float = 1.0,
    n_eval: int = 2001,
) -> pd.DataFrame:
    """Max error of the degree-n interpolant of ``f`` for each node family.

    With Runge's function the equispaced error grows with n while the
    Chebyshev error decays.
    """
    xq = np.linspace(a, b, n_eval)
    fq = np.asarray(f(xq), dtype=float)
    rows: list[dict[str, object]] = []
    for kind in node_kinds:
        for n in degrees:
            x = make_nodes(kind, a, b, int(n))  # type: ignore[arg-type]
            p = LagrangeInterpolant(x, f(x))
            rows.append(
                {"nodes": kind, "n": int(n), "max_err": float(np.max(np.abs(p(xq) - fq)))}
            )
    return to_frame(rows)


def interpolant_comparison(
    f: Callable[[NDArray], NDArray],
    fp: Callable[[NDArray], NDArray],
    nodes: NDArray[np.floating],
    xq: NDArray[np.floating],
) -> pd.DataFrame:
    """Values and first derivatives of global Lagrange vs not-a-knot cubic spline.

    One row per query point. Columns ``*_err`` are absolute errors against
    ``f`` and ``fp``.
    """
    nodes = np.asarray(nodes, dtype=float)
    xq = np.asarray(xq, dtype=float)
    y = f(nodes)

    lag = LagrangeInterpolant(nodes, y)
    dlag = lag.derivative()
    spl = CubicSpline(nodes, y)

    fx = np.asarray(f(xq), dtype=float)
    fpx = np.asarray(fp(xq), dtype=float)
    lag_v, lag_d = lag(xq), dlag(xq)
    spl_v, spl_d = spl(xq), spl(xq, nu=1)

    return pd.DataFrame(
        {
            "x": xq,
            "f": fx,
            "lagrange": lag_v,
            "spline": spl_v,
            "lagrange_err": np.abs(lag_v - fx),
            "spline_err": np.abs(spl_v - fx),
            "fp": fpx,
            "lagrange_d": lag_d,
            "spline_d": spl_d,
            "lagrange_d_err": np.abs(lag_d - fpx),
            "spline_d_err": np.abs(spl_d - fpx),
        }
    )


def piecewise_vs_global(
    nodes: NDArray[np.floating], values: NDArray[np.floating], xq: NDArray[np.floating]
) -> pd.DataFrame:
    """Piecewise-linear and global Lagrange interpolants of a data table on ``xq``."""
    xq = np.asarray(xq, dtype=float)
    pl = PiecewiseLinear(nodes, values)
    lag = LagrangeInterpolant(nodes, values)
    return pd.DataFrame({"x": xq, "piecewise_linear": pl(xq), "lagrange": lag(xq)})
