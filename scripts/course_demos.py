"""Print the lecture and homework studies as tables, optionally saving figures.

Run from the repository root:

    PYTHONPATH=src python scripts/course_demos.py runge
    PYTHONPATH=src python scripts/course_demos.py steady --save-dir figures
    PYTHONPATH=src python scripts/course_demos.py all
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np
import pandas as pd

from numcourse.diagnostics import (
    difference_error_table,
    dx_sweep,
    interpolant_comparison,
    peclet_sweep,
    piecewise_vs_global,
    runge_table,
    transport_sweep,
    volterra_convergence,
)
from numcourse.numerics.interp import QuadraticSpline
from numcourse.problems import (
    AdvectionDiffusionParams,
    TransportParams,
    certify_sqrt,
    diffusion_reaction_exact,
    newton_sqrt,
    solve_diffusion_reaction,
)
from numcourse.problems.functions import HW1_NODES, HW1_VALUES, gaussian, gaussian_prime


def _show(title: str, df: pd.DataFrame) -> None:
    print("\n" + title)
    with pd.option_context("display.width", 140, "display.max_rows", 200):
        print(df.to_string(index=False))


def _save(fig, save_dir: Path | None, name: str) -> None:
    if save_dir is None:
        return
    save_dir.mkdir(parents=True, exist_ok=True)
    path = save_dir / f"{name}.png"
    fig.savefig(path, dpi=150)
    print(f"saved {path}")


def demo_runge(save_dir: Path | None) -> None:
    df = runge_table()
    _show("Runge function: max error of the degree-n interpolant", df)
    if save_dir is not None:
        from numcourse.diagnostics.plots import plot_runge

        fig, _ = plot_runge(df)
        _save(fig, save_dir, "runge")


def demo_interp(save_dir: Path | None) -> None:
    nodes = np.linspace(-2.0, 2.0, 9)
    df = interpolant_comparison(gaussian, gaussian_prime, nodes, np.linspace(-2.0, 2.0, 9) + 0.25)
    _show("exp(-x^2): Lagrange vs cubic spline (values and derivatives)", df)

    xq = np.linspace(0.0, 4.0, 9)
    hw1 = piecewise_vs_global(HW1_NODES, HW1_VALUES, xq)
    hw1["quadratic_spline"] = QuadraticSpline(HW1_NODES, HW1_VALUES)(xq)
    _show("HW1 table: piecewise linear vs global Lagrange vs quadratic spline", hw1)

    if save_dir is not None:
        from numcourse.diagnostics.plots import plot_interpolants

        xf = np.linspace(-2.0, 2.0, 401)
        fig, _ = plot_interpolants(
            interpolant_comparison(gaussian, gaussian_prime, nodes, xf),
            nodes=nodes,
            node_values=gaussian(nodes),
        )
        _save(fig, save_dir, "gaussian_interpolants")


def demo_fd(save_dir: Path | None) -> None:
    hs = np.logspace(-1, -12, 12)
    df = difference_error_table(np.sin, np.cos, 1.0, hs)
    _show("Difference quotients of sin at x=1", df)
    if save_dir is not None:
        from numcourse.diagnostics.plots import plot_difference_errors

        fig, _ = plot_difference_errors(df)
        _save(fig, save_dir, "difference_errors")


def demo_steady(save_dir: Path | None) -> None:
    params = AdvectionDiffusionParams(L=1.0, V=1.0, D=0.01)
    _show("Steady advection-diffusion, HW2 spacings", dx_sweep(params))
    df = peclet_sweep(params)
    _show("Steady advection-diffusion vs grid Peclet number", df)

    x, u = solve_diffusion_reaction(D=0.01, k=1.0, Nx=21)
    err = float(np.max(np.abs(u - diffusion_reaction_exact(x, D=0.01, k=1.0))))
    print(f"\nDiffusion-reaction (k/D = 100, Nx=21): max nodal error {err:.3e}")

    if save_dir is not None:
        from numcourse.diagnostics.plots import plot_peclet_sweep

        fig, _ = plot_peclet_sweep(df)
        _save(fig, save_dir, "peclet_sweep")


def demo_transport(save_dir: Path | None) -> None:
    df = transport_sweep(TransportParams())
    _show("Transient advection-diffusion-reaction at t=0.5", df)


def demo_volterra(save_dir: Path | None) -> None:
    df = volterra_convergence()
    _show("Volterra equation (trapezoid): L2 error vs h", df)
    if save_dir is not None:
        from numcourse.diagnostics.plots import plot_convergence

        fig, _ = plot_convergence(df, x_col="h", y_col="l2_err", ref_orders=(2.0,))
        _save(fig, save_dir, "volterra_convergence")


def demo_newton(save_dir: Path | None) -> None:
    res = newton_sqrt(10.0, x0=3.0, tol=1e-8)
    print("\nNewton-Raphson for sqrt(10), x0 = 3")
    for k, xk in enumerate(res.history):
        print(f"  x_{k} = {xk:.16f}")
    print(f"  certified |x - sqrt(10)| < 1e-8: {certify_sqrt(10.0, res.root, 1e-8)}")


DEMOS = {
    "runge": demo_runge,
    "interp": demo_interp,
    "fd": demo_fd,
    "steady": demo_steady,
    "transport": demo_transport,
    "volterra": demo_volterra,
    "newton": demo_newton,
}


def main() -> None:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("demo", choices=[*DEMOS, "all"])
    ap.add_argument("--save-dir", type=Path, default=None, help="write PNG figures here")
    args = ap.parse_args()

    if args.save_dir is not None:
        import matplotlib as mpl

        mpl.use("Agg", force=True)

    names = list(DEMOS) if args.demo == "all" else [args.demo]
    for name in names:
        DEMOS[name](args.save_dir)


if __name__ == "__main__":
    main()
