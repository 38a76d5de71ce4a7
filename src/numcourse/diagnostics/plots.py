"""Figures for the diagnostics tables. Every function returns (fig, ax)."""

from __future__ import annotations

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ._mpl import add_reference_slope, get_plt, pretty_ax, require_columns


def plot_convergence(
    df: pd.DataFrame,
    *,
    x_col: str = "h",
    y_col: str = "err",
    group_col: str | None = None,
    ref_orders: tuple[float, ...] = (),
    logx: bool = True,
    logy: bool = True,
    title: str | None = None,
    figsize=(7, 4),
):
    """Error against step size, one line per ``group_col`` value."""
    require_columns(df, [x_col, y_col])

    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)

    groups = [(None, df)] if group_col is None else list(df.groupby(group_col, dropna=False))
    for key, sub in groups:
        dd = sub.groupby(x_col, as_index=False)[y_col].mean(numeric_only=True)
        x = dd[x_col].astype(float).to_numpy()
        y = dd[y_col].astype(float).to_numpy()
        order = np.argsort(x)
        label = y_col if key is None else f"{group_col}={key}"
        ax.plot(x[order], y[order], marker="o", label=label)

    for p in ref_orders:
        add_reference_slope(ax, df[x_col], df[y_col], p)

    if logx:
        ax.set_xscale("log")
    if logy:
        ax.set_yscale("log")

    ax.set_xlabel(x_col)
    ax.set_ylabel(y_col)
    ax.set_title(title or f"Convergence: {y_col} vs {x_col}")
    ax.legend()
    pretty_ax(ax)
    return fig, ax


def plot_difference_errors(df: pd.DataFrame, *, figsize=(7, 4)):
    """Forward/backward/central quotient error vs h (output of difference_error_table)."""
    require_columns(df, ["kind", "h", "err"])
    return plot_convergence(
        df,
        x_col="h",
        y_col="err",
        group_col="kind",
        ref_orders=(1.0, 2.0),
        title="Difference quotient error vs h",
        figsize=figsize,
    )


def plot_runge(df: pd.DataFrame, *, figsize=(7, 4)):
    """Max interpolation error against degree for each node family."""
    require_columns(df, ["nodes", "n", "max_err"])

    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)
    for kind, sub in df.groupby("nodes"):
        sub = sub.sort_values("n")
        ax.semilogy(sub["n"], sub["max_err"], marker="o", label=str(kind))
    ax.set_xlabel("degree n")
    ax.set_ylabel("max |p_n - f|")
    ax.set_title("Runge phenomenon")
    ax.legend()
    pretty_ax(ax)
    return fig, ax


def plot_interpolants(
    df: pd.DataFrame,
    *,
    x_col: str = "x",
    curves: tuple[str, ...] = ("f", "lagrange", "spline"),
    nodes: NDArray[np.floating] | None = None,
    node_values: NDArray[np.floating] | None = None,
    figsize=(7, 4),
):
    """Overlay curves from a comparison table; optionally mark the data nodes."""
    require_columns(df, [x_col, *curves])

    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)
    for c in curves:
        ax.plot(df[x_col], df[c], label=c)
    if nodes is not None and node_values is not None:
        ax.plot(nodes, node_values, "ko", label="nodes")
    ax.set_xlabel(x_col)
    ax.legend()
    pretty_ax(ax)
    return fig, ax


def plot_profiles(
    x: NDArray[np.floating],
    profiles: dict[str, NDArray[np.floating]],
    *,
    exact: tuple[NDArray[np.floating], NDArray[np.floating]] | None = None,
    title: str = "",
    figsize=(7, 4),
):
    """Discrete solutions on ``x`` against an optional (x_fine, u_exact) curve."""
    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)
    if exact is not None:
        ax.plot(exact[0], exact[1], "k-", lw=1.0, label="exact")
    for label, u in profiles.items():
        ax.plot(x, u, marker=".", label=label)
    ax.set_xlabel("x")
    ax.set_ylabel("u")
    if title:
        ax.set_title(title)
    ax.legend()
    pretty_ax(ax)
    return fig, ax


def plot_peclet_sweep(df: pd.DataFrame, *, figsize=(7, 4)):
    """Max nodal error against grid Peclet number, one line per upstream weight."""
    require_columns(df, ["pe", "scheme", "max_err"])

    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)
    for key, sub in df.groupby("scheme"):
        sub = sub.sort_values("pe")
        ax.loglog(sub["pe"], sub["max_err"].clip(lower=1e-16), marker="o", label=f"alpha={key}")
    ax.axvline(2.0, ls=":", color="0.5")
    ax.set_xlabel("grid Peclet number")
    ax.set_ylabel("max nodal error")
    ax.set_title("Steady advection-diffusion")
    ax.legend()
    pretty_ax(ax)
    return fig, ax
