from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, is_dataclass
from typing import Any

import numpy as np
import pandas as pd
from numpy.typing import NDArray


def to_frame(items: Sequence[object]) -> pd.DataFrame:
    """Coerce a sequence of dicts or dataclasses into a DataFrame."""
    rows: list[dict[str, Any]] = []
    for it in items:
        if isinstance(it, dict):
            rows.append(dict(it))
        elif is_dataclass(it) and not isinstance(it, type):
            rows.append(asdict(it))
        else:
            raise TypeError(f"Unsupported item type: {type(it)}")
    return pd.DataFrame(rows)


def discrete_l2_norm(e: NDArray[np.floating], h: float) -> float:
    """sqrt(h * sum e_i^2), the grid analogue of the L2(0, L) norm."""
    if h <= 0.0:
        raise ValueError("h must be > 0")
    e = np.asarray(e, dtype=float)
    return float(np.sqrt(h * np.sum(e * e)))


def observed_order(h: NDArray[np.floating], err: NDArray[np.floating]) -> float:
    """Least-squares slope of log(err) against log(h).

    Non-finite and non-positive entries are ignored. Needs two usable points.
    """
    h = np.asarray(h, dtype=float)
    err = np.asarray(err, dtype=float)
    if h.shape != err.shape:
        raise ValueError("h and err must have the same shape")
    ok = np.isfinite(h) & np.isfinite(err) & (h > 0) & (err > 0)
    if np.count_nonzero(ok) < 2:
        raise ValueError("Need at least two positive, finite (h, err) pairs")
    slope, _ = np.polyfit(np.log(h[ok]), np.log(err[ok]), 1)
    return float(slope)


def add_local_orders(
    df: pd.DataFrame,
    *,
    h_col: str = "h",
    err_col: str = "err",
    out_col: str = "order",
) -> pd.DataFrame:
    """Add log(e_k/e_{k-1}) / log(h_k/h_{k-1}) between consecutive rows (sorted by h desc)."""
    d = df.sort_values(h_col, ascending=False).reset_index(drop=True)
    h = d[h_col].astype(float).to_numpy()
    e = d[err_col].astype(float).to_numpy()

    orders = np.full(h.shape, np.nan)
    with np.errstate(divide="ignore", invalid="ignore"):
        orders[1:] = np.log(e[1:] / e[:-1]) / np.log(h[1:] / h[:-1])
    d[out_col] = orders
    return d


def order_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Consistent column ordering for printed tables."""
    preferred = [
        "problem",
        "kind",
        "nodes",
        "n",
        "pe",
        "alpha",
        "scheme",
        "theta",
        "Nx",
        "Nt",
        "h",
        "dx",
        "dt",
        "dt_max",
        "stable",
        "oscillates",
        "num_diff",
        "err",
        "max_err",
        "l2_err",
        "max_abs_u",
        "order",
    ]
    cols = [c for c in preferred if c in df.columns] + [
        c for c in df.columns if c not in preferred
    ]
    return df[cols]


__all__ = [
    "to_frame",
    "discrete_l2_norm",
    "observed_order",
    "add_local_orders",
    "order_columns",
]
