"""Shared Matplotlib helpers for the diagnostics plots."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from matplotlib.axes import Axes


def get_plt():
    """Import and return matplotlib.pyplot with a helpful error if missing."""
    try:
        import matplotlib.pyplot as plt
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "Plotting requires matplotlib. Install it with: pip install matplotlib"
        ) from e
    return plt


def pretty_ax(ax: Axes) -> None:
    """Light grid, no top/right spines, opaque legend frame."""
    ax.grid(axis="both", alpha=0.25)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    leg = ax.get_legend()
    if leg is not None:
        leg.set_frame_on(True)
        frame = leg.get_frame()
        if frame is not None:
            frame.set_alpha(0.95)


def add_reference_slope(
    ax: Axes, h, err, order: float, *, label: str | None = None
) -> None:
    """Dashed line of slope ``order`` on log-log axes, anchored at the first point."""
    h = np.asarray(h, dtype=float)
    err = np.asarray(err, dtype=float)
    ok = np.isfinite(h) & np.isfinite(err) & (h > 0) & (err > 0)
    if not np.any(ok):
        return
    h, err = h[ok], err[ok]
    i = int(np.argmax(h))
    ref = err[i] * (h / h[i]) ** order
    order_idx = np.argsort(h)
    ax.plot(
        h[order_idx],
        ref[order_idx],
        ls="--",
        color="0.5",
        label=label if label is not None else f"O(h^{order:g})",
    )


def require_columns(df, cols: Iterable[str]) -> None:
    """Raise ValueError if DataFrame is missing any required columns."""
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"DataFrame missing required columns: {missing}")
