from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
import pandas as pd

from ..numerics.fd import difference_quotient
from .tables import to_frame

_KINDS = ("forward", "backward", "central")


def difference_error_table(
    f: Callable[[np.ndarray], np.ndarray],
    fp: Callable[[float], float],
    x0: float,
    hs: Sequence[float],
    kinds: Sequence[str] = _KINDS,
) -> pd.DataFrame:
    """|quotient - f'(x0)| for each step and quotient kind, one row per (kind, h).

    Plotted on log-log axes the forward/backward errors fall with slope 1 and
    the central error with slope 2 until round-off (~eps/h) takes over.
    """
    hs_arr = np.asarray(hs, dtype=float)
    exact = float(fp(float(x0)))
    rows: list[dict[str, object]] = []
    for kind in kinds:
        approx = difference_quotient(f, x0, hs_arr, kind=kind)  # type: ignore[arg-type]
        for h, a in zip(hs_arr, np.atleast_1d(approx), strict=True):
            rows.append(
                {
                    "kind": kind,
                    "h": float(h),
                    "approx": float(a),
                    "exact": exact,
                    "err": abs(float(a) - exact),
                }
            )
    return to_frame(rows)
