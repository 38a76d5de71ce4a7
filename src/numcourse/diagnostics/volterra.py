from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
import pandas as pd

from ..problems.volterra import homework_kernel, homework_rhs, solve_volterra_trapezoid
from ..typing import KernelFn
from .tables import add_local_orders, discrete_l2_norm, to_frame


def volterra_convergence(
    Ns: Sequence[int] = (10, 20, 40, 80, 160),
    N_ref: int = 2560,
    *,
    kernel: KernelFn = homework_kernel,
    g: Callable[[np.ndarray], np.ndarray] = homework_rhs,
    x_end: float = 1.0,
) -> pd.DataFrame:
    """L2 error of the trapezoid solution against a fine-grid reference.

    Every N must divide ``N_ref`` so coarse nodes coincide with reference
    nodes. The ``order`` column should approach 2.
    """
    _, f_ref = solve_volterra_trapezoid(kernel, g, x_end, N_ref)
    rows: list[dict[str, object]] = []
    for N in Ns:
        if N_ref % N != 0:
            raise ValueError(f"N={N} does not divide N_ref={N_ref}")
        _, f = solve_volterra_trapezoid(kernel, g, x_end, N)
        h = x_end / N
        e = f - f_ref[:: N_ref // N]
        rows.append(
            {
                "N": int(N),
                "h": h,
                "l2_err": discrete_l2_norm(e, h),
                "max_err": float(np.max(np.abs(e))),
            }
        )
    return add_local_orders(to_frame(rows), h_col="h", err_col="l2_err")
