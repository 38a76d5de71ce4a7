# src/numcourse/numerics/tridiag.py
"""Banded linear algebra for the 1D schemes: tridiagonal and lower bidiagonal.

A tridiagonal system of size M is stored as three bands,

    lower (M-1,)   diag (M,)   upper (M-1,)

with row j reading ``lower[j-1] x[j-1] + diag[j] x[j] + upper[j] x[j+1]``.
Finite-difference operators, cubic-spline moments and theta steps all
produce this shape, so one O(M) solver serves them all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "Tridiag",
    "tridiag_mv",
    "solve_tridiag_thomas",
    "solve_tridiag_scipy",
    "solve_bidiag_lower",
    "tridiag_to_dense",
]

_PIVOT_TOL = 100.0 * np.finfo(np.float64).eps


def _band_size(lower, diag, upper) -> int:
    """System size M implied by the bands; raises on inconsistent shapes."""
    diag = np.asarray(diag)
    if diag.ndim != 1:
        raise ValueError("diag must be 1D")
    M = int(diag.shape[0])
    off = (max(M - 1, 0),)
    if np.shape(lower) != off or np.shape(upper) != off:
        raise ValueError(
            f"lower/upper must have shape {off} for M={M}, "
            f"got {np.shape(lower)} and {np.shape(upper)}"
        )
    return M


def _check_rhs(rhs, M: int, name: str = "rhs") -> NDArray[np.floating]:
    rhs = np.asarray(rhs)
    if rhs.shape != (M,):
        raise ValueError(f"{name} must have shape {(M,)} got {rhs.shape}")
    return rhs


@dataclass(frozen=True, slots=True)
class Tridiag:
    lower: NDArray[np.floating]
    diag: NDArray[np.floating]
    upper: NDArray[np.floating]

    @classmethod
    def constant(cls, M: int, lower: float, diag: float, upper: float) -> Tridiag:
        """Constant bands, e.g. tridiag(1, -2, 1) for u'' on a uniform grid."""
        if M < 0:
            raise ValueError("M must be >= 0")
        off = max(M - 1, 0)
        return cls(
            np.full(off, float(lower)), np.full(M, float(diag)), np.full(off, float(upper))
        )

    def check(self) -> int:
        """Validate band shapes and return M. M == 0 (all bands empty) is allowed."""
        return _band_size(self.lower, self.diag, self.upper)

    def mv(self, u: NDArray[np.floating]) -> NDArray[np.floating]:
        return tridiag_mv(self.lower, self.diag, self.upper, u)

    def solve(self, rhs: NDArray[np.floating]) -> NDArray[np.floating]:
        return solve_tridiag_thomas(self, rhs)

    def to_dense(self) -> NDArray[np.floating]:
        return tridiag_to_dense(self)


def tridiag_mv(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
    u: NDArray[np.floating],
) -> NDArray[np.floating]:
    """y = T u without forming T."""
    M = _band_size(lower, diag, upper)
    u = _check_rhs(u, M, "u")
    diag = np.asarray(diag)

    y = np.array(diag * u, dtype=np.result_type(diag, u, np.float64))
    if M > 1:
        y[1:] += np.asarray(lower) * u[:-1]
        y[:-1] += np.asarray(upper) * u[1:]
    return cast(NDArray[np.floating], y)


def solve_tridiag_thomas(
    A: Tridiag,
    rhs: NDArray[np.floating],
    *,
    overwrite: bool = False,
) -> NDArray[np.floating]:
    """Solve A x = rhs by Gaussian elimination without pivoting (Thomas).

    Forward elimination turns row j into ``x[j] + c[j] x[j+1] = g[j]``, then
    back substitution recovers x. Both sweeps are O(M).

    Stable for diagonally dominant A, which covers the finite-difference
    and spline systems built in this package. A pivot smaller than
    100 * eps raises ``np.linalg.LinAlgError``. Inputs are left untouched
    unless ``overwrite=True`` (and the dtypes already match).
    """
    M = A.check()
    rhs = _check_rhs(rhs, M)
    dtype = np.result_type(A.lower, A.diag, A.upper, rhs, np.float64)
    if M == 0:
        return rhs.astype(dtype, copy=True)

    a = np.asarray(A.lower).astype(dtype, copy=False)
    b = np.asarray(A.diag).astype(dtype, copy=False)
    c = np.asarray(A.upper).astype(dtype, copy=not overwrite)
    g = rhs.astype(dtype, copy=not overwrite)

    piv = b[0]
    for j in range(M):
        if j > 0:
            piv = b[j] - a[j - 1] * c[j - 1]
        if abs(piv) < _PIVOT_TOL:
            raise np.linalg.LinAlgError(f"Near-zero pivot at row {j}")
        if j < M - 1:
            c[j] /= piv
        g[j] = (g[j] - (a[j - 1] * g[j - 1] if j > 0 else 0.0)) / piv

    for j in range(M - 2, -1, -1):
        g[j] -= c[j] * g[j + 1]
    return g


def solve_tridiag_scipy(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
    rhs: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Reference solve with SciPy's banded LU (partial pivoting).

    Same array signature as the ``solve_tridiag`` hook of the PDE steppers,
    so it can replace the Thomas solver there.
    """
    from scipy.linalg import solve_banded

    M = _band_size(lower, diag, upper)
    rhs = _check_rhs(rhs, M)
    if M == 0:
        return cast(NDArray[np.floating], rhs.astype(float, copy=True))

    ab = np.zeros((3, M), dtype=np.result_type(lower, diag, upper, rhs, np.float64))
    ab[0, 1:] = upper
    ab[1] = diag
    ab[2, :-1] = lower
    return cast(NDArray[np.floating], np.asarray(solve_banded((1, 1), ab, rhs)))


def solve_bidiag_lower(
    diag: NDArray[np.floating],
    lower: NDArray[np.floating],
    rhs: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Forward substitution for ``lower[i-1] x[i-1] + diag[i] x[i] = rhs[i]``."""
    diag = np.asarray(diag, dtype=float)
    lower = np.asarray(lower, dtype=float)
    if diag.ndim != 1:
        raise ValueError("diag must be 1D")
    M = int(diag.shape[0])
    if lower.shape != (max(M - 1, 0),):
        raise ValueError(f"lower must have shape {(max(M - 1, 0),)} got {lower.shape}")
    rhs = _check_rhs(np.asarray(rhs, dtype=float), M)

    small = np.flatnonzero(np.abs(diag) < _PIVOT_TOL)
    if small.size:
        raise np.linalg.LinAlgError(f"Near-zero pivot at row {int(small[0])}")

    x = np.empty(M, dtype=float)
    prev = 0.0
    for i in range(M):
        x[i] = (rhs[i] - (lower[i - 1] * prev if i else 0.0)) / diag[i]
        prev = x[i]
    return x


def tridiag_to_dense(
    lower: NDArray[np.floating] | Tridiag,
    diag: NDArray[np.floating] | None = None,
    upper: NDArray[np.floating] | None = None,
) -> NDArray[np.floating]:
    """Dense M x M matrix from a Tridiag or from (lower, diag, upper)."""
    if isinstance(lower, Tridiag):
        lower, diag, upper = lower.lower, lower.diag, lower.upper
    elif diag is None or upper is None:
        raise ValueError("Pass a Tridiag or all three bands")

    M = _band_size(lower, diag, upper)
    A = np.diag(np.asarray(diag, dtype=np.result_type(lower, diag, upper)))
    if M > 1:
        A += np.diag(np.asarray(lower), -1) + np.diag(np.asarray(upper), 1)
    return A
