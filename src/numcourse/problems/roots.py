"""Square roots by Newton-Raphson, with a sqrt-free accuracy certificate."""

from __future__ import annotations

from fractions import Fraction

from ..numerics.root_finding import RootResult, newton_method


def newton_sqrt(a: float, x0: float = 3.0, tol: float = 1e-8, max_iter: int = 50) -> RootResult:
    """Solve x^2 - a = 0 by Newton's method, x_{k+1} = (x_k + a/x_k) / 2.

    Stops when successive iterates differ by less than ``tol`` (relative to
    max(1, |x|)). Convergence is quadratic, so the last step is far smaller
    than ``tol``; ``certify_sqrt`` turns that into a proof.
    """
    if a < 0.0:
        raise ValueError("a must be >= 0")
    if x0 <= 0.0:
        raise ValueError("x0 must be > 0")
    # Newton uses no bracket; lo = hi = x0 only fills the common finder signature
    return newton_method(
        lambda x: x * x - a,
        x0,
        x0,
        x0=x0,
        dFn=lambda x: 2.0 * x,
        tol_f=0.0,
        tol_x=tol,
        max_iter=max_iter,
    )


def certify_sqrt(a: float, x: float, eps: float) -> bool:
    """True iff |x - sqrt(a)| < eps, decided without evaluating a square root.

    Since t -> t^2 is increasing on [0, inf), sqrt(a) lies in (x - eps,
    x + eps) iff (x - eps)^2 < a < (x + eps)^2 (with the lower square taken
    as 0 when x - eps < 0). The comparison uses exact rational arithmetic on
    the binary values of the floats, so rounding cannot fake a certificate.
    """
    if a < 0.0 or eps <= 0.0:
        raise ValueError("Require a >= 0 and eps > 0")
    fa, fx, fe = Fraction(a), Fraction(x), Fraction(eps)
    lo = fx - fe
    hi = fx + fe
    if hi <= 0:
        return False
    lower_ok = lo < 0 or lo * lo < fa
    return lower_ok and fa < hi * hi
