"""Scalar root finding: bisection, Newton-Raphson and a safeguarded hybrid.

All finders take ``(Fn, lo, hi, *, x0, dFn, tol_f, tol_x, max_iter, domain)``
so they can be swapped through :func:`get_root_method`. Arguments a finder
has no use for are accepted and ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from ..typing import ScalarFn

_MIN_SLOPE = 1e-14  # |F'(x)| below this stops a Newton step


@dataclass(frozen=True, slots=True)
class RootResult:
    root: float
    converged: bool
    iterations: int
    method: str
    f_at_root: float
    bracket: tuple[float, float] | None = None
    history: tuple[float, ...] = ()  # successive iterates, starting guess first


class RootFindingError(Exception):
    """Base class for root-finding failures."""


class NotBracketedError(RootFindingError):
    """F(lo) and F(hi) do not differ in sign."""


class NoConvergenceError(RootFindingError):
    """max_iter reached before the tolerances were met."""


class DerivativeTooSmallError(RootFindingError):
    """A Newton step would divide by a (nearly) vanishing slope."""


class NoBracketError(NotBracketedError):
    """ensure_bracket ran out of room or steps without a sign change."""


class RootMethod(str, Enum):
    BISECTION = "bisection"
    NEWTON = "newton"
    BRACKETED_NEWTON = "bracketed_newton"


class RootFinder(Protocol):
    def __call__(self, Fn: ScalarFn, lo: float, hi: float, **kwargs: Any) -> RootResult: ...


def _clamp(x: float, domain: tuple[float, float] | None) -> float:
    if domain is None:
        return x
    return min(max(x, domain[0]), domain[1])


def _interval(
    lo: float, hi: float, domain: tuple[float, float] | None
) -> tuple[float, float]:
    a, b = min(lo, hi), max(lo, hi)
    return _clamp(a, domain), _clamp(b, domain)


def _slope(Fn: ScalarFn, dFn: ScalarFn | None, x: float) -> float:
    if dFn is not None:
        return dFn(x)
    step = 1e-5 * max(1.0, abs(x))
    return (Fn(x + step) - Fn(x - step)) / (2.0 * step)


def _bracket_values(
    Fn: ScalarFn, a: float, b: float, tol_f: float, method: str
) -> tuple[float, float] | RootResult:
    """F(a), F(b) for a valid bracket, or an immediate result if an end is a root."""
    fa = Fn(a)
    if abs(fa) <= tol_f:
        return RootResult(a, True, 0, method, fa, (a, b), (a,))
    fb = Fn(b)
    if abs(fb) <= tol_f:
        return RootResult(b, True, 0, method, fb, (a, b), (b,))
    if fa * fb > 0:
        raise NotBracketedError(
            f"{method}: F(lo)={fa:.3g} and F(hi)={fb:.3g} have the same sign"
        )
    return fa, fb


def bisection_method(
    Fn: ScalarFn,
    lo: float,
    hi: float,
    *,
    x0: float | None = None,
    dFn: ScalarFn | None = None,
    tol_f: float = 1e-8,
    tol_x: float = 1e-12,
    max_iter: int = 10_000,
    domain: tuple[float, float] | None = None,
    **ignored_kwargs: Any,
) -> RootResult:
    """Halve [lo, hi] keeping the sign change; linear convergence, error <= (hi-lo)/2^k."""
    a, b = _interval(lo, hi, domain)
    ends = _bracket_values(Fn, a, b, tol_f, "bisection")
    if isinstance(ends, RootResult):
        return ends
    fa, _ = ends

    mids: list[float] = []
    for k in range(1, max_iter + 1):
        m = a + 0.5 * (b - a)
        fm = Fn(m)
        mids.append(m)
        if abs(fm) <= tol_f:
            return RootResult(m, True, k, "bisection", fm, (a, b), tuple(mids))

        if fa * fm < 0:
            b = m
        else:
            a, fa = m, fm

        if 0.5 * (b - a) <= tol_x:
            m = a + 0.5 * (b - a)
            return RootResult(m, True, k, "bisection", Fn(m), (a, b), tuple(mids))

    raise NoConvergenceError(f"bisection: no convergence in {max_iter} iterations")


def newton_method(
    Fn: ScalarFn,
    lo: float,
    hi: float,
    *,
    x0: float | None = None,
    dFn: ScalarFn | None = None,
    tol_f: float = 1e-10,
    tol_x: float = 1e-12,
    max_iter: int = 50,
    domain: tuple[float, float] | None = None,
    **ignored_kwargs: Any,
) -> RootResult:
    """Newton-Raphson: x_{k+1} = x_k - F(x_k)/F'(x_k).

    Starts from ``x0`` if given, else the midpoint of (lo, hi). Without
    ``dFn`` a central-difference derivative is used. Converges quadratically
    near a simple root; ``RootResult.history`` records every iterate.
    """
    a, b = min(lo, hi), max(lo, hi)
    x = _clamp(0.5 * (a + b) if x0 is None else x0, domain)
    iterates = [x]

    for k in range(max_iter):
        fx = Fn(x)
        if abs(fx) <= tol_f:
            return RootResult(x, True, k, "newton", fx, None, tuple(iterates))

        d = _slope(Fn, dFn, x)
        if abs(d) < _MIN_SLOPE:
            raise DerivativeTooSmallError(f"newton: F'({x:.6g}) = {d:.3g}")

        x_next = _clamp(x - fx / d, domain)
        iterates.append(x_next)
        if abs(x_next - x) <= tol_x * max(1.0, abs(x_next)):
            return RootResult(x_next, True, k + 1, "newton", Fn(x_next), None, tuple(iterates))
        x = x_next

    raise NoConvergenceError(f"newton: no convergence in {max_iter} iterations")


def bracketed_newton(
    Fn: ScalarFn,
    lo: float,
    hi: float,
    *,
    x0: float | None = None,
    dFn: ScalarFn | None = None,
    tol_f: float = 1e-10,
    tol_x: float = 1e-12,
    max_iter: int = 100,
    domain: tuple[float, float] | None = None,
    **ignored_kwargs: Any,
) -> RootResult:
    """Newton steps that fall back to bisection whenever they leave the bracket."""
    name = "bracketed_newton"
    a, b = _interval(lo, hi, domain)
    ends = _bracket_values(Fn, a, b, tol_f, name)
    if isinstance(ends, RootResult):
        return ends
    fa, _ = ends

    x = x0 if (x0 is not None and a < x0 < b) else 0.5 * (a + b)
    iterates = [x]

    for k in range(max_iter):
        fx = Fn(x)
        if abs(fx) <= tol_f:
            return RootResult(x, True, k, name, fx, (a, b), tuple(iterates))

        if fa * fx < 0:
            b = x
        else:
            a, fa = x, fx
        if 0.5 * (b - a) <= tol_x:
            m = a + 0.5 * (b - a)
            return RootResult(m, True, k + 1, name, Fn(m), (a, b), tuple(iterates))

        d = _slope(Fn, dFn, x)
        x_next = 0.5 * (a + b)
        if abs(d) >= _MIN_SLOPE and a < x - fx / d < b:
            x_next = x - fx / d
        iterates.append(x_next)

        if abs(x_next - x) <= tol_x * max(1.0, abs(x_next)):
            return RootResult(x_next, True, k + 1, name, Fn(x_next), (a, b), tuple(iterates))
        x = x_next

    raise NoConvergenceError(f"{name}: no convergence in {max_iter} iterations")


def ensure_bracket(
    Fn: ScalarFn,
    lo: float,
    hi: float,
    *,
    hi_max: float = 10.0,
    grow: float = 2.0,
    max_steps: int = 60,
    domain: tuple[float, float] | None = None,
) -> tuple[float, float]:
    """Grow ``hi`` by ``grow`` until F changes sign on [lo, hi].

    Returns (lo, hi) with F(lo) == 0, F(hi) == 0 or F(lo)*F(hi) < 0. Raises
    :class:`NoBracketError` once ``hi`` reaches ``hi_max`` or ``max_steps``
    expansions have been spent.
    """
    if hi <= lo:
        raise ValueError("Require lo < hi")
    if grow <= 1.0:
        raise ValueError("Require grow > 1")
    hi_max = max(hi_max, hi)

    lo, hi = _clamp(lo, domain), _clamp(hi, domain)
    if hi <= lo:
        raise ValueError("lo < hi must still hold after clamping to domain")

    f_lo, f_hi = Fn(lo), Fn(hi)
    for _ in range(max_steps + 1):
        if f_lo == 0.0 or f_hi == 0.0 or f_lo * f_hi < 0:
            return lo, hi
        if hi >= hi_max:
            break
        hi = _clamp(min(grow * hi, hi_max), domain)
        f_hi = Fn(hi)

    sign = "positive" if f_lo > 0 else "negative"
    raise NoBracketError(f"F stayed {sign} on [{lo:g}, {hi:g}]")


_ROOT_METHODS: dict[RootMethod, RootFinder] = {
    RootMethod.BISECTION: bisection_method,
    RootMethod.NEWTON: newton_method,
    RootMethod.BRACKETED_NEWTON: bracketed_newton,
}


def get_root_method(method: RootMethod | str) -> RootFinder:
    try:
        return _ROOT_METHODS[RootMethod(method)]
    except ValueError as e:
        choices = ", ".join(m.value for m in RootMethod)
        raise ValueError(f"Unknown root method '{method}'. Available: {choices}") from e
