# tests/test_root_finding.py
import math

import pytest

from numcourse.numerics.root_finding import (
    DerivativeTooSmallError,
    NoBracketError,
    NotBracketedError,
    RootMethod,
    bisection_method,
    bracketed_newton,
    ensure_bracket,
    get_root_method,
    newton_method,
)
from numcourse.problems import certify_sqrt, newton_sqrt


def test_newton_sqrt10_converges_quadratically() -> None:
    res = newton_sqrt(10.0, x0=3.0, tol=1e-8)

    assert res.converged
    assert res.root == pytest.approx(math.sqrt(10.0), abs=1e-14)
    assert res.history[0] == 3.0
    assert res.history[1] == pytest.approx(19.0 / 6.0)
    assert res.iterations == len(res.history) - 1 <= 6

    errs = [abs(x - math.sqrt(10.0)) for x in res.history]
    for e0, e1 in zip(errs, errs[1:]):
        if e0 > 1e-6:
            assert e1 <= e0 * e0


def test_certify_sqrt_without_sqrt() -> None:
    root = newton_sqrt(10.0).root
    assert certify_sqrt(10.0, root, 1e-8)
    assert certify_sqrt(10.0, 3.1623, 1e-4)
    assert not certify_sqrt(10.0, 3.16, 1e-8)
    assert not certify_sqrt(10.0, 3.17, 1e-3)
    # lower end below zero
    assert certify_sqrt(0.0, 0.0, 1e-12)

    with pytest.raises(ValueError):
        certify_sqrt(-1.0, 1.0, 1e-3)


@pytest.mark.parametrize("a, x0", [(1e6, 1.0), (0.25, 5.0), (2.0, 1.0)])
def test_newton_sqrt_starts_from_x0_without_a_bracket(a: float, x0: float) -> None:
    res = newton_sqrt(a, x0=x0)
    assert res.converged
    assert res.bracket is None
    assert res.history[0] == x0
    assert res.root == pytest.approx(math.sqrt(a), rel=1e-12)


def test_newton_sqrt_input_checks() -> None:
    with pytest.raises(ValueError):
        newton_sqrt(-4.0)
    with pytest.raises(ValueError):
        newton_sqrt(4.0, x0=0.0)


@pytest.mark.parametrize("method", [bisection_method, bracketed_newton])
def test_bracketing_methods_find_cube_root(method) -> None:
    res = method(lambda x: x**3 - 2.0, 0.0, 2.0, tol_f=1e-14, tol_x=1e-14)
    assert res.converged
    assert res.root == pytest.approx(2.0 ** (1.0 / 3.0), abs=1e-10)
    assert res.bracket is not None
    assert len(res.history) >= 1


def test_bisection_history_halves() -> None:
    res = bisection_method(lambda x: x - 0.3, 0.0, 1.0, tol_f=0.0, tol_x=1e-6)
    assert res.history[:3] == (0.5, 0.25, 0.375)


def test_bracketing_requires_sign_change() -> None:
    with pytest.raises(NotBracketedError):
        bisection_method(lambda x: x * x + 1.0, -1.0, 1.0)
    with pytest.raises(NotBracketedError):
        bracketed_newton(lambda x: x * x + 1.0, -1.0, 1.0)


def test_newton_numerical_derivative_and_flat_start() -> None:
    res = newton_method(math.cos, 0.0, 3.0, x0=1.0)
    assert res.root == pytest.approx(math.pi / 2.0, abs=1e-9)

    with pytest.raises(DerivativeTooSmallError):
        newton_method(lambda x: x * x + 1.0, -1.0, 1.0, x0=0.0, dFn=lambda x: 2.0 * x)


def test_ensure_bracket_expands_and_fails() -> None:
    lo, hi = ensure_bracket(lambda x: x - 5.0, 0.0, 1.0, hi_max=100.0)
    assert lo == 0.0 and hi >= 5.0

    with pytest.raises(NoBracketError):
        ensure_bracket(lambda x: x - 50.0, 0.0, 1.0, hi_max=10.0)
    # NoBracketError is a NotBracketedError
    with pytest.raises(NotBracketedError):
        ensure_bracket(lambda x: 1.0, 0.0, 1.0)
    with pytest.raises(ValueError):
        ensure_bracket(lambda x: x, 1.0, 0.0)


def test_get_root_method() -> None:
    assert get_root_method("newton") is newton_method
    assert get_root_method(RootMethod.BISECTION) is bisection_method
    with pytest.raises(ValueError):
        get_root_method("secant")
