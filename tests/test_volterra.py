# tests/test_volterra.py
import math

import numpy as np
import pytest

from numcourse.diagnostics import observed_order, volterra_convergence
from numcourse.problems import homework_kernel, homework_rhs, solve_volterra_trapezoid


def _unit_kernel(x, t):
    return 1.0


def _unit_rhs(x):
    return np.ones_like(x)


def test_constant_kernel_gives_exponential_decay() -> None:
    # f + int_0^x f = 1  =>  f = exp(-x)
    x, f = solve_volterra_trapezoid(_unit_kernel, _unit_rhs, 1.0, 40)
    assert x.shape == f.shape == (41,)
    assert f[0] == 1.0
    np.testing.assert_allclose(f, np.exp(-x), atol=5e-5)

    # the trapezoid march is the trapezoid rule for f' = -f
    h = 1.0 / 40
    np.testing.assert_allclose(f, ((1 - h / 2) / (1 + h / 2)) ** np.arange(41), rtol=1e-12)


def test_second_order_convergence() -> None:
    Ns = [10, 20, 40, 80]
    errs = []
    for N in Ns:
        x, f = solve_volterra_trapezoid(_unit_kernel, _unit_rhs, 2.0, N)
        errs.append(np.max(np.abs(f - np.exp(-x))))
    assert observed_order(2.0 / np.array(Ns), np.array(errs)) == pytest.approx(2.0, abs=0.05)


def test_scalar_only_kernel_matches_vectorized() -> None:
    def scalar_kernel(x: float, t: float) -> float:
        return math.cos(x - t) if isinstance(x, float) else _reject()

    def _reject():
        raise TypeError("scalars only")

    _, f_scalar = solve_volterra_trapezoid(scalar_kernel, homework_rhs, 1.0, 16)
    _, f_vector = solve_volterra_trapezoid(lambda x, t: np.cos(x - t), homework_rhs, 1.0, 16)
    np.testing.assert_allclose(f_scalar, f_vector, rtol=1e-13, atol=1e-15)


def test_homework_problem_starts_at_g0() -> None:
    x, f = solve_volterra_trapezoid(homework_kernel, homework_rhs, 1.0, 20)
    assert f[0] == pytest.approx(1.0)
    # K(x, x) = 0, so the first step is explicit
    h = 0.05
    expected_f1 = homework_rhs(h) - h * 0.5 * homework_kernel(h, 0.0) * f[0]
    assert f[1] == pytest.approx(float(expected_f1))


def test_homework_convergence_table() -> None:
    df = volterra_convergence(Ns=(10, 20, 40, 80), N_ref=1280)
    assert list(df.columns) == ["N", "h", "l2_err", "max_err", "order"]
    assert np.all(np.diff(df["l2_err"].to_numpy()) < 0.0)
    assert df["order"].iloc[-1] == pytest.approx(2.0, abs=0.2)

    with pytest.raises(ValueError):
        volterra_convergence(Ns=(7,), N_ref=1280)


def test_input_validation() -> None:
    with pytest.raises(ValueError):
        solve_volterra_trapezoid(_unit_kernel, _unit_rhs, 0.0, 10)
    with pytest.raises(ValueError):
        solve_volterra_trapezoid(_unit_kernel, _unit_rhs, 1.0, 0)
