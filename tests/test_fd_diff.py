# tests/test_fd_diff.py

import numpy as np
import pytest

from numcourse.diagnostics import observed_order
from numcourse.numerics.fd import diff


def test_diff1_and_diff2_exact_for_quadratic_1d(rng, irregular_grid) -> None:
    """diff1/diff2 should be exact for quadratic polynomials (incl. one-sided boundaries)."""
    g = rng(2025)
    x = irregular_grid(g, n=31)
    a, b, c = g.normal(size=3)
    y = a * x**2 + b * x + c

    dy = diff.diff1_nonuniform(y, x, axis=0)
    d2y = diff.diff2_nonuniform(y, x, axis=0)

    np.testing.assert_allclose(dy, 2.0 * a * x + b, rtol=0.0, atol=1e-12)
    np.testing.assert_allclose(d2y, np.full_like(x, 2.0 * a), rtol=0.0, atol=1e-12)


def test_axis_semantics_on_2d_grid(rng, irregular_grid) -> None:
    """Differentiate along either axis of a separable polynomial surface."""
    g = rng(7)
    s = irregular_grid(g, n=15)
    x = irregular_grid(g, n=21)

    ax_, bx, cx = g.normal(size=3)
    as_, bs, cs = g.normal(size=3)

    fx = ax_ * x**2 + bx * x + cx
    gs = as_ * s**2 + bs * s + cs
    F = gs[:, None] + fx[None, :]

    expected_dx = np.broadcast_to((2.0 * ax_ * x + bx)[None, :], F.shape)
    np.testing.assert_allclose(diff.diff1_nonuniform(F, x, axis=1), expected_dx, atol=1e-12)
    np.testing.assert_allclose(diff.diff1_nonuniform(F, x, axis=-1), expected_dx, atol=1e-12)

    expected_ds = np.broadcast_to((2.0 * as_ * s + bs)[:, None], F.shape)
    np.testing.assert_allclose(diff.diff1_nonuniform(F, s, axis=0), expected_ds, atol=1e-12)


def test_diff_raises_on_mismatched_axis_length(rng, irregular_grid) -> None:
    g = rng(0)
    x = irregular_grid(g, n=10)
    y = g.normal(size=11)
    with pytest.raises(ValueError):
        _ = diff.diff1_nonuniform(y, x, axis=0)


def test_diff_raises_on_non_increasing_grid() -> None:
    x = np.array([0.0, 1.0, 1.0, 2.0], dtype=float)
    y = np.array([0.0, 1.0, 4.0, 9.0], dtype=float)
    with pytest.raises(ValueError):
        _ = diff.diff2_nonuniform(y, x, axis=0)


@pytest.mark.parametrize(
    "kind, order", [("forward", 1.0), ("backward", 1.0), ("central", 2.0)]
)
def test_difference_quotient_truncation_order(kind: str, order: float) -> None:
    hs = np.array([1e-1, 5e-2, 2.5e-2, 1.25e-2, 6.25e-3])
    approx = diff.difference_quotient(np.sin, 1.0, hs, kind=kind)
    err = np.abs(approx - np.cos(1.0))

    assert observed_order(hs, err) == pytest.approx(order, abs=0.1)


def test_difference_quotient_roundoff_dominates_tiny_steps() -> None:
    # below h ~ 1e-8 the forward quotient loses accuracy again
    err_mid = abs(diff.difference_quotient(np.exp, 0.0, 1e-8, kind="forward") - 1.0)
    err_tiny = abs(diff.difference_quotient(np.exp, 0.0, 1e-14, kind="forward") - 1.0)
    assert err_tiny > 10.0 * err_mid


def test_difference_quotient_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        diff.difference_quotient(np.sin, 0.0, 0.0)
    with pytest.raises(ValueError):
        diff.difference_quotient(np.sin, 0.0, 0.1, kind="sideways")  # type: ignore[arg-type]
