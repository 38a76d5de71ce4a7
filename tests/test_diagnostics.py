# tests/test_diagnostics.py
from dataclasses import dataclass

import numpy as np
import pandas as pd
import pytest

from numcourse.diagnostics import (
    add_local_orders,
    difference_error_table,
    discrete_l2_norm,
    dx_sweep,
    interpolant_comparison,
    is_oscillating,
    observed_order,
    order_columns,
    peclet_sweep,
    piecewise_vs_global,
    runge_table,
    to_frame,
    transport_run,
    transport_sweep,
)
from numcourse.problems import AdvectionDiffusionParams, TransportParams
from numcourse.problems.functions import HW1_NODES, HW1_VALUES, gaussian, gaussian_prime

# --- Table helpers ----------------------------------------------------------


@dataclass(frozen=True)
class _Row:
    h: float
    err: float


def test_to_frame_accepts_dicts_and_dataclasses() -> None:
    df = to_frame([_Row(0.1, 1e-2), {"h": 0.05, "err": 2.5e-3}])
    assert list(df.columns) == ["h", "err"]
    assert len(df) == 2
    with pytest.raises(TypeError):
        to_frame([(0.1, 1e-2)])


def test_discrete_l2_norm() -> None:
    assert discrete_l2_norm(np.ones(10), 0.1) == pytest.approx(1.0)
    with pytest.raises(ValueError):
        discrete_l2_norm(np.ones(3), 0.0)


def test_observed_order_and_local_orders() -> None:
    h = np.array([0.1, 0.05, 0.025, 0.0125])
    err = 3.0 * h**2
    assert observed_order(h, err) == pytest.approx(2.0)
    # zeros and NaNs are ignored
    assert observed_order(np.append(h, 1e-3), np.append(err, 0.0)) == pytest.approx(2.0)
    with pytest.raises(ValueError):
        observed_order(h[:1], err[:1])

    df = add_local_orders(pd.DataFrame({"h": h[::-1], "err": err[::-1]}))
    assert np.isnan(df["order"].iloc[0])
    np.testing.assert_allclose(df["order"].iloc[1:], 2.0)
    assert df["h"].iloc[0] == 0.1


def test_order_columns_puts_known_columns_first() -> None:
    df = pd.DataFrame({"extra": [1], "err": [0.1], "h": [0.5], "kind": ["central"]})
    assert list(order_columns(df).columns) == ["kind", "h", "err", "extra"]


def test_is_oscillating() -> None:
    assert is_oscillating(np.array([1.0, 0.2, 0.6, 0.0]))
    assert not is_oscillating(np.array([1.0, 0.8, 0.8, 0.1, 0.0]))


# --- Lecture studies --------------------------------------------------------


def test_difference_error_table_slopes() -> None:
    hs = np.logspace(-1, -3, 5)
    df = difference_error_table(np.sin, np.cos, 1.0, hs)
    assert list(df.columns) == ["kind", "h", "approx", "exact", "err"]
    assert len(df) == 15

    for kind, expected in (("forward", 1.0), ("backward", 1.0), ("central", 2.0)):
        sub = df[df["kind"] == kind]
        assert observed_order(sub["h"].to_numpy(), sub["err"].to_numpy()) == pytest.approx(
            expected, abs=0.1
        )


def test_runge_table() -> None:
    df = runge_table()
    assert list(df.columns) == ["nodes", "n", "max_err"]
    assert len(df) == 10

    eq = df[df["nodes"] == "equispaced"].set_index("n")["max_err"]
    ch = df[df["nodes"] == "chebyshev"].set_index("n")["max_err"]
    assert eq[20] > eq[4] and eq[20] > 1.0
    assert ch[20] < ch[4] and ch[20] < 0.05


def test_interpolant_comparison_gaussian() -> None:
    nodes = np.linspace(-2.0, 2.0, 17)
    xq = np.linspace(-2.0, 2.0, 201)
    df = interpolant_comparison(gaussian, gaussian_prime, nodes, xq)

    for col in ("x", "f", "lagrange", "spline", "lagrange_err", "spline_err", "spline_d_err"):
        assert col in df.columns
    assert len(df) == xq.size
    assert df["spline_err"].max() < 1e-2
    assert df["lagrange_err"].max() < 0.1


def test_piecewise_vs_global_hw1() -> None:
    df = piecewise_vs_global(HW1_NODES, HW1_VALUES, HW1_NODES)
    np.testing.assert_allclose(df["piecewise_linear"], HW1_VALUES)
    np.testing.assert_allclose(df["lagrange"], HW1_VALUES, atol=1e-12)


def test_dx_sweep_oscillation_pattern(ad_params) -> None:
    df = dx_sweep(ad_params)
    assert len(df) == 15
    assert {"pe", "dx", "Nx", "alpha", "scheme", "max_err", "oscillates"} <= set(df.columns)

    upwind = df[df["scheme"] == "1"]
    central = df[df["scheme"] == "0"]
    assert not upwind["oscillates"].any()
    assert central[central["pe"] > 2.0 + 1e-9]["oscillates"].all()
    assert not central[central["pe"] < 2.0 - 1e-9]["oscillates"].any()


def test_peclet_sweep_optimal_rows_are_exact(ad_params) -> None:
    df = peclet_sweep(ad_params)
    assert len(df) == 15
    np.testing.assert_allclose(
        sorted(df["pe"].unique()), [0.1, 1.0, 2.0, 5.0, 10.0], rtol=1e-9
    )
    opt = df[df["scheme"] == "optimal"]
    assert (opt["max_err"] < 1e-10).all()
    assert not opt["oscillates"].any()

    np.testing.assert_allclose(
        df["num_diff"], df["alpha"] * abs(ad_params.V) * df["dx"] / 2.0, rtol=1e-12
    )
    assert (df[df["scheme"] == "0"]["num_diff"] == 0.0).all()

    with pytest.raises(ValueError):
        peclet_sweep(AdvectionDiffusionParams(V=0.0))
    with pytest.raises(ValueError):
        dx_sweep(ad_params, dxs=(0.1,), alphas=("best",))


def test_transport_sweep_flags_unstable_explicit_runs(transport_params) -> None:
    df = transport_sweep(
        transport_params, pe_list=(1.0,), alphas=(0.0, 1.0), thetas=(0.0, 0.5), t_end=0.2
    )
    assert len(df) == 4
    assert {"pe", "alpha", "theta", "dt_max", "stable", "l2_err", "max_abs_u"} <= set(df.columns)

    explicit = df[df["theta"] == 0.0]
    cn = df[df["theta"] == 0.5]
    assert not explicit["stable"].any()
    assert cn["stable"].all()
    assert np.isinf(cn["dt_max"]).all()
    assert (cn["l2_err"] < 0.05).all()


def test_transport_run_record() -> None:
    run = transport_run(
        TransportParams(), pe=2.0, alpha=1.0, theta=1.0, dt=0.02, t_end=0.1
    )
    assert run.Nx == 51 and run.Nt == 6
    assert run.pe == pytest.approx(2.0)
    assert run.stable and run.max_abs_u <= 1.0 + 1e-9
