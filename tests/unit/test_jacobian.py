# tests/unit/test_jacobian.py
from __future__ import annotations

import numpy as np
import pytest

from dynmodels import jacobian_trace, numerical_jacobian


def test_lorenz_trace_is_constant(lorenz):
    sigma, beta = 10.0, 8.0 / 3.0
    rng = np.random.default_rng(1)
    for n in range(100):
        x = rng.standard_normal(3)
        assert jacobian_trace(lorenz, float(n), x) == pytest.approx(-sigma - beta - 1.0, abs=1e-6)


def test_rossler_trace_depends_on_state(rossler):
    a, c = 0.2, 5.7
    rng = np.random.default_rng(2)
    for n in range(100):
        x = rng.standard_normal(3)
        assert jacobian_trace(rossler, float(n), x) == pytest.approx(a - c + x[0], abs=1e-6)


def test_options_reach_field(lorenz):
    x = np.array([0.5, -1.0, 2.0])
    assert jacobian_trace(lorenz, 0.0, x, sigma=3.0, beta=1.0) == pytest.approx(-5.0, abs=1e-6)


def test_henon_jacobian_entries(henon):
    x = np.array([0.4, -0.2])
    J = numerical_jacobian(henon, 0, x)
    np.testing.assert_allclose(J, [[-2.0 * 1.4 * 0.4, 1.0], [0.3, 0.0]], atol=1e-8)
