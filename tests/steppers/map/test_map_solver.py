# tests/steppers/map/test_map_solver.py
from __future__ import annotations

import numpy as np
import pytest

from dynmodels import InvalidParameterError, map_solver, map_step


def test_henon_iteration(henon):
    x0 = np.array([0.0, 0.0])
    traj = map_solver(henon, 100, x0)

    assert traj.shape == (100, 2)
    assert np.array_equal(traj[0], x0)
    for n in range(99):
        np.testing.assert_array_equal(traj[n + 1], henon(n, traj[n]))
    # bounded attractor
    assert np.all(np.abs(traj[10:, 0]) < 1.5)
    assert np.all(np.abs(traj[10:, 1]) < 0.5)


def test_iteration_index_is_zero_based():
    seen = []

    def counting(n, x):
        seen.append(n)
        return x + 1.0

    traj = map_solver(counting, 5, [0.0])
    assert seen == [0, 1, 2, 3]
    np.testing.assert_array_equal(traj[:, 0], [0.0, 1.0, 2.0, 3.0, 4.0])


def test_scalar_map(logistic):
    traj = map_solver(logistic, 4, 0.25, r=2.0)
    assert traj.shape == (4, 1)
    np.testing.assert_allclose(traj[:, 0], [0.25, 0.375, 0.46875, 0.498046875])


def test_options_forwarded(henon):
    traj_default = map_solver(henon, 10, [0.1, 0.1])
    traj_custom = map_solver(henon, 10, [0.1, 0.1], a=1.2)
    np.testing.assert_array_equal(traj_custom[1], henon(0, np.array([0.1, 0.1]), a=1.2))
    assert not np.allclose(traj_default[1:], traj_custom[1:])


def test_single_step_returns_x0(henon):
    traj = map_solver(henon, 1, [0.5, 0.5])
    np.testing.assert_array_equal(traj, [[0.5, 0.5]])


@pytest.mark.parametrize("n_steps", [0, -3])
def test_non_positive_steps_rejected(n_steps, henon):
    with pytest.raises(InvalidParameterError):
        map_solver(henon, n_steps, [0.0, 0.0])


@pytest.mark.parametrize("n_steps", [2.7, 3.5, None, True])
def test_non_integral_steps_rejected(n_steps, henon):
    with pytest.raises(InvalidParameterError, match="n_steps"):
        map_solver(henon, n_steps, [0.0, 0.0])


def test_integral_float_steps_accepted(henon):
    traj = map_solver(henon, 3.0, [0.0, 0.0])
    assert traj.shape == (3, 2)


def test_map_step_keeps_shape(henon):
    x = np.array([0.2, 0.1])
    out = map_step(henon, 0, x)
    assert out.shape == (2,)
    np.testing.assert_array_equal(x, [0.2, 0.1])
