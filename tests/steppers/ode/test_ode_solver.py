# tests/steppers/ode/test_ode_solver.py
from __future__ import annotations

import numpy as np
import pytest

from dynmodels import (
    UnsupportedSolverError,
    InvalidParameterError,
    euler,
    heun,
    integrate,
    map_step,
    midpoint,
    ode_solver,
    rk4,
    solve_trajectory,
)
from dynmodels.steppers.registry import list_steppers

ODE_STEPPERS = [euler, heun, midpoint, rk4]


@pytest.mark.parametrize("stepper", ODE_STEPPERS)
def test_trajectory_starts_at_x0_and_matches_grid(stepper, lorenz):
    x0 = np.array([1.0, 1.0, 1.0]) / 3.0
    t_grid = np.linspace(0.0, 1.0, 57)
    traj = ode_solver(stepper, lorenz, t_grid, x0)

    assert traj.shape == (57, 3)
    assert np.array_equal(traj[0], x0)


@pytest.mark.parametrize("stepper", ODE_STEPPERS)
def test_non_uniform_grid_recomputes_step(stepper, harmonic):
    t_grid = np.array([0.0, 0.1, 0.15, 0.4, 0.41, 1.0])
    x0 = np.array([1.0, 0.0])
    traj = ode_solver(stepper, harmonic, t_grid, x0)

    for i in range(t_grid.size - 1):
        h = t_grid[i + 1] - t_grid[i]
        np.testing.assert_array_equal(traj[i + 1], stepper(harmonic, t_grid[i], traj[i], h))


def test_stepper_given_by_name(harmonic):
    t_grid = np.linspace(0.0, 2.0, 21)
    x0 = [1.0, 0.0]
    by_fn = ode_solver(midpoint, harmonic, t_grid, x0)
    np.testing.assert_array_equal(ode_solver("rk2", harmonic, t_grid, x0), by_fn)
    np.testing.assert_array_equal(ode_solver("mean_point", harmonic, t_grid, x0), by_fn)


@pytest.mark.parametrize(
    "stepper",
    [lambda f, t, x, h: x, "rk45", map_step, None],
)
def test_unknown_stepper_rejected(stepper, harmonic):
    with pytest.raises(UnsupportedSolverError) as excinfo:
        ode_solver(stepper, harmonic, [0.0, 0.1], [1.0, 0.0])
    for name in list_steppers("ode"):
        assert name in str(excinfo.value)


def test_unknown_stepper_is_a_value_error(harmonic):
    with pytest.raises(ValueError):
        ode_solver("bogus", harmonic, [0.0, 0.1], [1.0, 0.0])


@pytest.mark.parametrize("t_grid", [[0.0], [], [0.0, 0.1, 0.1], [0.0, 0.2, 0.1]])
def test_bad_grid_rejected(t_grid, harmonic):
    with pytest.raises(InvalidParameterError):
        ode_solver(rk4, harmonic, t_grid, [1.0, 0.0])


def test_backward_integration_returns_to_start(harmonic):
    x0 = np.array([0.3, -0.7])
    t_fwd = np.linspace(0.0, 2.0, 201)
    x_end = ode_solver(rk4, harmonic, t_fwd, x0)[-1]
    x_back = ode_solver(rk4, harmonic, t_fwd[::-1], x_end)[-1]
    np.testing.assert_allclose(x_back, x0, atol=1e-9)


def test_x0_not_mutated(harmonic):
    x0 = np.array([1.0, 0.0])
    ode_solver(rk4, harmonic, np.linspace(0.0, 1.0, 11), x0)
    np.testing.assert_array_equal(x0, [1.0, 0.0])


def test_solve_trajectory_uniform_grid(harmonic):
    t_grid, traj = solve_trajectory(harmonic, [1.0, 0.0], 1.0, 0.01)
    assert t_grid.shape == (101,)
    assert t_grid[0] == 0.0
    assert t_grid[-1] == pytest.approx(1.0)
    assert traj.shape == (101, 2)
    np.testing.assert_array_equal(traj, ode_solver(rk4, harmonic, t_grid, [1.0, 0.0]))


def test_integrate_matches_solver_end_point(lorenz):
    x0 = np.array([1.0, 1.0, 1.0])
    x_end, t_end = integrate(lorenz, 0.0, x0, 0.5, 0.01)
    traj = ode_solver(rk4, lorenz, 0.01 * np.arange(51), x0)
    np.testing.assert_allclose(x_end, traj[-1], rtol=1e-12)
    assert t_end == pytest.approx(0.5)
