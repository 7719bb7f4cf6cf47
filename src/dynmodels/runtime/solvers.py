# src/dynmodels/runtime/solvers.py
"""
Fixed-grid trajectory solvers.

``ode_solver`` drives one of the registered ODE steppers across a time grid;
``map_solver`` iterates a discrete map. Both return a 2-D ``float64`` array
with one row per grid point and one column per state component.
"""
from __future__ import annotations

from typing import Callable
import numpy as np

from dynmodels.errors import InvalidParameterError
from dynmodels.steppers.registry import resolve_stepper
from dynmodels.utils.arrays import as_count, as_state

__all__ = ["ode_solver", "map_solver", "solve_trajectory", "integrate"]


def _check_grid(t_grid) -> np.ndarray:
    t = np.asarray(t_grid, dtype=float)
    if t.ndim != 1 or t.size < 2:
        raise InvalidParameterError(f"t_grid must be 1D with at least 2 points; got shape {t.shape}")
    steps = np.diff(t)
    if not (np.all(steps > 0.0) or np.all(steps < 0.0)):
        raise InvalidParameterError("t_grid must be strictly increasing or strictly decreasing")
    return t


def ode_solver(stepper, f: Callable, t_grid, x0, **options) -> np.ndarray:
    """
    Solve ``dx/dt = f(t, x)`` on a fixed time grid.

    Args:
        stepper: One of the registered ODE steppers, given as the step
            function (``euler``, ``heun``, ``midpoint``, ``rk4``) or by name.
        f: Vector field ``f(t, x, **options) -> dx/dt``.
        t_grid: Strictly monotone times (at least 2). Spacing may vary; the
            step size is recomputed for every interval.
        x0: Initial state.
        **options: Forwarded unchanged to every ``f`` call.

    Returns:
        Array of shape ``(len(t_grid), d)`` with ``traj[0] == x0``.

    Raises:
        UnsupportedSolverError: ``stepper`` is not a registered ODE stepper.
        InvalidParameterError: malformed grid or initial state.
    """
    step = resolve_stepper(stepper, kind="ode").emit()
    t = _check_grid(t_grid)
    x = as_state(x0)

    traj = np.empty((t.size, x.size), dtype=float)
    traj[0] = x
    for i in range(t.size - 1):
        h = t[i + 1] - t[i]
        traj[i + 1] = step(f, t[i], traj[i], h, **options)
    return traj


def map_solver(f: Callable, n_steps: int, x0, **options) -> np.ndarray:
    """
    Iterate the map ``x_{n+1} = f(n, x_n)``.

    ``n`` is the 0-based iteration index. The result has ``n_steps`` rows,
    the first being ``x0``.
    """
    n_steps = as_count(n_steps, "n_steps")
    if n_steps < 1:
        raise InvalidParameterError(f"n_steps must be positive; got {n_steps}")
    step = resolve_stepper("map", kind="map").emit()
    x = as_state(x0)

    traj = np.empty((n_steps, x.size), dtype=float)
    traj[0] = x
    for n in range(n_steps - 1):
        traj[n + 1] = step(f, n, traj[n], **options)
    return traj


def solve_trajectory(
    f: Callable,
    x0,
    t_max: float,
    dt: float,
    stepper="rk4",
    **options,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Integrate from ``t = 0`` to ``t_max`` on the uniform grid ``0, dt, ...``.

    Returns:
        ``(t_grid, traj)``; the last grid point is the largest multiple of
        ``dt`` not exceeding ``t_max`` (up to rounding).
    """
    if not dt > 0.0:
        raise InvalidParameterError(f"dt must be positive; got {dt}")
    n_steps = int(np.floor(t_max / dt + 1e-9))
    t_grid = dt * np.arange(n_steps + 1, dtype=float)
    return t_grid, ode_solver(stepper, f, t_grid, x0, **options)


def integrate(
    f: Callable,
    t: float,
    x,
    duration: float,
    dt: float,
    stepper="rk4",
    **options,
) -> tuple[np.ndarray, float]:
    """
    Advance ``x`` from time ``t`` by ``duration`` using ``round(duration/dt)``
    fixed steps of size ``dt``.

    Only the end point is kept, so this is cheap to call in tight loops.

    Returns:
        ``(x_new, t_new)``
    """
    step = resolve_stepper(stepper, kind="ode").emit()
    n_steps = int(round(duration / dt))
    x_cur = np.asarray(x, dtype=float)
    t_cur = float(t)
    for _ in range(n_steps):
        x_cur = step(f, t_cur, x_cur, dt, **options)
        t_cur += dt
    return x_cur, t_cur
