# src/dynmodels/runtime/__init__.py
"""Trajectory generation on fixed time/iteration grids."""

from .solvers import ode_solver, map_solver, solve_trajectory, integrate

__all__ = ["ode_solver", "map_solver", "solve_trajectory", "integrate"]
