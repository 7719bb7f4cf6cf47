# src/dynmodels/analysis/jacobian.py
"""Finite-difference Jacobians of vector fields and maps."""
from __future__ import annotations

from typing import Callable
import numpy as np

from dynmodels.utils.arrays import as_state

__all__ = ["numerical_jacobian", "jacobian_trace"]


def numerical_jacobian(f: Callable, t: float, x, eps: float = 1e-6, **options) -> np.ndarray:
    """
    Central-difference Jacobian ``J[i, j] = d f_i / d x_j`` at ``(t, x)``.

    Costs ``2 d`` evaluations of ``f``; exact up to rounding for fields that
    are at most quadratic in ``x``.
    """
    x = as_state(x, "x")
    dim = x.size
    J = np.empty((dim, dim), dtype=float)
    for j in range(dim):
        dx = np.zeros(dim)
        dx[j] = eps
        f_plus = np.asarray(f(t, x + dx, **options), dtype=float).reshape(dim)
        f_minus = np.asarray(f(t, x - dx, **options), dtype=float).reshape(dim)
        J[:, j] = (f_plus - f_minus) / (2.0 * eps)
    return J


def jacobian_trace(f: Callable, t: float, x, eps: float = 1e-6, **options) -> float:
    """Trace of the Jacobian (local phase-space divergence of a flow)."""
    return float(np.trace(numerical_jacobian(f, t, x, eps, **options)))
