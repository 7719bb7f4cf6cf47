# src/dynmodels/steppers/ode/rk2_midpoint.py
"""
RK2 (Explicit Midpoint, 2nd-order, explicit, fixed-step) stepper implementation.

Classic fixed-step explicit midpoint method:

    k1 = f(t, x)
    k2 = f(t + h/2, x + h/2 * k1)
    x_{n+1} = x_n + h * k2

This is often called "RK2 midpoint".
"""
from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np

from ..base import StepperMeta

if TYPE_CHECKING:
    from typing import Callable

__all__ = ["RK2Spec", "midpoint"]


def midpoint(f: Callable, t: float, x, h: float, **options) -> np.ndarray:
    """Advance ``x`` by one explicit midpoint step of size ``h``."""
    x = np.asarray(x, dtype=float)
    half_h = 0.5 * h
    k1 = np.asarray(f(t, x, **options), dtype=float)
    k2 = np.asarray(f(t + half_h, x + half_h * k1, **options), dtype=float)
    return x + h * k2


class RK2Spec:
    """
    Explicit midpoint method (RK2, order 2, fixed-step, explicit).
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="rk2",
                kind="ode",
                family="runge-kutta",
                order=2,
                stages=2,
                aliases=("rk2_midpoint", "midpoint", "mean_point"),
            )
        self.meta = meta

    def emit(self) -> Callable:
        return midpoint


# Auto-register on module import
def _auto_register():
    from ..registry import register
    spec = RK2Spec()
    register(spec)

_auto_register()
