# src/dynmodels/steppers/ode/heun.py
"""
Heun (improved Euler, explicit trapezoidal) stepper implementation.

    k1 = h * f(t, x)
    k2 = h * f(t + h, x + k1)
    x_{n+1} = x_n + (k1 + k2) / 2
"""
from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np

from ..base import StepperMeta

if TYPE_CHECKING:
    from typing import Callable

__all__ = ["HeunSpec", "heun"]


def heun(f: Callable, t: float, x, h: float, **options) -> np.ndarray:
    """Advance ``x`` by one Heun step of size ``h``."""
    x = np.asarray(x, dtype=float)
    k1 = h * np.asarray(f(t, x, **options), dtype=float)
    k2 = h * np.asarray(f(t + h, x + k1, **options), dtype=float)
    return x + 0.5 * (k1 + k2)


class HeunSpec:
    """
    Heun's method (order 2, fixed-step, explicit).
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="heun",
                kind="ode",
                family="runge-kutta",
                order=2,
                stages=2,
                aliases=("improved_euler", "rk2_trapezoid"),
            )
        self.meta = meta

    def emit(self) -> Callable:
        return heun


# Auto-register on module import
def _auto_register():
    from ..registry import register
    spec = HeunSpec()
    register(spec)

_auto_register()
